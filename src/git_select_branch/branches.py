"""Branch records and ordering."""

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol


@dataclass(frozen=True)
class BranchInfo:
    """A local branch and the time of its tip commit."""

    name: str
    commit_time: int  # committer timestamp, seconds since epoch
    is_current: bool = False


class BranchSource(Protocol):
    """What the workflow needs from a version-control backend."""

    def get_current_branch_name(self) -> Optional[str]: ...

    def list_local_branches(self) -> list[BranchInfo]: ...

    def get_commit_time(self, branch_name: str) -> int: ...

    def checkout(self, branch_name: str) -> None: ...


def sort_branches(branches: Iterable[BranchInfo]) -> list[BranchInfo]:
    """Order branches most recent first, ties broken by name."""
    return sorted(branches, key=lambda branch: (-branch.commit_time, branch.name))


def selectable_branches(branches: Iterable[BranchInfo], limit: Optional[int] = None) -> list[BranchInfo]:
    """Return the branches the user can switch to.

    Args:
        branches: All local branches, in any order
        limit: Maximum number of branches to keep, or None for all of them

    Returns:
        Sorted branches without the current one, truncated to ``limit``.
    """
    choices = [branch for branch in sort_branches(branches) if not branch.is_current]
    if limit is not None:
        choices = choices[:limit]
    return choices

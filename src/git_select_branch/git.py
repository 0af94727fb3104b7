"""Git repository operations."""

import configparser
import logging
from pathlib import Path
from typing import Optional

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.config import GitConfigParser
from git.exc import BadName, BadObject

from git_select_branch.branches import BranchInfo

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Git operation error."""


def _git_message(err: GitCommandError) -> str:
    """Extract git's own message from a failed command."""
    stderr = (err.stderr or "").strip()
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:") :].strip().strip("'")
    return stderr or str(err)


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Open the repository containing ``path``.

        Raises:
            GitError: If ``path`` is not inside a usable working tree
        """
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
        except (GitCommandError, ValueError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise GitError(f"Failed to open repository: {err}") from err
        if self.repo.bare:
            raise GitError("Cannot operate on bare repository")
        logger.debug("Opened repository at %s", self.repo.working_tree_dir)

    def config_reader(self) -> GitConfigParser:
        """Read-only view over system, global and repository config.

        Raises:
            GitError: If a config file cannot be read or parsed
        """
        try:
            reader = self.repo.config_reader()
            # Parsing is lazy; force it so broken files fail here
            reader.read()
        except (configparser.Error, OSError) as err:
            raise GitError(f"Failed to read git config: {err}") from err
        return reader

    def get_current_branch_name(self) -> Optional[str]:
        """Get current branch name, or None when HEAD is detached."""
        try:
            return self.repo.active_branch.name
        except TypeError:
            return None

    def get_commit_time(self, branch_name: str) -> int:
        """Get the committer timestamp of the branch tip."""
        try:
            return self.repo.heads[branch_name].commit.committed_date
        except IndexError as err:
            raise GitError(f"No such branch: {branch_name}") from err
        except (ValueError, BadName, BadObject, GitCommandError) as err:
            raise GitError(f"Cannot resolve branch {branch_name}: {err}") from err

    def list_local_branches(self) -> list[BranchInfo]:
        """List local branches with their tip commit time.

        Branches whose reference cannot be resolved are skipped with a warning.
        """
        current = self.get_current_branch_name()
        branches = []
        for head in self.repo.heads:
            try:
                commit_time = self.get_commit_time(head.name)
            except GitError as err:
                logger.warning("Skipping branch %s: %s", head.name, err)
                continue
            branches.append(BranchInfo(head.name, commit_time, head.name == current))
        logger.debug("Found %d local branches", len(branches))
        return branches

    def checkout(self, branch_name: str) -> None:
        """Switch HEAD and the working tree to a local branch.

        Git refuses when uncommitted changes would be overwritten; that refusal
        is raised as is, nothing is stashed or forced.
        """
        if branch_name not in self.repo.heads:
            raise GitError(f"No such branch: {branch_name}")
        try:
            self.repo.heads[branch_name].checkout()
        except GitCommandError as err:
            raise GitError(f"Failed to checkout {branch_name}: {_git_message(err)}") from err
        logger.debug("Checked out %s", branch_name)

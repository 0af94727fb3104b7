"""Test configuration and fixtures."""

from pathlib import Path
from typing import Optional

import pytest
from git import Actor, Commit, Repo
from typer.testing import CliRunner

AUTHOR = Actor("Test User", "test@example.com")
BASE_TIME = 1_700_000_000


class RepoFixture:
    """A throwaway repository with a ``main`` branch and helpers to add more."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.repo = Repo.init(path)
        self.repo.config_writer().set_value("user", "name", AUTHOR.name).release()
        self.repo.config_writer().set_value("user", "email", AUTHOR.email).release()

        readme = path / "README.md"
        readme.write_text("# Test Repository")
        self.repo.index.add(["README.md"])
        self.base = self.commit("Initial commit", BASE_TIME)
        # Whatever init.defaultBranch says, call it main
        self.repo.git.branch("-M", "main")

    def commit(self, message: str, timestamp: int, head: bool = True, parent: Optional[Commit] = None) -> Commit:
        """Commit the index with a fixed author and committer date."""
        date = f"{timestamp} +0000"
        return self.repo.index.commit(
            message,
            parent_commits=[parent] if parent is not None else None,
            head=head,
            author=AUTHOR,
            committer=AUTHOR,
            author_date=date,
            commit_date=date,
        )

    def create_branch(self, name: str, timestamp: int, files: Optional[dict[str, str]] = None) -> None:
        """Create a branch off the initial commit whose tip was committed at ``timestamp``.

        With ``files``, the tip commit writes those files; otherwise it is empty.
        """
        if not files:
            tip = self.commit(f"commit at {timestamp}", timestamp, head=False, parent=self.base)
            self.repo.create_head(name, tip)
            return

        previous = self.repo.active_branch
        branch = self.repo.create_head(name, self.base)
        branch.checkout()
        for file_name, content in files.items():
            (self.path / file_name).write_text(content)
        self.repo.index.add(list(files))
        self.commit(f"Update {name}", timestamp)
        previous.checkout()

    def write_ref(self, name: str, sha: str) -> None:
        """Point a branch at an arbitrary, possibly missing, object."""
        ref = Path(self.repo.git_dir) / "refs" / "heads" / name
        ref.parent.mkdir(parents=True, exist_ok=True)
        ref.write_text(f"{sha}\n")

    @property
    def current(self) -> str:
        """Name of the checked out branch."""
        return self.repo.active_branch.name


@pytest.fixture
def repo_fixture(tmp_path: Path) -> RepoFixture:
    """Repository with only ``main`` checked out."""
    path = tmp_path / "local"
    path.mkdir()
    return RepoFixture(path)


@pytest.fixture
def test_repo(repo_fixture: RepoFixture) -> RepoFixture:
    """Repository with a few branches committed at different times.

    Branch tips, most recent first: feature/recent, feature/middle, main, feature/old.
    ``main`` is checked out.
    """
    repo_fixture.create_branch("feature/old", BASE_TIME - 100)
    repo_fixture.create_branch("feature/middle", BASE_TIME + 100)
    repo_fixture.create_branch("feature/recent", BASE_TIME + 200)
    return repo_fixture


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()

"""Shared fixtures: an in-memory git repository and candidate factories."""

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from feature_branching.config import Config
from feature_branching.errors import GitCommandError
from feature_branching.integrator.models import Candidate

BASE_TIME = datetime(2025, 1, 1, tzinfo=UTC)


class FakeRepository:
    """In-memory stand-in for ``GitRepository``.

    Branches are lists of commit SHAs; commit messages are kept in
    ``messages``. Failures are injected through ``fail``, keyed by
    ``(operation, argument)``, e.g. ``("squash", "pr-10")``. A failed squash
    leaves the worktree dirty, like a conflicted ``git merge --squash``, and
    every later squash or commit fails until ``reset_hard`` is called.
    """

    def __init__(self, path: Path, trunk: str = "main"):
        """Initialize fake repository.

        Parameters
        ----------
        path : Path
            Directory standing in for the working copy root.
        trunk : str, optional
            Name of the initial branch (default="main").

        """
        self.path = Path(path)
        self.remote = "origin"
        self._counter = 0
        self.messages: dict[str, str] = {}
        self.branches: dict[str, list[str]] = {trunk: [self._new_commit("initial")]}
        self.current = trunk
        self.staged: str | None = None
        self.dirty = False
        self.fail: dict[tuple[str, str], str] = {}
        self.calls: list[tuple[str, ...]] = []
        self.global_config: dict[str, str] = {}
        self.added: list[str] = []
        self.pushed: dict[str, list[str]] = {}

    def _new_commit(self, message: str) -> str:
        self._counter += 1
        sha = f"{self._counter:040x}"
        self.messages[sha] = message
        return sha

    def _check(self, op: str, arg: str) -> None:
        self.calls.append((op, arg))
        if (op, arg) in self.fail:
            raise GitCommandError((op, arg), 1, self.fail[(op, arg)])

    def log(self, branch: str) -> list[str]:
        """Commit messages of ``branch``, oldest first."""
        return [self.messages[sha] for sha in self.branches[branch]]

    def configure_global(self, settings: dict[str, str]) -> None:
        for key, value in settings.items():
            self._check("config", key)
            self.global_config[key] = value

    def checkout(self, branch: str) -> None:
        self._check("checkout", branch)
        if branch not in self.branches:
            raise GitCommandError(("checkout", branch), 1, "pathspec did not match")
        self.current = branch

    def branch_exists(self, branch: str) -> bool:
        return branch in self.branches

    def delete_branch(self, branch: str) -> None:
        self._check("delete", branch)
        if branch == self.current:
            raise GitCommandError(("branch", "-D", branch), 1, "checked out")
        del self.branches[branch]

    def create_branch(self, branch: str) -> None:
        self._check("create", branch)
        self.branches[branch] = list(self.branches[self.current])
        self.current = branch

    def fetch_pull_request(self, number: int, local_branch: str) -> None:
        self._check("fetch", local_branch)

    def squash_merge(self, branch: str) -> None:
        if self.dirty:
            raise GitCommandError(("merge", "--squash", branch), 2, "unmerged files")
        try:
            self._check("squash", branch)
        except GitCommandError:
            self.dirty = True
            raise
        self.staged = branch

    def commit(self, message: str, allow_empty: bool = False) -> None:
        self._check("commit", message)
        if self.dirty:
            raise GitCommandError(("commit", "-m", message), 1, "unmerged files")
        if self.staged is None and not allow_empty:
            raise GitCommandError(("commit", "-m", message), 1, "nothing to commit")
        self.branches[self.current].append(self._new_commit(message))
        self.staged = None

    def reset_hard(self, ref: str = "HEAD") -> None:
        self._check("reset", ref)
        self.dirty = False
        self.staged = None

    def head_sha(self) -> str:
        return self.branches[self.current][-1]

    def add(self, path: str, force: bool = False) -> None:
        self._check("add", path)
        self.added.append(path)

    def push_force(self, branch: str) -> None:
        self._check("push", branch)
        self.pushed[branch] = list(self.branches[branch])


@pytest.fixture
def fake_repo(tmp_path):
    """Create an in-memory repository rooted at a temporary directory."""
    return FakeRepository(tmp_path)


@pytest.fixture
def make_candidate():
    """Build candidates; ``age`` orders them by creation time."""

    def _make(
        number: int,
        labels: tuple[str, ...] = (),
        age: int | None = None,
        title: str | None = None,
    ) -> Candidate:
        return Candidate(
            number=number,
            title=title if title is not None else f"Change {number}",
            state="open",
            created_at=BASE_TIME + timedelta(hours=number if age is None else age),
            base_ref="main",
            labels=labels,
        )

    return _make


@pytest.fixture
def config(tmp_path):
    """Create a valid configuration writing outputs under ``tmp_path``."""
    return Config(
        github_token="test-token",
        owner="octo-org",
        repo="app",
        github_output=str(tmp_path / "github_output"),
        trunk_branch="main",
        required_labels=("next-feature",),
    )

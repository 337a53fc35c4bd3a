"""Git repository handle backed by the git CLI."""

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..errors import GitCommandError

GIT_IDENTITY = {
    "user.name": "github-actions[bot]",
    "user.email": "41898282+github-actions[bot]@users.noreply.github.com",
}


@dataclass(frozen=True)
class GitResult:
    """Outcome of one git invocation.

    Attributes
    ----------
    args : tuple[str, ...]
        Arguments passed to git.
    returncode : int
        Process exit status.
    output : str
        Combined stdout and stderr.

    """

    args: tuple[str, ...]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class GitRepository:
    """Operate on a local working copy via the git CLI.

    Every operation raises ``GitCommandError`` with the captured output on
    failure, except the queries that are expected to fail (``branch_exists``).
    Arguments are always passed as a list, never through a shell, so pull
    request titles cannot inject commands.

    Parameters
    ----------
    path : str or Path, optional
        Root of the working copy (default=".").
    remote : str, optional
        Remote to fetch pull requests from and push to (default="origin").

    Attributes
    ----------
    path : Path
        Root of the working copy.
    remote : str
        Remote name.

    """

    def __init__(self, path: str | Path = ".", remote: str = "origin"):
        """Initialize repository handle.

        Parameters
        ----------
        path : str or Path, optional
            Root of the working copy (default=".").
        remote : str, optional
            Remote name (default="origin").

        """
        self.path = Path(path)
        self.remote = remote

    def run(self, *args: str, check: bool = True) -> GitResult:
        """Execute a git command in the working copy.

        Parameters
        ----------
        *args : str
            Git arguments, e.g. ``"checkout", "main"``.
        check : bool, optional
            Raise on non-zero exit (default=True).

        Returns
        -------
        GitResult
            Exit status and combined output.

        Raises
        ------
        GitCommandError
            If ``check`` is set and git exits non-zero.

        """
        # Never block on a credential prompt in CI
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"

        completed = subprocess.run(
            ["git", *args],
            cwd=self.path,
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
        result = GitResult(
            args=tuple(args),
            returncode=completed.returncode,
            output=completed.stdout or "",
        )
        if check and not result.ok:
            raise GitCommandError(result.args, result.returncode, result.output)
        return result

    def configure_global(self, settings: dict[str, str]) -> None:
        """Write ``git config --global`` entries in order."""
        for key, value in settings.items():
            self.run("config", "--global", key, value)

    def checkout(self, branch: str) -> None:
        self.run("checkout", branch)

    def branch_exists(self, branch: str) -> bool:
        """Return whether a local branch with this name exists."""
        return self.run(
            "show-ref", "--verify", "--quiet", f"refs/heads/{branch}", check=False
        ).ok

    def delete_branch(self, branch: str) -> None:
        self.run("branch", "-D", branch)

    def create_branch(self, branch: str) -> None:
        """Create (or reset) ``branch`` at HEAD and check it out."""
        self.run("checkout", "-B", branch)

    def fetch_pull_request(self, number: int, local_branch: str) -> None:
        """Fetch the head of pull request ``number`` into ``local_branch``.

        The refspec is forced so a scratch branch left over from an earlier
        run in the same clone is overwritten rather than rejected.
        """
        self.run("fetch", self.remote, f"+pull/{number}/head:{local_branch}")

    def squash_merge(self, branch: str) -> None:
        """Stage all changes of ``branch`` on top of HEAD without committing."""
        self.run("merge", "--squash", branch)

    def commit(self, message: str, allow_empty: bool = False) -> None:
        args = ["commit", "-m", message]
        if allow_empty:
            args.append("--allow-empty")
        self.run(*args)

    def reset_hard(self, ref: str = "HEAD") -> None:
        """Discard index and worktree changes, including unmerged entries."""
        self.run("reset", "--hard", ref)

    def head_sha(self) -> str:
        return self.run("rev-parse", "HEAD").output.strip()

    def add(self, path: str, force: bool = False) -> None:
        self.run("add", *(["-f"] if force else []), "--", path)

    def push_force(self, branch: str) -> None:
        self.run("push", self.remote, branch, "--force")

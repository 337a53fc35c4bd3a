"""Push the rebuilt target branch and report it as a step output."""

from pathlib import Path

from ..errors import GitCommandError, PublishError
from ..utils.logging import log_info, log_success
from .git_client import GitRepository


def write_output(output_path: str | Path, name: str, value: str) -> None:
    """Append a ``name=value`` line to a GitHub Actions output file.

    Parameters
    ----------
    output_path : str or Path
        File named by ``$GITHUB_OUTPUT``; created if missing.
    name : str
        Output name.
    value : str
        Output value; must be a single line.

    Raises
    ------
    PublishError
        If the value spans lines or the file cannot be written.

    """
    if "\n" in value or "\r" in value:
        raise PublishError(f"output '{name}' must be a single line")
    try:
        with open(output_path, "a", encoding="utf-8") as f:
            f.write(f"{name}={value}\n")
    except OSError as e:
        raise PublishError(f"write output failed: {e}") from e


class Publisher:
    """Force-push the target branch and publish its name.

    Force-pushing is safe because the target branch is always rebuilt from
    trunk plus this run's integrations; it has no history of its own.

    Parameters
    ----------
    repository : GitRepository
        Working copy holding the rebuilt target branch.
    output_path : str or Path
        Step output file.

    """

    def __init__(self, repository: GitRepository, output_path: str | Path):
        self.repository = repository
        self.output_path = output_path

    def publish(self, target_branch: str) -> None:
        """Push ``target_branch`` with ``--force`` and emit ``target_branch``.

        Raises
        ------
        PublishError
            If the push or the output write fails.

        """
        log_info(f"Force-pushing '{target_branch}' to {self.repository.remote}")
        try:
            self.repository.push_force(target_branch)
        except GitCommandError as e:
            raise PublishError(f"push failed: {e}") from e

        write_output(self.output_path, "target_branch", target_branch)
        log_success(f"Published '{target_branch}'")

"""Recreate the target branch from the tip of trunk."""

from ..errors import BranchResetError, GitCommandError
from ..utils.logging import log_info, log_success
from .git_client import GitRepository


class BranchResetter:
    """Reset the target branch to an exact copy of trunk.

    Any integration state left on the target branch by a previous run is
    discarded. Running the reset twice with an unchanged trunk yields the same
    tip as running it once.

    Parameters
    ----------
    repository : GitRepository
        Working copy to operate on.

    """

    def __init__(self, repository: GitRepository):
        self.repository = repository

    def reset(self, trunk_branch: str, target_branch: str) -> None:
        """Check out trunk, drop the old target branch and branch off again.

        Parameters
        ----------
        trunk_branch : str
            Branch to start from.
        target_branch : str
            Branch to (re)create and leave checked out.

        Raises
        ------
        BranchResetError
            If any git step fails; the message names the step.

        """
        log_info(f"Resetting '{target_branch}' from '{trunk_branch}'")

        try:
            self.repository.checkout(trunk_branch)
        except GitCommandError as e:
            raise BranchResetError(f"checkout to trunk branch failed: {e}") from e

        if self.repository.branch_exists(target_branch):
            try:
                self.repository.delete_branch(target_branch)
            except GitCommandError as e:
                raise BranchResetError(f"delete target branch failed: {e}") from e

        try:
            self.repository.create_branch(target_branch)
        except GitCommandError as e:
            raise BranchResetError(f"create target branch failed: {e}") from e

        log_success(f"'{target_branch}' now matches '{trunk_branch}'")

"""Sequential squash integration of candidates onto the target branch."""

import re
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from ..errors import GitCommandError, IntegrationError
from ..utils.logging import log_info, log_success, log_warning
from .git_client import GitRepository
from .models import (
    Candidate,
    FailureStage,
    IntegrationFailure,
    IntegrationOutcome,
    IntegrationRecord,
)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_commit_message(title: str, number: int) -> str:
    """Turn a pull request title into a single-line commit message.

    Control characters are dropped and runs of whitespace collapsed. A title
    that ends up empty falls back to ``Integrate pull request #<number>``.

    Parameters
    ----------
    title : str
        Raw pull request title.
    number : int
        Pull request number, used for the fallback message.

    Returns
    -------
    str
        Non-empty commit message.

    """
    cleaned = _CONTROL_CHARS.sub(" ", title)
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()
    return cleaned or f"Integrate pull request #{number}"


def utc_now() -> datetime:
    return datetime.now(UTC)


class IntegrationEngine:
    """Squash-integrate candidates one at a time, skipping failures.

    Each candidate moves through fetch, squash and commit. A failing step
    skips that candidate only; the worktree is restored to the last good tip
    before the next candidate is attempted, so a conflicted squash cannot leak
    into later integrations.

    Parameters
    ----------
    repository : GitRepository
        Working copy with the target branch checked out.
    clock : Callable[[], datetime], optional
        Source of completion timestamps (default: current UTC time).

    Attributes
    ----------
    repository : GitRepository
        Working copy with the target branch checked out.
    clock : Callable[[], datetime]
        Source of completion timestamps.

    """

    def __init__(
        self,
        repository: GitRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize integration engine.

        Parameters
        ----------
        repository : GitRepository
            Working copy with the target branch checked out.
        clock : Callable[[], datetime], optional
            Source of completion timestamps.

        """
        self.repository = repository
        self.clock = clock

    def integrate(self, candidates: Iterable[Candidate]) -> IntegrationOutcome:
        """Integrate candidates in the given order.

        Parameters
        ----------
        candidates : Iterable[Candidate]
            Qualifying candidates, oldest first.

        Returns
        -------
        IntegrationOutcome
            Successful records and skipped candidates, both in processing order.

        Raises
        ------
        IntegrationError
            If the worktree cannot be restored after a failed candidate.

        """
        outcome = IntegrationOutcome()
        for candidate in candidates:
            result = self.integrate_one(candidate)
            if isinstance(result, IntegrationRecord):
                outcome.successes.append(result)
            else:
                log_warning(
                    f"PR #{result.number} failed at {result.stage}: {result.message}"
                )
                outcome.failures.append(result)

        log_info(
            f"Integrated {len(outcome.successes)} pull request(s), "
            f"skipped {len(outcome.failures)}"
        )
        return outcome

    def integrate_one(
        self, candidate: Candidate
    ) -> IntegrationRecord | IntegrationFailure:
        """Fetch, squash and commit a single candidate.

        Parameters
        ----------
        candidate : Candidate
            Pull request to integrate.

        Returns
        -------
        IntegrationRecord or IntegrationFailure
            Record on success, or the failed stage and git output.

        Raises
        ------
        IntegrationError
            If cleanup after a failed squash or commit fails.

        """
        branch = candidate.scratch_branch
        log_info(f"Integrating PR #{candidate.number}: {candidate.title}")

        try:
            self.repository.fetch_pull_request(candidate.number, branch)
        except GitCommandError as e:
            return self._failure(candidate, "fetch", e)

        try:
            self.repository.squash_merge(branch)
        except GitCommandError as e:
            self._restore(candidate)
            return self._failure(candidate, "squash", e)

        try:
            self.repository.commit(
                sanitize_commit_message(candidate.title, candidate.number)
            )
        except GitCommandError as e:
            self._restore(candidate)
            return self._failure(candidate, "commit", e)

        record = IntegrationRecord(
            pr=candidate.number,
            commit=self._head_sha(),
            timestamp=self.clock(),
        )
        log_success(f"PR #{candidate.number} integrated as {record.commit[:12]}")
        return record

    def _failure(
        self, candidate: Candidate, stage: FailureStage, error: GitCommandError
    ) -> IntegrationFailure:
        return IntegrationFailure(
            number=candidate.number, stage=stage, message=str(error)
        )

    def _restore(self, candidate: Candidate) -> None:
        try:
            self.repository.reset_hard("HEAD")
        except GitCommandError as e:
            raise IntegrationError(
                f"could not clean worktree after PR #{candidate.number}: {e}"
            ) from e

    def _head_sha(self) -> str:
        try:
            return self.repository.head_sha()
        except GitCommandError as e:
            log_warning(f"Could not resolve HEAD: {e}")
            return "unknown"

"""Data models for the branch integration pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

FailureStage = Literal["fetch", "squash", "commit"]


@dataclass(frozen=True)
class Candidate:
    """Open pull request against trunk, reduced to what integration needs.

    Attributes
    ----------
    number : int
        Pull request number, unique within the repository.
    title : str
        Pull request title, used as the squash commit message.
    state : str
        Pull request state as reported by the API ("open").
    created_at : datetime
        Creation time; candidates are integrated oldest first.
    base_ref : str
        Base branch of the pull request.
    labels : tuple[str, ...]
        Label names attached to the pull request.

    """

    number: int
    title: str
    state: str
    created_at: datetime
    base_ref: str
    labels: tuple[str, ...] = ()

    @property
    def scratch_branch(self) -> str:
        """Local branch the pull request head is fetched into."""
        return f"pr-{self.number}"


@dataclass(frozen=True)
class IntegrationRecord:
    """Audit entry for one successfully integrated pull request."""

    pr: int
    commit: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the history file entry shape."""
        return {
            "pr": self.pr,
            "commit": self.commit,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class IntegrationFailure:
    """A candidate that was skipped, and the step that failed."""

    number: int
    stage: FailureStage
    message: str


@dataclass
class IntegrationOutcome:
    """Result of folding the integration engine over the candidate list.

    Attributes
    ----------
    successes : list[IntegrationRecord]
        Records in integration order.
    failures : list[IntegrationFailure]
        Skipped candidates in processing order.

    """

    successes: list[IntegrationRecord] = field(default_factory=list)
    failures: list[IntegrationFailure] = field(default_factory=list)

    @property
    def integrated_numbers(self) -> list[int]:
        return [record.pr for record in self.successes]

    @property
    def failed_numbers(self) -> list[int]:
        return [failure.number for failure in self.failures]


@dataclass(frozen=True)
class PipelineResult:
    """Summary of a completed run."""

    target_branch: str
    candidates: tuple[Candidate, ...]
    outcome: IntegrationOutcome
    history_path: str

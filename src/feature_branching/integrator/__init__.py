"""Branch integration pipeline for rolling pre-release branches."""

from .branch_resetter import BranchResetter
from .engine import IntegrationEngine, sanitize_commit_message
from .git_client import GitRepository, GitResult
from .history import HistoryRecorder
from .label_filter import filter_candidates, order_candidates
from .models import (
    Candidate,
    IntegrationFailure,
    IntegrationOutcome,
    IntegrationRecord,
    PipelineResult,
)
from .pipeline import IntegrationPipeline
from .pr_client import PullRequestClient
from .publisher import Publisher, write_output

__all__ = [
    "BranchResetter",
    "Candidate",
    "GitRepository",
    "GitResult",
    "HistoryRecorder",
    "IntegrationEngine",
    "IntegrationFailure",
    "IntegrationOutcome",
    "IntegrationPipeline",
    "IntegrationRecord",
    "PipelineResult",
    "Publisher",
    "PullRequestClient",
    "filter_candidates",
    "order_candidates",
    "sanitize_commit_message",
    "write_output",
]

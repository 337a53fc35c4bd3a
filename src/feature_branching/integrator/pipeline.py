"""Pipeline orchestrating one integration run."""

from ..config import DEFAULT_WORKSPACE, Config
from ..errors import GitCommandError, GitSetupError
from ..utils.logging import log_info
from .branch_resetter import BranchResetter
from .engine import IntegrationEngine
from .git_client import GIT_IDENTITY, GitRepository
from .history import HistoryRecorder
from .label_filter import filter_candidates, order_candidates
from .models import PipelineResult
from .pr_client import PullRequestClient
from .publisher import Publisher


def git_settings(workspace: str = DEFAULT_WORKSPACE) -> dict[str, str]:
    """Global git configuration applied before any branch work."""
    return {
        "safe.directory": workspace,
        **GIT_IDENTITY,
        "advice.addIgnoredFile": "false",
    }


class IntegrationPipeline:
    """Rebuild the target branch from trunk and the qualifying pull requests.

    Steps run strictly in order: git setup, query, filter, order, reset,
    integrate, record history, publish. Only per-candidate failures are
    recovered from; every other failure raises and ends the run.

    Parameters
    ----------
    config : Config
        Run configuration.
    client : PullRequestClient
        Source of open pull requests.
    repository : GitRepository
        Working copy to rebuild the target branch in.
    engine : IntegrationEngine, optional
        Integration engine; built on ``repository`` if omitted.
    configure_git : bool, optional
        Apply global git settings first (default=True).
    workspace : str, optional
        Directory marked as ``safe.directory`` (default="/github/workspace").

    Attributes
    ----------
    config : Config
        Run configuration.
    client : PullRequestClient
        Source of open pull requests.
    repository : GitRepository
        Working copy.
    resetter : BranchResetter
        Target branch resetter.
    engine : IntegrationEngine
        Integration engine.
    recorder : HistoryRecorder
        History recorder.
    publisher : Publisher
        Publisher for the target branch.

    """

    def __init__(
        self,
        config: Config,
        client: PullRequestClient,
        repository: GitRepository,
        engine: IntegrationEngine | None = None,
        configure_git: bool = True,
        workspace: str = DEFAULT_WORKSPACE,
    ):
        """Initialize pipeline.

        Parameters
        ----------
        config : Config
            Run configuration.
        client : PullRequestClient
            Source of open pull requests.
        repository : GitRepository
            Working copy to rebuild the target branch in.
        engine : IntegrationEngine, optional
            Integration engine; built on ``repository`` if omitted.
        configure_git : bool, optional
            Apply global git settings first (default=True).
        workspace : str, optional
            Directory marked as ``safe.directory``.

        """
        self.config = config
        self.client = client
        self.repository = repository
        self.configure_git = configure_git
        self.workspace = workspace
        self.resetter = BranchResetter(repository)
        self.engine = engine or IntegrationEngine(repository)
        self.recorder = HistoryRecorder(repository)
        self.publisher = Publisher(repository, config.github_output)

    def setup_git(self) -> None:
        """Apply global git settings.

        Raises
        ------
        GitSetupError
            If any ``git config --global`` call fails.

        """
        try:
            self.repository.configure_global(git_settings(self.workspace))
        except GitCommandError as e:
            raise GitSetupError(f"error configuring Git: {e}") from e

    def run(self) -> PipelineResult:
        """Execute the full integration run.

        Returns
        -------
        PipelineResult
            Target branch, qualifying candidates and integration outcome.

        Raises
        ------
        FeatureBranchingError
            On any fatal step (setup, query, reset, history, publish).

        """
        cfg = self.config
        print(f"\n{'#' * 70}")
        print(f"# Repository: {cfg.full_repo}")
        print(f"# Trunk: {cfg.trunk_branch} -> Target: {cfg.target_branch}")
        labels = ", ".join(cfg.required_labels) or "(any)"
        print(f"# Required labels: {labels}")
        print(f"{'#' * 70}\n")

        if self.configure_git:
            self.setup_git()

        pull_requests = self.client.list_open_pull_requests()
        candidates = order_candidates(
            filter_candidates(pull_requests, cfg.required_labels)
        )
        log_info(
            f"{len(candidates)} of {len(pull_requests)} open pull request(s) qualify"
        )
        for candidate in candidates:
            log_info(f"  #{candidate.number} {candidate.title}")

        self.resetter.reset(cfg.trunk_branch, cfg.target_branch)
        outcome = self.engine.integrate(candidates)
        history_path = self.recorder.record(outcome.successes)
        self.publisher.publish(cfg.target_branch)

        return PipelineResult(
            target_branch=cfg.target_branch,
            candidates=tuple(candidates),
            outcome=outcome,
            history_path=str(history_path),
        )

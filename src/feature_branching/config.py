"""Run configuration for feature-branching."""

from dataclasses import dataclass, field

from .errors import ConfigurationError

DEFAULT_TRUNK_BRANCH = "main"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_WORKSPACE = "/github/workspace"


def parse_labels(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated label list.

    Parameters
    ----------
    raw : str or None
        Labels as given on the command line, e.g. ``"next-feature, bug"``.

    Returns
    -------
    tuple[str, ...]
        Trimmed, non-empty label names. Empty when ``raw`` is empty, which
        means every pull request qualifies.

    """
    if not raw:
        return ()
    return tuple(label.strip() for label in raw.split(",") if label.strip())


def default_target_branch(trunk_branch: str) -> str:
    """Return the default integration branch name for a trunk branch."""
    return f"pre-{trunk_branch}"


@dataclass(frozen=True)
class Config:
    """Immutable configuration for one integration run.

    Parameters
    ----------
    github_token : str
        Token used for the pull request listing.
    owner : str
        Repository owner (user or organization).
    repo : str
        Repository name.
    github_output : str
        Path of the file receiving step outputs (``$GITHUB_OUTPUT``).
    trunk_branch : str, optional
        Protected base branch (default="main").
    target_branch : str, optional
        Integration branch. Empty means ``pre-<trunk_branch>``.
    required_labels : tuple[str, ...], optional
        Labels of which a pull request must carry at least one. Empty
        means no filtering.
    api_url : str, optional
        GitHub REST API base URL (default="https://api.github.com").

    Raises
    ------
    ConfigurationError
        If a required value is missing or the target equals the trunk.

    """

    github_token: str
    owner: str
    repo: str
    github_output: str
    trunk_branch: str = DEFAULT_TRUNK_BRANCH
    target_branch: str = ""
    required_labels: tuple[str, ...] = field(default_factory=tuple)
    api_url: str = DEFAULT_API_URL

    def __post_init__(self) -> None:
        for name in ("github_token", "owner", "repo", "github_output"):
            if not getattr(self, name):
                raise ConfigurationError(f"missing required parameter: '{name}'")
        if not self.trunk_branch:
            raise ConfigurationError("missing required parameter: 'trunk_branch'")

        # Frozen dataclass, so defaults are filled in through object.__setattr__
        if not self.target_branch:
            object.__setattr__(
                self, "target_branch", default_target_branch(self.trunk_branch)
            )
        if self.target_branch == self.trunk_branch:
            raise ConfigurationError(
                f"target branch must differ from trunk branch '{self.trunk_branch}'"
            )
        object.__setattr__(self, "required_labels", tuple(self.required_labels))

    @property
    def full_repo(self) -> str:
        """Repository in ``owner/repo`` form."""
        return f"{self.owner}/{self.repo}"

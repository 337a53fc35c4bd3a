"""Feature Branching - rebuild a pre-release branch from labeled pull requests."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("feature-branching")
except PackageNotFoundError:
    # Package not installed, use fallback
    __version__ = "0.1.0.dev"

from .config import Config, parse_labels
from .errors import FeatureBranchingError
from .integrator import (
    Candidate,
    GitRepository,
    IntegrationPipeline,
    IntegrationRecord,
    PullRequestClient,
)

__all__ = [
    "Candidate",
    "Config",
    "FeatureBranchingError",
    "GitRepository",
    "IntegrationPipeline",
    "IntegrationRecord",
    "PullRequestClient",
    "parse_labels",
    "__version__",
]

"""Exception hierarchy for feature-branching.

Every fatal condition of a run is a subclass of ``FeatureBranchingError`` so
the CLI can report it with one message and a non-zero exit. Per-candidate
failures inside the integration engine are not exceptions at this level: the
engine catches ``GitCommandError`` for the candidate and records it instead.
"""


class FeatureBranchingError(Exception):
    """Base class for all fatal errors raised by the tool."""


class ConfigurationError(FeatureBranchingError, ValueError):
    """Raised when required configuration is missing or inconsistent."""


class GitHubAPIError(FeatureBranchingError):
    """Base class for pull request listing failures."""


class GitHubTransportError(GitHubAPIError):
    """Raised when the request never produced an HTTP response."""


class GitHubStatusError(GitHubAPIError):
    """Raised when the API answered with a non-success status code.

    Parameters
    ----------
    status_code : int
        HTTP status code returned by the API.
    body : str, optional
        Truncated response body, for diagnostics.

    """

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        message = f"response API status {status_code}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)


class GitHubDecodeError(GitHubAPIError):
    """Raised when the response body is not a list of pull requests."""


class GitCommandError(FeatureBranchingError):
    """Raised when a git invocation exits non-zero.

    Parameters
    ----------
    args : tuple[str, ...]
        Arguments passed to git (without the leading ``git``).
    returncode : int
        Process exit status.
    output : str
        Combined stdout and stderr of the process.

    """

    def __init__(self, args: tuple[str, ...], returncode: int, output: str):
        self.git_args = args
        self.returncode = returncode
        self.output = output
        message = f"'git {' '.join(args)}' failed with exit code {returncode}"
        if output.strip():
            message = f"{message}\n{output.strip()}"
        super().__init__(message)


class GitSetupError(FeatureBranchingError):
    """Raised when global git configuration cannot be applied."""


class BranchResetError(FeatureBranchingError):
    """Raised when the target branch cannot be recreated from trunk."""


class IntegrationError(FeatureBranchingError):
    """Raised when the worktree cannot be restored after a failed candidate."""


class HistoryError(FeatureBranchingError):
    """Raised when the integration history cannot be written or committed."""


class PublishError(FeatureBranchingError):
    """Raised when the target branch cannot be pushed or reported."""

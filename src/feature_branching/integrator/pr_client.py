"""GitHub REST client for listing open pull requests against trunk."""

from datetime import datetime
from typing import Any

import requests

from ..config import Config
from ..errors import (
    GitHubDecodeError,
    GitHubStatusError,
    GitHubTransportError,
)
from ..utils.logging import log_info, log_warning
from .models import Candidate

USER_AGENT = "GitHubMergeBot/1.0"
REQUEST_TIMEOUT_SECONDS = 15


class PullRequestClient:
    """Fetch open pull requests for one repository and base branch.

    Issues a single, non-retried request. Results are not paginated: only the
    first page the API returns is used, and a warning is logged when the
    response announces further pages.

    Parameters
    ----------
    config : Config
        Run configuration (owner, repo, trunk branch, token, API URL).
    session : requests.Session, optional
        Session to send the request with. A new one is created if omitted.

    Attributes
    ----------
    config : Config
        Run configuration.
    session : requests.Session
        HTTP session.

    """

    def __init__(self, config: Config, session: requests.Session | None = None):
        """Initialize pull request client.

        Parameters
        ----------
        config : Config
            Run configuration.
        session : requests.Session, optional
            Session to send the request with.

        """
        self.config = config
        self.session = session or requests.Session()

    @property
    def pulls_url(self) -> str:
        base = self.config.api_url.rstrip("/")
        return f"{base}/repos/{self.config.owner}/{self.config.repo}/pulls"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self.config.github_token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }

    def list_open_pull_requests(self) -> list[Candidate]:
        """List open pull requests whose base is the trunk branch.

        Returns
        -------
        list[Candidate]
            Candidates in the order returned by the API (creation ascending).

        Raises
        ------
        GitHubTransportError
            If the request fails before a response is received.
        GitHubStatusError
            If the API answers with a status other than 200.
        GitHubDecodeError
            If the body is not a JSON array of pull request objects.

        """
        params = {
            "state": "open",
            "base": self.config.trunk_branch,
            "sort": "created",
            "direction": "asc",
        }
        log_info(
            f"Listing open pull requests for {self.config.full_repo} "
            f"against '{self.config.trunk_branch}'"
        )

        try:
            response = self.session.get(
                self.pulls_url,
                headers=self._headers(),
                params=params,
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            raise GitHubTransportError(f"request API failed: {e}") from e

        if response.status_code != 200:
            raise GitHubStatusError(response.status_code, response.text[:500])

        try:
            payload = response.json()
        except ValueError as e:
            raise GitHubDecodeError(f"response API decoding failed: {e}") from e

        if not isinstance(payload, list):
            raise GitHubDecodeError(
                f"response API decoding failed: expected a list, "
                f"got {type(payload).__name__}"
            )

        if "next" in (response.links or {}):
            log_warning(
                f"More than {len(payload)} open pull requests; "
                "only the first page is integrated"
            )

        return [parse_pull_request(raw) for raw in payload]


def parse_pull_request(raw: Any) -> Candidate:
    """Project a raw pull request object onto a ``Candidate``.

    Parameters
    ----------
    raw : Any
        One element of the API response array.

    Returns
    -------
    Candidate
        Candidate with label objects flattened to their names.

    Raises
    ------
    GitHubDecodeError
        If required fields are missing or malformed.

    """
    try:
        number = int(raw["number"])
        if number <= 0:
            raise ValueError(f"invalid pull request number {number}")
        created_at = datetime.fromisoformat(str(raw["created_at"]))
        labels = tuple(str(label["name"]) for label in raw.get("labels") or [])
        return Candidate(
            number=number,
            title=str(raw.get("title") or ""),
            state=str(raw.get("state") or ""),
            created_at=created_at,
            base_ref=str((raw.get("base") or {}).get("ref", "")),
            labels=labels,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise GitHubDecodeError(f"response API decoding failed: {e!r}") from e

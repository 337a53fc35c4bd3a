"""Persist the run's integration history to the target branch."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..errors import GitCommandError, HistoryError
from ..utils.logging import log_success
from .git_client import GitRepository
from .models import IntegrationRecord

HISTORY_FILE = ".ref-history"
HISTORY_VERSION = 1
HISTORY_COMMIT_MESSAGE = "chore: update ref-history"


def build_history(records: Sequence[IntegrationRecord]) -> dict[str, Any]:
    """Build the history document for a list of records."""
    return {
        "version": HISTORY_VERSION,
        "merges": [record.to_dict() for record in records],
    }


class HistoryRecorder:
    """Write ``.ref-history`` and commit it on the target branch.

    The file is rewritten on every run and only ever holds the records of
    that run. Earlier runs remain visible through the file's git history.

    Parameters
    ----------
    repository : GitRepository
        Working copy with the target branch checked out.
    filename : str, optional
        Path of the history file relative to the repository root
        (default=".ref-history").

    """

    def __init__(self, repository: GitRepository, filename: str = HISTORY_FILE):
        self.repository = repository
        self.filename = filename

    @property
    def path(self) -> Path:
        return self.repository.path / self.filename

    def record(self, records: Sequence[IntegrationRecord]) -> Path:
        """Serialize, stage and commit the history file.

        Parameters
        ----------
        records : Sequence[IntegrationRecord]
            Records in integration order; may be empty.

        Returns
        -------
        Path
            Location of the written file.

        Raises
        ------
        HistoryError
            If the file cannot be written or the commit fails.

        """
        data = json.dumps(build_history(records), indent=2) + "\n"

        try:
            self.path.write_text(data, encoding="utf-8")
        except OSError as e:
            raise HistoryError(f"file write failed: {e}") from e

        try:
            # Forced add: a .gitignore entry must not drop the audit trail
            self.repository.add(self.filename, force=True)
            self.repository.commit(HISTORY_COMMIT_MESSAGE, allow_empty=True)
        except GitCommandError as e:
            raise HistoryError(f"history commit failed: {e}") from e

        log_success(f"Recorded {len(records)} integration(s) in {self.filename}")
        return self.path

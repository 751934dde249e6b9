"""Persisted record of Toggl entries already synchronized to Asana."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from toggl_asana_sync.exceptions import LedgerError
from toggl_asana_sync.utils.storage import JsonFileStore

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


class LedgerRecord(BaseModel):
    """Sync outcome of one Toggl time entry."""

    synced_at: str = Field(default_factory=_utc_now_iso)
    asana_task_gid: str
    duration_minutes: int
    entered_on: str
    already_existed: bool = False
    user_id: str | None = None

    def to_json_dict(self) -> dict[str, object]:
        """Serialize, leaving out the optional fields that are unset."""
        data = self.model_dump(exclude_none=True)
        if not self.already_existed:
            data.pop("already_existed")
        return data


class SyncLedger:
    """Mapping of Toggl entry ID to its sync record.

    Records are kept in memory during a run and written in one go by
    :meth:`persist`.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the ledger.

        Args:
            path: Location of the ledger JSON file.
        """
        self.store = JsonFileStore(path)
        self._records: dict[str, LedgerRecord] = {}

    @property
    def path(self) -> Path:
        return self.store.path

    def load(self) -> dict[str, LedgerRecord]:
        """Read the persisted ledger, replacing the in-memory state.

        Returns:
            Loaded records; empty on the first run.

        Raises:
            LedgerError: If the ledger file cannot be read or parsed.
        """
        if not self.store.exists():
            logger.info(f"No ledger at {self.path}, starting fresh")
            self._records = {}
            return self._records

        try:
            raw = self.store.load()
            self._records = {
                str(entry_id): LedgerRecord(**record) for entry_id, record in raw.items()
            }
        except (OSError, ValueError, TypeError, ValidationError) as e:
            raise LedgerError(f"Could not read ledger {self.path}: {e}") from e

        logger.info(f"Loaded {len(self._records)} synced entries from {self.path}")
        return self._records

    def is_synced(self, entry_id: str) -> bool:
        """Check whether an entry has already been processed."""
        return entry_id in self._records

    def get(self, entry_id: str) -> LedgerRecord | None:
        return self._records.get(entry_id)

    def record(self, entry_id: str, record: LedgerRecord) -> None:
        """Add or replace the record for an entry. Not written until persist()."""
        self._records[entry_id] = record

    def persist(self) -> None:
        """Overwrite the ledger file with every record.

        Raises:
            LedgerError: If the file cannot be written.
        """
        data = {entry_id: record.to_json_dict() for entry_id, record in self._records.items()}
        try:
            self.store.save(data)
        except OSError as e:
            raise LedgerError(f"Could not write ledger {self.path}: {e}") from e
        logger.info(f"Saved {len(self._records)} synced entries to {self.path}")

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._records

    def __len__(self) -> int:
        return len(self._records)

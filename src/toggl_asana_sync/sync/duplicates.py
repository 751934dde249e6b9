"""Detection of time entries already present in Asana."""

import logging

import httpx
from pydantic import ValidationError

from toggl_asana_sync.asana import AsanaClient, AsanaTimeTrackingEntry
from toggl_asana_sync.exceptions import RemoteFetchError
from toggl_asana_sync.sync.cache import RunCache
from toggl_asana_sync.toggl import TimeEntry

logger = logging.getLogger(__name__)


class DuplicateDetector:
    """Finds Asana time tracking entries matching a Toggl entry."""

    def __init__(
        self,
        asana_client: AsanaClient,
        cache: RunCache[str, list[AsanaTimeTrackingEntry]],
    ) -> None:
        """Initialize duplicate detector.

        Args:
            asana_client: Asana API client.
            cache: Run-scoped cache keyed by Asana task gid.
        """
        self.asana = asana_client
        self.cache = cache

    def existing_entries(self, asana_task_gid: str) -> list[AsanaTimeTrackingEntry]:
        """Get the time tracking entries already on an Asana task.

        A failed lookup is logged and treated as "no existing entries".

        Args:
            asana_task_gid: Asana task gid.

        Returns:
            Existing entries, or an empty list if they could not be fetched.
        """
        try:
            return self.cache.get_or_fetch(
                asana_task_gid,
                lambda: self.asana.get_time_tracking_entries(asana_task_gid),
            )
        except (RemoteFetchError, httpx.HTTPError, ValidationError, ValueError) as e:
            logger.warning(f"Could not fetch existing Asana entries for task {asana_task_gid}: {e}")
            return []

    @staticmethod
    def is_duplicate(entry: TimeEntry, existing: list[AsanaTimeTrackingEntry]) -> bool:
        """Check whether an Asana entry with the same date and minutes exists.

        Args:
            entry: Toggl time entry.
            existing: Entries already on the Asana task.

        Returns:
            True if an exact date and duration match exists.
        """
        return DuplicateDetector.find_duplicate(entry, existing) is not None

    @staticmethod
    def find_duplicate(
        entry: TimeEntry, existing: list[AsanaTimeTrackingEntry]
    ) -> AsanaTimeTrackingEntry | None:
        """Return the first Asana entry with the same date and minutes, if any."""
        for remote in existing:
            if (
                remote.entered_on == entry.entered_on
                and remote.duration_minutes == entry.duration_minutes
            ):
                return remote
        return None

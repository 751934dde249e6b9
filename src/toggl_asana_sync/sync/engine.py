"""Sync engine for synchronizing Toggl time entries to Asana."""

import logging
from datetime import date

from toggl_asana_sync.asana import AsanaClient, AsanaTimeTrackingEntry
from toggl_asana_sync.exceptions import MalformedEntryError
from toggl_asana_sync.sync.cache import RunCache
from toggl_asana_sync.sync.duplicates import DuplicateDetector
from toggl_asana_sync.sync.grouping import group_by_task
from toggl_asana_sync.sync.ledger import LedgerRecord, SyncLedger
from toggl_asana_sync.sync.resolver import TaskResolver
from toggl_asana_sync.toggl import LinkedTask, TimeEntry, TogglClient

logger = logging.getLogger(__name__)


class SyncResult:
    """Results from a sync run, counted per Toggl task."""

    def __init__(self) -> None:
        """Initialize sync result."""
        self.tasks_synced = 0
        self.tasks_already_synced = 0
        self.tasks_skipped = 0
        self.tasks_failed = 0
        self.entries_created = 0
        self.entries_existing = 0
        self.errors: list[str] = []

    def add_synced(self) -> None:
        """Record a task whose new entries were all processed."""
        self.tasks_synced += 1

    def add_already_synced(self) -> None:
        """Record a task with no new entries."""
        self.tasks_already_synced += 1

    def add_skip(self) -> None:
        """Record a task not linked to Asana."""
        self.tasks_skipped += 1

    def add_failure(self, task_id: str, error: str) -> None:
        """Record a task that failed."""
        self.tasks_failed += 1
        self.errors.append(f"Task {task_id}: {error}")

    def __str__(self) -> str:
        """String representation of results."""
        return (
            f"Synced: {self.tasks_synced}, "
            f"Already synced: {self.tasks_already_synced}, "
            f"Skipped: {self.tasks_skipped}, "
            f"Failed: {self.tasks_failed}"
        )


class SyncEngine:
    """Main synchronization engine."""

    def __init__(
        self,
        toggl_client: TogglClient,
        asana_client: AsanaClient,
        ledger: SyncLedger,
    ) -> None:
        """Initialize sync engine.

        Args:
            toggl_client: Toggl API client.
            asana_client: Asana API client.
            ledger: Ledger of already synchronized entries.
        """
        self.toggl = toggl_client
        self.asana = asana_client
        self.ledger = ledger

    def sync(
        self,
        start_date: date,
        end_date: date,
        all_users: bool = False,
        dry_run: bool = False,
    ) -> SyncResult:
        """Synchronize Toggl time entries in a date range to Asana.

        Errors while processing one task are recorded and do not stop the
        run. Failing to load the ledger or to list the Toggl entries aborts it.

        Args:
            start_date: First day to sync (inclusive).
            end_date: Last day to sync (inclusive).
            all_users: Sync entries of every workspace member.
            dry_run: If True, only log changes without making them.

        Returns:
            Sync results.

        Raises:
            LedgerError: If the ledger cannot be read or written.
            RemoteFetchError: If the Toggl entries cannot be listed.
        """
        result = SyncResult()
        logger.info(f"Syncing Toggl -> Asana ({start_date} to {end_date})")

        self.ledger.load()
        entries = self.toggl.get_time_entries(start_date, end_date, all_users=all_users)
        task_groups = group_by_task(entries)

        resolver = TaskResolver(self.toggl, RunCache[str, LinkedTask]())
        detector = DuplicateDetector(self.asana, RunCache[str, list[AsanaTimeTrackingEntry]]())

        for task_id, task_entries in task_groups.items():
            try:
                self._sync_task(
                    task_id=task_id,
                    entries=task_entries,
                    resolver=resolver,
                    detector=detector,
                    result=result,
                    dry_run=dry_run,
                )
            except Exception as e:
                logger.error(f"Error processing task {task_id}: {e}")
                result.add_failure(task_id, str(e))

        if not dry_run:
            self.ledger.persist()

        logger.info(f"Sync complete: {result}")
        return result

    def _sync_task(
        self,
        task_id: str,
        entries: list[TimeEntry],
        resolver: TaskResolver,
        detector: DuplicateDetector,
        result: SyncResult,
        dry_run: bool = False,
    ) -> None:
        """Sync the entries of one Toggl task to its Asana task.

        Args:
            task_id: Toggl task ID.
            entries: Entries of the task, in input order.
            resolver: Task resolver for this run.
            detector: Duplicate detector for this run.
            result: Sync result object.
            dry_run: If True, don't create entries or update the ledger.
        """
        project_id = next((e.project_id for e in entries if e.project_id), None)
        if project_id is None:
            raise MalformedEntryError(f"Entries of task {task_id} have no project")

        task = resolver.resolve(project_id, task_id)

        if not task.is_asana:
            logger.info(f"Skipping non-Asana task: {task.name!r}")
            result.add_skip()
            return

        asana_task_gid = task.asana_task_gid
        new_entries = [e for e in entries if not self.ledger.is_synced(e.entry_id)]

        if not new_entries:
            logger.info(f"Task {task.name!r}: all {len(entries)} entries already synced")
            result.add_already_synced()
            return

        total_minutes = round(sum(e.duration_seconds for e in new_entries) / 60)
        logger.info(
            f"Task {task.name!r} (Asana GID {asana_task_gid}): "
            f"{len(new_entries)} new of {len(entries)} entries, "
            f"{total_minutes} minutes ({total_minutes / 60:.2f} hours)"
        )

        # Each Asana entry accounts for at most one Toggl entry
        unmatched = list(detector.existing_entries(asana_task_gid))

        for entry in new_entries:
            duration_minutes = entry.duration_minutes
            entered_on = entry.entered_on

            match = detector.find_duplicate(entry, unmatched)
            if match is not None:
                unmatched.remove(match)
                logger.info(f"Already in Asana: {duration_minutes} min on {entered_on}")
                result.entries_existing += 1
                if not dry_run:
                    self.ledger.record(
                        entry.entry_id,
                        LedgerRecord(
                            asana_task_gid=asana_task_gid,
                            duration_minutes=duration_minutes,
                            entered_on=entered_on,
                            already_existed=True,
                            user_id=entry.user_id,
                        ),
                    )
                continue

            if dry_run:
                logger.info(f"[DRY RUN] Would sync {duration_minutes} min on {entered_on}")
                result.entries_created += 1
                continue

            self.asana.create_time_tracking_entry(asana_task_gid, duration_minutes, entered_on)
            result.entries_created += 1
            self.ledger.record(
                entry.entry_id,
                LedgerRecord(
                    asana_task_gid=asana_task_gid,
                    duration_minutes=duration_minutes,
                    entered_on=entered_on,
                    user_id=entry.user_id,
                ),
            )
            logger.info(f"Synced {duration_minutes} min on {entered_on}")

        result.add_synced()

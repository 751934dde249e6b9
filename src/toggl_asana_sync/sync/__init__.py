"""Synchronization engine for Toggl time entries."""

from toggl_asana_sync.sync.cache import RunCache
from toggl_asana_sync.sync.duplicates import DuplicateDetector
from toggl_asana_sync.sync.engine import SyncEngine, SyncResult
from toggl_asana_sync.sync.grouping import group_by_task
from toggl_asana_sync.sync.ledger import LedgerRecord, SyncLedger
from toggl_asana_sync.sync.resolver import TaskResolver

__all__ = [
    "DuplicateDetector",
    "LedgerRecord",
    "RunCache",
    "SyncEngine",
    "SyncLedger",
    "SyncResult",
    "TaskResolver",
    "group_by_task",
]

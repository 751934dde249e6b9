"""Toggl Track API integration."""

from toggl_asana_sync.toggl.client import TogglClient
from toggl_asana_sync.toggl.models import (
    LinkedTask,
    TimeEntry,
    TogglRawEntry,
    flatten_report_groups,
    normalize_entry,
)

__all__ = [
    "TogglClient",
    "LinkedTask",
    "TimeEntry",
    "TogglRawEntry",
    "flatten_report_groups",
    "normalize_entry",
]

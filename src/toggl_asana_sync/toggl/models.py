"""Pydantic models for Toggl Track API responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from toggl_asana_sync.exceptions import MalformedEntryError

ASANA_PROVIDER = "asana"

# Group-level attributes of a Reports API row copied onto every leaf entry.
GROUP_FIELDS = ("task_id", "project_id", "user_id", "description", "billable")


class TogglRawEntry(BaseModel):
    """Time entry as returned by either Toggl endpoint.

    The per-user endpoint reports ``duration``; flattened Reports API rows
    report ``seconds``. Both are optional here and resolved by
    :func:`normalize_entry`.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | str
    task_id: int | str | None = None
    project_id: int | str | None = None
    user_id: int | str | None = None
    start: str
    seconds: int | None = None
    duration: int | None = None
    description: str | None = None
    billable: bool | None = None


class TimeEntry(BaseModel):
    """Canonical time entry used by the sync engine."""

    entry_id: str
    task_id: str | None = None
    project_id: str | None = None
    user_id: str | None = None
    start: str
    duration_seconds: int
    description: str | None = None
    billable: bool = False

    @property
    def entered_on(self) -> str:
        """Calendar date of the entry (YYYY-MM-DD), taken from the raw start timestamp."""
        return self.start.split("T")[0]

    @property
    def duration_minutes(self) -> int:
        """Duration rounded to whole minutes."""
        return round(self.duration_seconds / 60)


class LinkedTask(BaseModel):
    """Toggl task with its external integration link."""

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    name: str = ""
    integration_provider: str | None = None
    integration_ext_id: int | str | None = None

    @model_validator(mode="after")
    def _require_asana_gid(self) -> "LinkedTask":
        if self.is_asana and not self.integration_ext_id:
            raise ValueError(f"Asana-linked task {self.name!r} has no integration_ext_id")
        return self

    @property
    def is_asana(self) -> bool:
        """Whether the task is linked to an Asana task."""
        return (self.integration_provider or "").lower() == ASANA_PROVIDER

    @property
    def asana_task_gid(self) -> str | None:
        """Gid of the linked Asana task, if any."""
        return _optional_str(self.integration_ext_id) if self.is_asana else None


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def normalize_entry(raw: TogglRawEntry) -> TimeEntry:
    """Convert a raw Toggl record into a canonical time entry.

    Args:
        raw: Record from either Toggl endpoint.

    Returns:
        Canonical time entry.

    Raises:
        MalformedEntryError: If the record has no duration field, or is a
            running timer (negative duration).
    """
    if raw.seconds is not None:
        seconds = raw.seconds
    elif raw.duration is not None:
        seconds = raw.duration
    else:
        raise MalformedEntryError(f"Time entry {raw.id} has neither 'seconds' nor 'duration'")

    if seconds < 0:
        raise MalformedEntryError(f"Time entry {raw.id} is still running")

    return TimeEntry(
        entry_id=str(raw.id),
        task_id=_optional_str(raw.task_id),
        project_id=_optional_str(raw.project_id),
        user_id=_optional_str(raw.user_id),
        start=raw.start,
        duration_seconds=seconds,
        description=raw.description,
        billable=bool(raw.billable),
    )


def flatten_report_groups(groups: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten grouped Reports API rows into one record per time entry.

    Reports API v3 returns rows such as::

        {"task_id": 1, "project_id": 2, "user_id": 3, "description": "...",
         "billable": false, "time_entries": [{"id": 9, "seconds": 3600, "start": "..."}]}

    Duration and start live on the leaves, task linkage on the group, so each
    leaf gets the group attributes copied onto it.

    Args:
        groups: Grouped rows.

    Returns:
        Flat list of entry records.
    """
    flat_entries = []
    for group in groups:
        group_info = {field: group[field] for field in GROUP_FIELDS if field in group}
        for entry in group.get("time_entries") or []:
            flat_entries.append({**entry, **group_info})
    return flat_entries

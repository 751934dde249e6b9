"""Grouping of time entries by Toggl task."""

from toggl_asana_sync.toggl.models import TimeEntry


def group_by_task(entries: list[TimeEntry]) -> dict[str, list[TimeEntry]]:
    """Group entries by task ID, preserving the order entries were received in.

    Args:
        entries: Time entries with a task ID.

    Returns:
        Mapping of task ID to its entries.
    """
    groups: dict[str, list[TimeEntry]] = {}
    for entry in entries:
        if entry.task_id is None:
            continue
        groups.setdefault(entry.task_id, []).append(entry)
    return groups

"""Pytest configuration and fixtures."""

import json
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from toggl_asana_sync.asana import AsanaClient, AsanaTimeTrackingEntry
from toggl_asana_sync.sync import SyncLedger
from toggl_asana_sync.toggl import LinkedTask, TimeEntry, TogglClient


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def ledger_path(temp_dir: Path) -> Path:
    """Path of a ledger file that does not exist yet."""
    return temp_dir / "synced-entries.json"


@pytest.fixture
def ledger(ledger_path: Path) -> SyncLedger:
    """Create a ledger backed by a temporary file."""
    return SyncLedger(ledger_path)


@pytest.fixture
def make_entry() -> Callable[..., TimeEntry]:
    """Factory for canonical time entries."""

    def _make(
        entry_id: str,
        task_id: str | None = "task_1",
        duration_seconds: int = 3600,
        start: str = "2026-02-01T10:00:00Z",
        project_id: str = "project_1",
        user_id: str | None = None,
    ) -> TimeEntry:
        return TimeEntry(
            entry_id=entry_id,
            task_id=task_id,
            project_id=project_id,
            user_id=user_id,
            start=start,
            duration_seconds=duration_seconds,
        )

    return _make


@pytest.fixture
def asana_task() -> LinkedTask:
    """Toggl task linked to an Asana task."""
    return LinkedTask(
        id=1,
        name="Write report",
        integration_provider="asana",
        integration_ext_id="1200000000000001",
    )


@pytest.fixture
def mock_toggl() -> MagicMock:
    """Mock Toggl client returning no entries."""
    client = MagicMock(spec=TogglClient)
    client.get_time_entries.return_value = []
    return client


@pytest.fixture
def mock_asana() -> MagicMock:
    """Mock Asana client with no existing entries."""
    client = MagicMock(spec=AsanaClient)
    client.get_time_tracking_entries.return_value = []
    client.create_time_tracking_entry.return_value = {"gid": "new"}
    return client


@pytest.fixture
def existing_entry() -> AsanaTimeTrackingEntry:
    """Asana entry matching a one hour Toggl entry on 2026-02-01."""
    return AsanaTimeTrackingEntry(gid="99", entered_on="2026-02-01", duration_minutes=60)


def json_response(data: Any, status_code: int = 200, headers: dict[str, str] | None = None) -> httpx.Response:
    """Build an httpx response with a JSON body."""
    return httpx.Response(
        status_code,
        content=json.dumps(data).encode(),
        headers={"Content-Type": "application/json", **(headers or {})},
    )

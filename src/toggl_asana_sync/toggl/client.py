"""Toggl Track API client."""

import base64
import logging
from datetime import date, timedelta
from typing import Any

import httpx
from pydantic import ValidationError

from toggl_asana_sync.exceptions import MalformedEntryError, RemoteFetchError
from toggl_asana_sync.toggl.models import (
    LinkedTask,
    TimeEntry,
    TogglRawEntry,
    flatten_report_groups,
    normalize_entry,
)

logger = logging.getLogger(__name__)


class TogglClient:
    """Client for Toggl Track API v9 and Reports API v3."""

    BASE_URL = "https://api.track.toggl.com/api/v9"
    REPORTS_URL = "https://api.track.toggl.com/reports/api/v3"
    REPORT_PAGE_SIZE = 1000

    def __init__(
        self,
        api_token: str,
        workspace_id: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Toggl client.

        Args:
            api_token: Toggl API token.
            workspace_id: Toggl workspace ID.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).

        Raises:
            ValueError: If api_token or workspace_id is empty.
        """
        if not api_token:
            raise ValueError("Toggl API token not provided")
        if not workspace_id:
            raise ValueError("Toggl workspace ID not provided")

        self.workspace_id = workspace_id
        credentials = base64.b64encode(f"{api_token}:api_token".encode()).decode()

        self.client = httpx.Client(
            headers={
                "Authorization": f"Basic {credentials}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = self.client.request(method, url, **kwargs)
        if not response.is_success:
            raise RemoteFetchError("Toggl", response.status_code, response.text)
        return response

    def get_my_time_entries(self, start_date: date, end_date: date) -> list[dict[str, Any]]:
        """Get the current user's raw time entries.

        Args:
            start_date: First day of the window (inclusive).
            end_date: Last day of the window (inclusive).

        Returns:
            Raw entry records.

        Raises:
            RemoteFetchError: If the API returns a non-success response.
        """
        # Toggl treats end_date as exclusive
        params = {
            "start_date": start_date.isoformat(),
            "end_date": (end_date + timedelta(days=1)).isoformat(),
        }
        response = self._request("GET", f"{self.BASE_URL}/me/time_entries", params=params)
        return response.json() or []

    def get_workspace_time_entries(self, start_date: date, end_date: date) -> list[dict[str, Any]]:
        """Get raw time entries of all workspace members from the Reports API.

        Follows the ``X-Next-Row-Number`` header until every page is read and
        flattens the grouped rows.

        Args:
            start_date: First day of the window (inclusive).
            end_date: Last day of the window (inclusive).

        Returns:
            Flattened raw entry records.

        Raises:
            RemoteFetchError: If the API returns a non-success response.
        """
        url = f"{self.REPORTS_URL}/workspace/{self.workspace_id}/search/time_entries"
        payload: dict[str, Any] = {
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "page_size": self.REPORT_PAGE_SIZE,
        }

        groups: list[dict[str, Any]] = []
        while True:
            response = self._request("POST", url, json=payload)
            page = response.json() or []
            groups.extend(page)

            next_row = response.headers.get("X-Next-Row-Number")
            if not next_row or not page:
                break
            payload["first_row_number"] = int(next_row)
            logger.debug(f"Fetching next report page from row {next_row}")

        return flatten_report_groups(groups)

    def get_time_entries(
        self,
        start_date: date,
        end_date: date,
        all_users: bool = False,
    ) -> list[TimeEntry]:
        """Get canonical time entries linked to a Toggl task.

        Malformed records are logged and excluded; entries without a task
        cannot be synced and are filtered out.

        Args:
            start_date: First day of the window (inclusive).
            end_date: Last day of the window (inclusive).
            all_users: Fetch entries of every workspace member instead of
                only the current user.

        Returns:
            Time entries with a task ID, in the order received.

        Raises:
            RemoteFetchError: If the API returns a non-success response.
        """
        if all_users:
            records = self.get_workspace_time_entries(start_date, end_date)
        else:
            records = self.get_my_time_entries(start_date, end_date)

        logger.info(f"Found {len(records)} total entries")

        entries = []
        for record in records:
            try:
                entry = normalize_entry(TogglRawEntry(**record))
            except (MalformedEntryError, ValidationError) as e:
                logger.warning(f"Skipping malformed time entry {record.get('id')}: {e}")
                continue
            if entry.task_id is None:
                continue
            entries.append(entry)

        logger.info(f"{len(entries)} entries have tasks assigned")
        return entries

    def get_task(self, project_id: str, task_id: str) -> LinkedTask:
        """Get task details including the integration link.

        Args:
            project_id: Toggl project ID.
            task_id: Toggl task ID.

        Returns:
            Task with its integration provider and external ID.

        Raises:
            RemoteFetchError: If the API returns a non-success response.
        """
        response = self._request(
            "GET",
            f"{self.BASE_URL}/workspaces/{self.workspace_id}/projects/{project_id}/tasks/{task_id}",
        )
        return LinkedTask(**response.json())

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> "TogglClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

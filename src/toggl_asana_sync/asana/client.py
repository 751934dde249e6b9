"""Asana API client."""

import logging
from typing import Any

import httpx

from toggl_asana_sync.asana.models import AsanaTimeTrackingEntry
from toggl_asana_sync.exceptions import RemoteFetchError

logger = logging.getLogger(__name__)


class AsanaClient:
    """Client for Asana API."""

    BASE_URL = "https://app.asana.com/api/1.0"
    PAGE_LIMIT = 100

    def __init__(
        self,
        token: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Asana client.

        Args:
            token: Asana personal access token.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).

        Raises:
            ValueError: If token is empty.
        """
        if not token:
            raise ValueError("Asana token not provided")

        self.client = httpx.Client(
            base_url=self.BASE_URL,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = self.client.request(method, url, **kwargs)
        if not response.is_success:
            raise RemoteFetchError("Asana", response.status_code, response.text)
        return response

    def get_time_tracking_entries(self, task_gid: str) -> list[AsanaTimeTrackingEntry]:
        """Get all time tracking entries of a task.

        Args:
            task_gid: Asana task gid.

        Returns:
            Time tracking entries, across all result pages.

        Raises:
            RemoteFetchError: If the API returns a non-success response.
        """
        params: dict[str, Any] = {
            "opt_fields": "entered_on,duration_minutes",
            "limit": self.PAGE_LIMIT,
        }

        entries = []
        while True:
            response = self._request(
                "GET",
                f"/tasks/{task_gid}/time_tracking_entries",
                params=params,
            )
            body = response.json()
            for item in body.get("data", []):
                entries.append(AsanaTimeTrackingEntry(**item))

            next_page = body.get("next_page") or {}
            if not next_page.get("offset"):
                break
            params["offset"] = next_page["offset"]

        return entries

    def create_time_tracking_entry(
        self,
        task_gid: str,
        duration_minutes: int,
        entered_on: str,
    ) -> dict[str, Any]:
        """Create a time tracking entry on a task.

        Args:
            task_gid: Asana task gid.
            duration_minutes: Tracked time in minutes.
            entered_on: Date the time was tracked (YYYY-MM-DD).

        Returns:
            Created entry data.

        Raises:
            RemoteFetchError: If the API returns a non-success response.
        """
        payload = {
            "data": {
                "duration_minutes": duration_minutes,
                "entered_on": entered_on,
            }
        }
        response = self._request("POST", f"/tasks/{task_gid}/time_tracking_entries", json=payload)
        return response.json().get("data", {})

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> "AsanaClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

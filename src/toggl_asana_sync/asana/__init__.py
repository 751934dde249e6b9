"""Asana API integration."""

from toggl_asana_sync.asana.client import AsanaClient
from toggl_asana_sync.asana.models import AsanaTimeTrackingEntry

__all__ = ["AsanaClient", "AsanaTimeTrackingEntry"]

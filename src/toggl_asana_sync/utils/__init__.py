"""Utility modules for the Toggl to Asana synchronizer."""

from toggl_asana_sync.utils.logging import get_logger, setup_logging
from toggl_asana_sync.utils.storage import JsonFileStore

__all__ = ["get_logger", "setup_logging", "JsonFileStore"]

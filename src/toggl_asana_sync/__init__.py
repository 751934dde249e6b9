"""Synchronize Toggl Track time entries to Asana time tracking."""

__version__ = "0.1.0"

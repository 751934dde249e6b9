"""Exceptions raised by the Toggl to Asana synchronizer."""


class SyncError(Exception):
    """Base class for synchronizer errors."""


class ConfigurationError(SyncError):
    """Required configuration is missing or invalid."""


class RemoteFetchError(SyncError):
    """A remote API call returned a non-success response."""

    def __init__(self, service: str, status_code: int, body: str) -> None:
        """Initialize remote fetch error.

        Args:
            service: Name of the remote service ("Toggl" or "Asana").
            status_code: HTTP status code of the response.
            body: Response body text.
        """
        super().__init__(f"{service} API error: {status_code} {body}")
        self.service = service
        self.status_code = status_code
        self.body = body


class MalformedEntryError(SyncError, ValueError):
    """A time entry record cannot be normalized."""


class LedgerError(SyncError):
    """The sync ledger cannot be read or written."""

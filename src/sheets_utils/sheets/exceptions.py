"""Google Sheets client exceptions."""

from __future__ import annotations


class SheetsError(Exception):
    """Base exception for spreadsheet client errors."""


class ConfigurationError(SheetsError):
    """Spreadsheet ID, sheet name or a required argument is missing."""


class NotFoundError(SheetsError):
    """A sheet or a matching row does not exist."""


class AuthenticationError(SheetsError):
    """Credentials could not be loaded or the API handle could not be built."""


class RemoteError(SheetsError):
    """Raised when the Sheets API rejects or fails a request."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)

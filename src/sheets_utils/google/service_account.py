"""Google Service Account authentication.

Service accounts are used for server-to-server authentication without user interaction.
The spreadsheet must be shared with the service account email before the
account can read or modify it.

Example:
    >>> with open("service_account_key.json", "rb") as f:
    ...     auth = GoogleServiceAccount(f.read(), scopes=["sheets"])
    >>> sheets_service = auth.build_service("sheets", "v4")
"""

import json
import logging
from pathlib import Path
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build

from sheets_utils.google.exceptions import (
    CredentialsNotFoundError,
    GoogleAuthError,
    InvalidKeyError,
)

logger = logging.getLogger(__name__)


# Google OAuth scopes used by the spreadsheet client
SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets_readonly": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "drive_file": "https://www.googleapis.com/auth/drive.file",
}


class GoogleServiceAccount:
    """Google Service Account authentication.

    Builds credentials from a service account JSON key held in memory.
    No user interaction required.
    """

    def __init__(
        self,
        key_data: bytes | str | dict[str, Any],
        scopes: list[str] | None = None,
    ):
        """Initialize service account authentication.

        Args:
            key_data: Service account JSON key, raw (bytes or str) or already parsed.
            scopes: List of scope names (e.g., ["sheets"]) or full URLs.
                   If None, defaults to ["sheets"].

        Raises:
            InvalidKeyError: If the key is not a valid service account key.
        """
        # Resolve scope names to full URLs
        self.scopes = self._resolve_scopes(scopes or ["sheets"])

        if isinstance(key_data, dict):
            info = key_data
        else:
            if not key_data:
                raise InvalidKeyError("Service account key is empty")
            try:
                info = json.loads(key_data)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise InvalidKeyError(f"Invalid JSON in service account key: {e}") from e

        if not isinstance(info, dict) or info.get("type") != "service_account":
            found = info.get("type") if isinstance(info, dict) else type(info).__name__
            raise InvalidKeyError(
                f"Invalid key: expected type 'service_account', got '{found}'"
            )

        self.client_email = info.get("client_email", "")
        self.project_id = info.get("project_id", "")

        # Missing fields or a malformed private key surface as ValueError
        try:
            self._credentials = service_account.Credentials.from_service_account_info(
                info,
                scopes=self.scopes,
            )
        except ValueError as e:
            raise InvalidKeyError(f"Unable to create service account credentials: {e}") from e

        logger.info(f"Service account initialized: {self.client_email}")
        logger.debug(f"Scopes: {self.scopes}")

    @classmethod
    def from_file(
        cls,
        key_path: str | Path,
        scopes: list[str] | None = None,
    ) -> "GoogleServiceAccount":
        """Load a service account from a JSON key file.

        Args:
            key_path: Path to service account JSON key file.
            scopes: Scope names or full URLs.

        Raises:
            CredentialsNotFoundError: If key file not found.
            InvalidKeyError: If key file is invalid.
        """
        key_path = Path(key_path)
        if not key_path.exists():
            raise CredentialsNotFoundError(str(key_path))
        return cls(key_path.read_bytes(), scopes=scopes)

    def _resolve_scopes(self, scopes: list[str]) -> list[str]:
        """Resolve scope names to full URLs."""
        resolved = []
        for scope in scopes:
            if scope.startswith("https://"):
                resolved.append(scope)
            elif scope in SCOPES:
                resolved.append(SCOPES[scope])
            else:
                raise ValueError(
                    f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
                )
        return resolved

    @property
    def credentials(self):
        """Get the service account credentials."""
        return self._credentials

    @property
    def email(self) -> str:
        """Get the service account email address.

        Share your spreadsheets with this email to grant access.
        """
        return self.client_email

    def build_service(self, service_name: str = "sheets", version: str = "v4"):
        """Build a Google API service with service account credentials.

        Args:
            service_name: Name of the service (e.g., 'sheets').
            version: API version (e.g., 'v4').

        Returns:
            Google API service object.

        Raises:
            GoogleAuthError: If the service cannot be built.
        """
        try:
            return build(
                service_name,
                version,
                credentials=self._credentials,
                cache_discovery=False,
            )
        except Exception as e:
            raise GoogleAuthError(f"Unable to build {service_name} {version} service: {e}") from e

    def get_info(self) -> dict:
        """Get information about the service account.

        Returns:
            Dictionary with service account details.
        """
        return {
            "type": "service_account",
            "email": self.client_email,
            "project_id": self.project_id,
            "scopes": self.scopes,
        }

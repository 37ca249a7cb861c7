"""Google Sheets API client implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httplib2
from google.auth import exceptions as google_auth_exceptions
from googleapiclient.errors import Error as ApiClientError
from googleapiclient.errors import HttpError

from sheets_utils.config import GOOGLE_SERVICE_ACCOUNT, get_default_target
from sheets_utils.google import GoogleAuthError, GoogleServiceAccount
from sheets_utils.sheets.exceptions import (
    AuthenticationError,
    ConfigurationError,
    NotFoundError,
    RemoteError,
)
from sheets_utils.sheets.tabular import Table, find_row_number

logger = logging.getLogger(__name__)

# Failures other than an HTTP error status raised while sending a request
_TRANSPORT_ERRORS = (
    ApiClientError,
    httplib2.HttpLib2Error,
    google_auth_exceptions.GoogleAuthError,
    OSError,
)


@dataclass
class Sheet:
    """Represents a sheet within a spreadsheet."""

    id: int
    title: str
    index: int
    row_count: int = 1000
    column_count: int = 26


@dataclass
class Spreadsheet:
    """Represents a Google Spreadsheet."""

    id: str
    title: str
    sheets: list[Sheet] | None = None
    url: str | None = None

    def find_sheet(self, title: str) -> Sheet | None:
        """Get the sheet with exactly this title."""
        for sheet in self.sheets or []:
            if sheet.title == title:
                return sheet
        return None


class SheetsClient:
    """Google Sheets client bound to one sheet of one spreadsheet.

    Authenticates with a service account key and addresses every range
    relative to the configured sheet.

    Usage:
        with open("service_account_key.json", "rb") as f:
            client = SheetsClient(f.read())

        client.set_spreadsheet_id("1AbC...")
        client.set_sheet_name("Sheet1")

        rows = client.read_data("A1:B4")
        client.append_data([["Alice", 30]], "A1")
        client.insert_rows_at_beginning([["Bob", 25]])
        client.delete_row(client.read_data("A:B"), "A", "Alice")

    Note:
        The target is mutable session state and is not synchronized.
        Use with_target() to get an independent client per sheet instead
        of switching targets from several threads.
    """

    def __init__(
        self,
        credentials: bytes,
        spreadsheet_id: str = "",
        sheet_name: str = "",
        scopes: list[str] | None = None,
    ) -> None:
        """Initialize Sheets client.

        Args:
            credentials: Service account JSON key contents.
            spreadsheet_id: Initial spreadsheet ID.
            sheet_name: Initial sheet name.
            scopes: Scope names or URLs. Defaults to ["sheets"].

        Raises:
            AuthenticationError: If the key or a scope name is invalid, or the API
                handle cannot be built.
        """
        try:
            auth = GoogleServiceAccount(credentials, scopes=scopes)
            service = auth.build_service("sheets", "v4")
        except (GoogleAuthError, ValueError) as e:
            raise AuthenticationError(f"unable to create Google Sheets client: {e}") from e

        self._service: Any = service
        self._spreadsheet_id = spreadsheet_id
        self._sheet_name = sheet_name
        logger.info(f"Sheets client initialized for {auth.email}")

    @classmethod
    def from_service(
        cls,
        service: Any,
        spreadsheet_id: str = "",
        sheet_name: str = "",
    ) -> SheetsClient:
        """Create a client around an already-built Sheets API service.

        Args:
            service: Result of googleapiclient.discovery.build("sheets", "v4", ...).
            spreadsheet_id: Initial spreadsheet ID.
            sheet_name: Initial sheet name.
        """
        client = object.__new__(cls)
        client._service = service
        client._spreadsheet_id = spreadsheet_id
        client._sheet_name = sheet_name
        return client

    @classmethod
    def from_key_file(
        cls,
        key_path: str | Path | None = None,
        spreadsheet_id: str | None = None,
        sheet_name: str | None = None,
        scopes: list[str] | None = None,
    ) -> SheetsClient:
        """Create a client from a service account key file.

        Args:
            key_path: Path to the JSON key. Defaults to google/service_account_key.json.
            spreadsheet_id: Spreadsheet ID. Defaults to $SHEETS_SPREADSHEET_ID.
            sheet_name: Sheet name. Defaults to $SHEETS_SHEET_NAME.
            scopes: Scope names or URLs.

        Raises:
            AuthenticationError: If the key file is missing or invalid.
        """
        path = Path(key_path) if key_path is not None else GOOGLE_SERVICE_ACCOUNT
        try:
            credentials = path.read_bytes()
        except OSError as e:
            raise AuthenticationError(f"unable to read credentials file {path}: {e}") from e

        default_id, default_name = get_default_target()
        return cls(
            credentials,
            spreadsheet_id=default_id if spreadsheet_id is None else spreadsheet_id,
            sheet_name=default_name if sheet_name is None else sheet_name,
            scopes=scopes,
        )

    # =========================================================================
    # Target
    # =========================================================================

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheet_id

    @property
    def sheet_name(self) -> str:
        return self._sheet_name

    def set_spreadsheet_id(self, spreadsheet_id: str) -> None:
        """Set the spreadsheet that subsequent operations target."""
        self._spreadsheet_id = spreadsheet_id

    def set_sheet_name(self, sheet_name: str) -> None:
        """Set the sheet (tab) that subsequent operations target."""
        self._sheet_name = sheet_name

    def with_target(
        self,
        spreadsheet_id: str | None = None,
        sheet_name: str | None = None,
    ) -> SheetsClient:
        """Create a client sharing this API handle with a different target.

        Args:
            spreadsheet_id: New spreadsheet ID, or None to keep the current one.
            sheet_name: New sheet name, or None to keep the current one.

        Returns:
            New SheetsClient; this client is left unchanged.
        """
        return self.from_service(
            self._service,
            spreadsheet_id=self._spreadsheet_id if spreadsheet_id is None else spreadsheet_id,
            sheet_name=self._sheet_name if sheet_name is None else sheet_name,
        )

    def _validate_config(self) -> None:
        """Check that a spreadsheet and a sheet are configured.

        Raises:
            ConfigurationError: If either is empty.
        """
        if not self._spreadsheet_id:
            raise ConfigurationError("spreadsheet ID is not set")
        if not self._sheet_name:
            raise ConfigurationError("sheet name is not set")

    def _range(self, cells: str) -> str:
        """Prefix a range with the configured sheet name."""
        return f"{self._sheet_name}!{cells}"

    def _execute(self, request: Any, action: str) -> dict:
        """Execute an API request, wrapping failures in RemoteError."""
        try:
            return request.execute()
        except HttpError as e:
            logger.warning(f"Unable to {action}: {e}")
            raise RemoteError(f"unable to {action}: {e}", status_code=e.resp.status) from e
        except _TRANSPORT_ERRORS as e:
            logger.warning(f"Unable to {action}: {e}")
            raise RemoteError(f"unable to {action}: {e}") from e

    # =========================================================================
    # Spreadsheet metadata
    # =========================================================================

    def get_spreadsheet(self) -> Spreadsheet:
        """Fetch metadata of the configured spreadsheet.

        Raises:
            ConfigurationError: If the target is not configured.
            RemoteError: If the metadata cannot be fetched.
        """
        self._validate_config()
        request = self._service.spreadsheets().get(spreadsheetId=self._spreadsheet_id)
        result = self._execute(request, "retrieve spreadsheet metadata")
        return self._parse_spreadsheet(result)

    def get_sheet_id(self) -> int:
        """Resolve the configured sheet name to its numeric sheet ID.

        Looked up on every call, so renamed sheets are always picked up.

        Raises:
            ConfigurationError: If the target is not configured.
            NotFoundError: If no sheet has exactly the configured name.
            RemoteError: If the metadata cannot be fetched.
        """
        spreadsheet = self.get_spreadsheet()
        sheet = spreadsheet.find_sheet(self._sheet_name)
        if sheet is None:
            raise NotFoundError(
                f"sheet {self._sheet_name!r} not found in spreadsheet {self._spreadsheet_id!r}"
            )
        return sheet.id

    # =========================================================================
    # Values
    # =========================================================================

    def read_data(self, read_range: str) -> list[list[Any]]:
        """Read values from a range of the configured sheet.

        Args:
            read_range: A1 notation without the sheet name (e.g., "A1:B4").

        Returns:
            Rows as returned by the API; trailing empty cells are not padded.

        Raises:
            ConfigurationError: If the target is not configured.
            RemoteError: If the range or sheet is invalid or the request fails.
        """
        self._validate_config()
        full_range = self._range(read_range)
        logger.debug(f"Reading {full_range}")

        request = (
            self._service.spreadsheets()
            .values()
            .get(spreadsheetId=self._spreadsheet_id, range=full_range)
        )
        result = self._execute(request, "retrieve data from Google Sheets")
        return result.get("values", [])

    def append_data(self, data: Table, start: str) -> None:
        """Append rows to the table anchored at ``start``.

        Values are stored as given (RAW), never parsed as formulas.
        Appending no rows does nothing.

        Args:
            data: Rows to append.
            start: Anchor cell in A1 notation without the sheet name (e.g., "A1").

        Raises:
            ConfigurationError: If the target or the anchor is empty.
            RemoteError: If the request fails.
        """
        self._validate_config()
        if not start:
            raise ConfigurationError("append range is empty")
        if not data:
            return

        full_range = self._range(start)
        request = (
            self._service.spreadsheets()
            .values()
            .append(
                spreadsheetId=self._spreadsheet_id,
                range=full_range,
                valueInputOption="RAW",
                body={"values": [list(row) for row in data]},
            )
        )
        self._execute(request, "add data to Google Sheets")
        logger.info(f"Appended {len(data)} rows at {full_range}")

    # =========================================================================
    # Rows
    # =========================================================================

    def insert_rows_after_position(self, data: Table, position: int) -> None:
        """Insert rows right after a 1-based row position and fill them.

        Position 1 is the header row. Blank rows are inserted first, then
        the data is appended at column A of the first new row. The two
        steps are not atomic: if the second fails, blank rows remain.

        Position 0 is rejected here with ConfigurationError rather than
        left to the API, which would accept startIndex 0 and insert the
        rows above the header instead of failing.

        Args:
            data: Rows to insert.
            position: 1-based row after which the data goes (>= 1).

        Raises:
            ConfigurationError: If the target is not configured or position < 1.
            NotFoundError: If the configured sheet does not exist.
            RemoteError: If either request fails.
        """
        self._validate_config()
        if position < 1:
            raise ConfigurationError(f"invalid row position {position}: must be 1 or greater")
        if not data:
            return

        sheet_id = self.get_sheet_id()
        body = {
            "requests": [
                {
                    "insertDimension": {
                        "range": {
                            "sheetId": sheet_id,
                            "dimension": "ROWS",
                            "startIndex": position,
                            "endIndex": position + len(data),
                        },
                        "inheritFromBefore": False,
                    }
                }
            ]
        }
        request = self._service.spreadsheets().batchUpdate(
            spreadsheetId=self._spreadsheet_id, body=body
        )
        self._execute(request, "insert rows into Google Sheets")
        logger.info(f"Inserted {len(data)} blank rows after row {position} of {self._sheet_name}")

        self.append_data(data, f"A{position + 1}")

    def insert_rows_at_beginning(self, data: Table) -> None:
        """Insert rows right below the header row."""
        self.insert_rows_after_position(data, 1)

    def delete_row(self, data: Table, column: str, value: str) -> None:
        """Delete the first row whose ``column`` cell equals ``value``.

        ``data`` must mirror the sheet's current rows starting at row 1
        (typically the result of read_data). It is not re-checked against
        the sheet, so if the sheet changed since it was read the wrong row
        may be deleted.

        Args:
            data: Rows previously read from the sheet.
            column: Column letters to match in (e.g., "A").
            value: Exact text to match.

        Raises:
            NotFoundError: If no row matches or the sheet does not exist.
            ConfigurationError: If the target is not configured.
            RemoteError: If the request fails.
        """
        self._validate_config()
        row_number = find_row_number(data, column, value)
        if row_number == -1:
            raise NotFoundError(f"unable to find the value {value!r} in column {column}")

        sheet_id = self.get_sheet_id()
        body = {
            "requests": [
                {
                    "deleteDimension": {
                        "range": {
                            "sheetId": sheet_id,
                            "dimension": "ROWS",
                            "startIndex": row_number - 1,
                            "endIndex": row_number,
                        }
                    }
                }
            ]
        }
        request = self._service.spreadsheets().batchUpdate(
            spreadsheetId=self._spreadsheet_id, body=body
        )
        self._execute(request, "delete row from Google Sheets")
        logger.info(f"Deleted row {row_number} of {self._sheet_name}")

    def _parse_spreadsheet(self, data: dict) -> Spreadsheet:
        """Parse spreadsheet from API response."""
        sheets = []
        for sheet_data in data.get("sheets", []):
            props = sheet_data.get("properties", {})
            grid_props = props.get("gridProperties", {})
            sheets.append(
                Sheet(
                    id=props.get("sheetId", 0),
                    title=props.get("title", ""),
                    index=props.get("index", 0),
                    row_count=grid_props.get("rowCount", 1000),
                    column_count=grid_props.get("columnCount", 26),
                )
            )

        return Spreadsheet(
            id=data.get("spreadsheetId", self._spreadsheet_id),
            title=data.get("properties", {}).get("title", ""),
            sheets=sheets,
            url=data.get("spreadsheetUrl"),
        )

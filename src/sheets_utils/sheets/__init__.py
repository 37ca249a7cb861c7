"""Google Sheets client with service account authentication.

Read, append, insert and delete rows in one named sheet of a spreadsheet.

Usage:
    from sheets_utils.sheets import SheetsClient

    # Initialize from a service account key
    client = SheetsClient.from_key_file("service_account_key.json")
    client.set_spreadsheet_id("1AbC...")
    client.set_sheet_name("Sheet1")

    # Read values
    rows = client.read_data("A1:C10")

    # Append values
    client.append_data([["Name", "Age"], ["Alice", 30]], "A1")

Service Account Setup:
    1. Create a service account and download its JSON key from Google Cloud Console
    2. Save it as google/service_account_key.json (or pass its path)
    3. Share the spreadsheet with the service account email
"""

from __future__ import annotations

from sheets_utils.sheets.client import Sheet, SheetsClient, Spreadsheet
from sheets_utils.sheets.exceptions import (
    AuthenticationError,
    ConfigurationError,
    NotFoundError,
    RemoteError,
    SheetsError,
)
from sheets_utils.sheets.tabular import (
    cell_to_string,
    column_index,
    data_to_string,
    find_row_number,
)

__all__ = [
    "SheetsClient",
    "Sheet",
    "Spreadsheet",
    "SheetsError",
    "AuthenticationError",
    "ConfigurationError",
    "NotFoundError",
    "RemoteError",
    "cell_to_string",
    "column_index",
    "data_to_string",
    "find_row_number",
]

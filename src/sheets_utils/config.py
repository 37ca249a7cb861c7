"""Centralized credential and target configuration.

Credentials are stored in the sheets-utils repo root:
    .env                            - default spreadsheet target
    google/service_account_key.json - Google service account key

This module auto-loads the .env file on import. Recognized variables:
    SHEETS_SPREADSHEET_ID  - spreadsheet used when no ID is given
    SHEETS_SHEET_NAME      - sheet (tab) used when no name is given
"""

import os
from pathlib import Path

# Repository root (where this package is installed from)
# __file__ is src/sheets_utils/config.py, so 3 levels up
REPO_ROOT = Path(__file__).parent.parent.parent
GOOGLE_DIR = REPO_ROOT / "google"

# Credential file paths
ENV_FILE = REPO_ROOT / ".env"
GOOGLE_SERVICE_ACCOUNT = GOOGLE_DIR / "service_account_key.json"

# Environment variables holding the default target
SPREADSHEET_ID_VAR = "SHEETS_SPREADSHEET_ID"
SHEET_NAME_VAR = "SHEETS_SHEET_NAME"


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            # Remove surrounding quotes
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Only set if not already in environment (env vars take precedence)
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


def get_default_target() -> tuple[str, str]:
    """Get the default spreadsheet ID and sheet name from the environment.

    Returns:
        Tuple of (spreadsheet_id, sheet_name); either may be empty.
    """
    return (
        os.environ.get(SPREADSHEET_ID_VAR, ""),
        os.environ.get(SHEET_NAME_VAR, ""),
    )


def get_credential_status() -> dict:
    """Get status of configured credentials and default target.

    Returns:
        Dictionary with credential status.
    """
    spreadsheet_id, sheet_name = get_default_target()
    return {
        "repo_root": str(REPO_ROOT),
        "env_file": ENV_FILE.exists(),
        "google": {
            "service_account": GOOGLE_SERVICE_ACCOUNT.exists(),
        },
        "target": {
            "spreadsheet_id": bool(spreadsheet_id),
            "sheet_name": bool(sheet_name),
        },
    }


# Auto-load .env from repo root on import
_loaded = _load_env_file(ENV_FILE)

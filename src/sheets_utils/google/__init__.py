"""Google service account authentication utilities."""

from sheets_utils.google.exceptions import (
    CredentialsNotFoundError,
    GoogleAuthError,
    InvalidKeyError,
)
from sheets_utils.google.service_account import SCOPES, GoogleServiceAccount

__all__ = [
    "GoogleServiceAccount",
    "SCOPES",
    "GoogleAuthError",
    "CredentialsNotFoundError",
    "InvalidKeyError",
]

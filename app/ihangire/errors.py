"""
Error taxonomy for the app.

Each exception carries a technical message (for logs) and a user-facing
message (rendered inline by the views).
"""

from __future__ import annotations
from typing import Optional


class IhangireError(Exception):
    """Base exception for app errors."""

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


# ---------------------------
# Auth
# ---------------------------
class InvalidInput(IhangireError):
    """A required field is empty (or a prompt is unusable)."""


class DuplicateAccount(IhangireError):
    def __init__(self, email: str):
        super().__init__(
            f"Account already exists: {email}",
            "An account with this email already exists.",
        )
        self.email = email


class AccountNotFound(IhangireError):
    def __init__(self, email: str):
        super().__init__(
            f"No account for: {email}", "No account found with this email."
        )
        self.email = email


class InvalidCredential(IhangireError):
    def __init__(self, email: str):
        super().__init__(f"Password mismatch for: {email}", "Incorrect password.")
        self.email = email


# ---------------------------
# Gateway / storage
# ---------------------------
class GatewayFailure(IhangireError):
    """Transport or parsing failure from the generative AI backend."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"{operation} failed{detail}",
            "Something went wrong talking to the AI. Please try again.",
        )
        self.operation = operation


class StorageFailure(IhangireError):
    """Quota or serialization failure while persisting local data."""

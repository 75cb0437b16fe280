"""
Purpose: Mock authentication (user directory + session) over local storage.

Credentials are stored in plain text under `ihangire_users` in the shared
storage. The active session lives under `ihangire_session` in the session
storage, which belongs to a single browser session; without one, the shared
storage is used for both. This is a placeholder, not a security
design: a real deployment needs hashed credentials verified server-side.
"""

from __future__ import annotations
import json
from typing import Optional

from ..errors import AccountNotFound, DuplicateAccount, InvalidCredential, InvalidInput
from ..interfaces import KeyValueStorage
from ..models import AuthProvider, User
from ..utils.logging import get_logger

logger = get_logger(__name__)

USERS_KEY = "ihangire_users"
SESSION_KEY = "ihangire_session"

SOCIAL_EMAILS = {
    AuthProvider.GOOGLE: "user@google.com",
    AuthProvider.GITHUB: "user@github.com",
}


class AuthService:
    def __init__(
        self,
        storage: KeyValueStorage,
        session_storage: Optional[KeyValueStorage] = None,
    ):
        self.storage = storage
        self.session_storage = storage if session_storage is None else session_storage

    def _stored_users(self) -> dict[str, str]:
        raw = self.storage.get_item(USERS_KEY)
        if not raw:
            return {}
        try:
            users = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupted user directory")
            return {}
        return users if isinstance(users, dict) else {}

    def _start_session(self, email: str) -> User:
        self.session_storage.set_item(SESSION_KEY, json.dumps({"email": email}))
        return User(email=email)

    def sign_up(self, email: str, password: str) -> User:
        if not email or not password:
            raise InvalidInput(
                "Missing email or password.", "Email and password are required."
            )
        users = self._stored_users()
        if email in users:
            raise DuplicateAccount(email)

        users[email] = password
        self.storage.set_item(USERS_KEY, json.dumps(users))
        logger.info("Created account %s", email)
        return self._start_session(email)

    def login(self, email: str, password: str) -> User:
        users = self._stored_users()
        if email not in users:
            raise AccountNotFound(email)
        if users[email] != password:
            raise InvalidCredential(email)
        return self._start_session(email)

    def social_login(self, provider: AuthProvider | str) -> User:
        """Stub: each provider signs in a fixed synthetic account."""
        try:
            provider = AuthProvider(provider)
        except ValueError as e:
            raise InvalidInput(
                f"Unknown provider: {provider!r}", "Unsupported sign-in provider."
            ) from e
        return self._start_session(SOCIAL_EMAILS[provider])

    def logout(self) -> None:
        self.session_storage.remove_item(SESSION_KEY)

    def current_user(self) -> Optional[User]:
        try:
            raw = self.session_storage.get_item(SESSION_KEY)
            session = json.loads(raw) if raw else None
        except (ValueError, OSError) as e:
            logger.warning("Unreadable session, treating as signed out: %s", e)
            return None
        if not isinstance(session, dict):
            return None
        email = session.get("email")
        return User(email=email) if isinstance(email, str) and email else None

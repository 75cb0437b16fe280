"""
Controller behind the sign-in screen: login / sign-up toggle, inline errors,
and the mock social providers. Returns the User so the caller can thread it
into every other controller.
"""

from __future__ import annotations
from typing import Optional

from .errors import IhangireError
from .models import ActionState, AuthProvider, User
from .services.auth import AuthService
from .utils.logging import get_logger

logger = get_logger(__name__)


class AuthController:
    def __init__(self, auth: AuthService):
        self.auth = auth
        self.is_login = True
        self.state = ActionState()

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    def toggle_mode(self) -> None:
        """Switch between login and sign-up; clears any inline error."""
        self.is_login = not self.is_login
        self.state = ActionState()

    def submit(self, email: str, password: str) -> Optional[User]:
        self.state.start()
        action = self.auth.login if self.is_login else self.auth.sign_up
        try:
            user = action(email, password)
        except IhangireError as e:
            logger.info("Auth rejected: %s", e)
            self.state.fail(e.user_message)
            return None
        self.state.succeed()
        return user

    def social(self, provider: AuthProvider) -> Optional[User]:
        try:
            user = self.auth.social_login(provider)
        except IhangireError as e:
            self.state.fail(e.user_message)
            return None
        self.state.succeed()
        return user

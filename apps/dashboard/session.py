# apps/dashboard/session.py

"""
Client-side login state

Holds the user returned by ``/login`` for display and route guarding. It
is not part of the project cache and is dropped on logout.
"""

import logging
from typing import Dict, Optional, Tuple

from django.conf import settings

from .exceptions import NetworkError, ServerError, ValidationError
from .store import NETWORK_ERROR_MESSAGE, AuthClient
from .widgets import Control, busy

logger = logging.getLogger(__name__)

FILL_ALL_FIELDS = "Please fill in all fields."


class ClientSession:
    """
    Login, registration and the session-scoped ``user``

    Inputs are checked locally first; the server's own ``error`` message is
    shown when it sends one.
    """

    def __init__(self, auth_client: AuthClient):
        self.auth_client = auth_client
        self.user: Optional[Dict] = None
        self._password_min_length = getattr(settings, 'SPMS_PASSWORD_MIN_LENGTH', 4)

        self.login_control = Control('login')
        self.register_control = Control('register')

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user)

    def require_user(self) -> Dict:
        """Route guard: the current user or ``ValidationError``"""
        if not self.user:
            raise ValidationError("Please log in first.")
        return self.user

    async def login(self, username: str, password: str) -> Tuple[bool, str]:
        """
        Returns:
            Tuple[ok, message]
        """
        username = (username or '').strip()
        if not username or not password:
            return False, FILL_ALL_FIELDS

        with busy(self.login_control) as acquired:
            if not acquired:
                return False, "Request already in progress."

            try:
                user = await self.auth_client.login(username, password)
            except ServerError as e:
                return False, e.server_message or "Login failed."
            except NetworkError:
                return False, NETWORK_ERROR_MESSAGE

            self.user = user
            logger.info("Logged in as %s", user.get('username', username))
            return True, f"Welcome, {user.get('full_name') or username}!"

    async def register(self, full_name: str, username: str, password: str) -> Tuple[bool, str]:
        """
        Creates the account; the caller goes back to the login form on success

        Returns:
            Tuple[ok, message]
        """
        full_name = (full_name or '').strip()
        username = (username or '').strip()
        if not full_name or not username or not password:
            return False, FILL_ALL_FIELDS

        if len(password) < self._password_min_length:
            return False, f"Password must be at least {self._password_min_length} characters."

        with busy(self.register_control) as acquired:
            if not acquired:
                return False, "Request already in progress."

            try:
                await self.auth_client.register(full_name, username, password)
            except ServerError as e:
                return False, e.server_message or "Registration failed."
            except NetworkError:
                return False, NETWORK_ERROR_MESSAGE

            return True, "Account created! Redirecting to login..."

    async def logout(self) -> None:
        """Drops the local user; a failing server logout is only logged"""
        self.user = None
        try:
            await self.auth_client.request('POST', '/logout')
        except (NetworkError, ServerError) as e:
            logger.warning("Server logout failed: %s", e.message)

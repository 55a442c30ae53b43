# apps/core/auth_service.py

"""
Authentication service - keeps every auth rule out of the views

The views only translate HTTP to and from this service; each public
method answers ``(http_status, message, user)`` so the view can build the
JSON response directly.
"""

import logging
from typing import Dict, Optional, Tuple

from django.conf import settings
from django.contrib.auth import authenticate, login, logout
from django.db import IntegrityError, transaction

from .models import Usuario

logger = logging.getLogger(__name__)


def _text(value) -> str:
    """JSON field as a string; anything that is not a string counts as missing"""
    return value if isinstance(value, str) else ''


class AuthenticationService:
    """
    Registration and login for the JSON API

    Error messages are the ones shown verbatim by the client, so they are
    kept short and user facing.
    """

    SERVER_ERROR = "Server error. Please try again."

    def __init__(self):
        self._password_min_length = getattr(settings, 'SPMS_PASSWORD_MIN_LENGTH', 4)

    def register(self, data: Dict) -> Tuple[int, str, Optional[Usuario]]:
        """
        Creates a new account

        Args:
            data: Dict with full_name, username and password

        Returns:
            Tuple[status, message, created_user]
        """
        full_name = _text(data.get('full_name')).strip()
        username = _text(data.get('username')).strip()
        password = _text(data.get('password'))

        if not full_name or not username or not password:
            return 400, "All fields are required", None

        if not self._password_is_valid(password):
            return 400, f"Password must be at least {self._password_min_length} characters", None

        try:
            if self._username_taken(username):
                return 409, "Username already taken", None

            usuario = self._create_user(full_name, username, password)

        except IntegrityError:
            # Lost a race against another registration with the same username
            return 409, "Username already taken", None
        except Exception:
            logger.exception("Register error for %s", username)
            return 500, self.SERVER_ERROR, None

        logger.info("Account created: %s", username)
        return 201, "Account created successfully", usuario

    def login(self, request, username: str, password: str) -> Tuple[int, str, Optional[Usuario]]:
        """
        Authenticates and opens a Django session

        Returns:
            Tuple[status, message, user]
        """
        username = _text(username).strip()
        password = _text(password)

        if not username or not password:
            return 400, "Username and password are required", None

        try:
            usuario = authenticate(request, username=username, password=password)
            if usuario is None:
                logger.warning("Failed login for %s", username)
                return 401, "Invalid username or password", None

            login(request, usuario)

        except Exception:
            logger.exception("Login error for %s", username)
            return 500, self.SERVER_ERROR, None

        return 200, "Login successful", usuario

    def logout(self, request) -> bool:
        """Closes the Django session"""
        try:
            logout(request)
            return True
        except Exception:
            logger.exception("Logout error")
            return False

    # =================== PRIVATE HELPERS ===================

    def _password_is_valid(self, password: str) -> bool:
        return len(password) >= self._password_min_length

    def _username_taken(self, username: str) -> bool:
        return Usuario.objects.filter(username=username).exists()

    def _create_user(self, full_name: str, username: str, password: str) -> Usuario:
        # create_user hashes the password
        with transaction.atomic():
            return Usuario.objects.create_user(
                username=username,
                password=password,
                full_name=full_name,
            )


# Shared service instance
auth_service = AuthenticationService()

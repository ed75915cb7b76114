"""
Client-side session state.

Authentication and role are derived on every call from the two encrypted
credential entries, so the store is the only place session data lives.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog

from inventory_client.core.exceptions import AuthenticationError
from inventory_client.core.models import LoginResponse, Role, SessionStatus
from inventory_client.data.secure_store import EncryptedKeyValueStore

logger = structlog.get_logger(__name__)

TOKEN_KEY = "token"
ROLE_KEY = "role"


class SessionState:
    """Login/logout transitions and derived auth status over an encrypted store."""

    def __init__(self, store: EncryptedKeyValueStore):
        self.store = store

    def login(self, token: str, role: str) -> None:
        """Persist credentials obtained from a successful authentication."""
        self.store.put(TOKEN_KEY, token)
        self.store.put(ROLE_KEY, role)
        logger.info("Session started", role=Role.parse(role).value)

    def login_from_response(self, payload: Dict[str, Any]) -> LoginResponse:
        """
        Start a session from an ``auth/login`` response body.

        Args:
            payload: Decoded JSON response

        Returns:
            The parsed login response

        Raises:
            AuthenticationError: If the response is not a successful login
        """
        response = LoginResponse.model_validate(payload)
        if response.status != 200 or not response.token:
            raise AuthenticationError(
                response.message or "Login response carried no token",
                details={"status": response.status},
            )
        self.login(response.token, response.role or "")
        return response

    def logout(self) -> None:
        """Forget both credentials."""
        self.store.remove(TOKEN_KEY)
        self.store.remove(ROLE_KEY)
        logger.info("Session cleared")

    @property
    def token(self) -> Optional[str]:
        return self.store.get(TOKEN_KEY) or None

    @property
    def role(self) -> Role:
        return Role.parse(self.store.get(ROLE_KEY))

    def is_authenticated(self) -> bool:
        # No expiry check: a stale token stays valid here until logout.
        return bool(self.store.get(TOKEN_KEY))

    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def status(self) -> SessionStatus:
        if not self.is_authenticated():
            return SessionStatus.ANONYMOUS
        if self.is_admin():
            return SessionStatus.ADMIN
        return SessionStatus.AUTHENTICATED

"""
Route authorization gate.

Decides, once per navigation attempt, whether the current session may enter
a destination. A denial is an ordinary decision carrying the login redirect
and the path to resume afterwards; it is never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import structlog

from inventory_client.core.exceptions import RouteNotFoundError
from inventory_client.session.routes import LOGIN_PATH, RouteTable
from inventory_client.session.state import SessionState

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Decision:
    """Outcome of a gate check."""

    allow: bool
    redirect_to: Optional[str] = None
    preserve_return_path: Optional[str] = None

    @classmethod
    def allowed(cls) -> "Decision":
        return cls(allow=True)

    @classmethod
    def denied(cls, requested_path: str) -> "Decision":
        return cls(allow=False, redirect_to=LOGIN_PATH, preserve_return_path=requested_path)

    def redirect_url(self) -> Optional[str]:
        """Login destination with the return path as a ``returnUrl`` query parameter."""
        if self.allow or self.redirect_to is None:
            return None
        if not self.preserve_return_path:
            return self.redirect_to
        return f"{self.redirect_to}?{urlencode({'returnUrl': self.preserve_return_path})}"


def can_enter(requires_admin: bool, requested_path: str, session: SessionState) -> Decision:
    """
    Check whether ``session`` may enter ``requested_path``.

    Admin-only destinations need the ADMIN role; every other protected
    destination needs an authenticated session.
    """
    if requires_admin:
        permitted = session.is_admin()
    else:
        permitted = session.is_authenticated()

    if permitted:
        return Decision.allowed()
    return Decision.denied(requested_path)


class RouteAuthorizationGate:
    """Applies :func:`can_enter` to paths resolved through a route table."""

    def __init__(self, session: SessionState, routes: Optional[RouteTable] = None):
        self.session = session
        self.routes = routes or RouteTable()

    def authorize(self, path: str) -> Decision:
        """
        Decide whether navigation to ``path`` may proceed.

        Raises:
            RouteNotFoundError: If no route matches ``path``
        """
        route = self.routes.resolve(path)
        if route is None:
            raise RouteNotFoundError(path)

        if route.redirect_to:
            return Decision(allow=False, redirect_to=route.redirect_to)
        if not route.protected:
            return Decision.allowed()

        decision = can_enter(route.requires_admin, path, self.session)
        if not decision.allow:
            logger.info(
                "Navigation denied",
                path=path,
                requires_admin=route.requires_admin,
                status=self.session.status.value,
            )
        return decision

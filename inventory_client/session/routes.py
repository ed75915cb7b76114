"""Navigable destinations of the inventory client and their access policies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

LOGIN_PATH = "/login"


@dataclass(frozen=True)
class RoutePolicy:
    """Access policy attached to one destination pattern."""

    pattern: str
    requires_admin: bool = False
    protected: bool = True
    redirect_to: Optional[str] = None

    @property
    def segments(self) -> Tuple[str, ...]:
        return _split(self.pattern)

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """Return the path parameters if ``path`` matches this pattern."""
        parts = _split(path)
        if len(parts) != len(self.segments):
            return None
        params: Dict[str, str] = {}
        for expected, actual in zip(self.segments, parts):
            if expected.startswith(":"):
                params[expected[1:]] = actual
            elif expected != actual:
                return None
        return params


def _split(path: str) -> Tuple[str, ...]:
    path = path.split("?", 1)[0]
    return tuple(p for p in path.strip("/").split("/") if p)


DEFAULT_ROUTES: List[RoutePolicy] = [
    RoutePolicy("login", protected=False),
    RoutePolicy("register", protected=False),
    RoutePolicy("category", requires_admin=True),
    RoutePolicy("supplier", requires_admin=True),
    RoutePolicy("edit-supplier/:supplierId", requires_admin=True),
    RoutePolicy("add-supplier", requires_admin=True),
    RoutePolicy("product", requires_admin=True),
    RoutePolicy("edit-product/:productId", requires_admin=True),
    RoutePolicy("add-product", requires_admin=True),
    RoutePolicy("purchase"),
    RoutePolicy("sell"),
    RoutePolicy("transaction"),
    RoutePolicy("transaction/:transactionId"),
    RoutePolicy("profile"),
    RoutePolicy("dashboard"),
    RoutePolicy("", protected=False, redirect_to=LOGIN_PATH),
]


class RouteTable:
    """Ordered route lookup; the first matching pattern wins."""

    def __init__(self, routes: Optional[List[RoutePolicy]] = None):
        self.routes = list(DEFAULT_ROUTES if routes is None else routes)

    def resolve(self, path: str) -> Optional[RoutePolicy]:
        for route in self.routes:
            if route.match(path) is not None:
                return route
        return None

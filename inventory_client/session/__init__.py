"""
Session and navigation authorization.

Derives authentication and role from the encrypted credential store and
decides whether a destination may be entered.
"""

from .gate import Decision, RouteAuthorizationGate, can_enter
from .routes import RoutePolicy, RouteTable
from .state import SessionState

__all__ = [
    "Decision",
    "RouteAuthorizationGate",
    "RoutePolicy",
    "RouteTable",
    "SessionState",
    "can_enter",
]

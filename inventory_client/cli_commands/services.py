"""Shared service wiring for CLI commands."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional

import click
import httpx
import structlog
from rich.console import Console

from inventory_client.core.config import Settings
from inventory_client.data.api_client import InventoryApiClient, create_api_client
from inventory_client.data.secure_store import EncryptedKeyValueStore, create_secure_store
from inventory_client.session.gate import RouteAuthorizationGate
from inventory_client.session.state import SessionState

logger = structlog.get_logger(__name__)

console = Console()


@dataclass
class ClientServices:
    """Everything a command needs, built once per invocation."""

    settings: Settings
    store: EncryptedKeyValueStore
    session: SessionState
    gate: RouteAuthorizationGate
    api: InventoryApiClient


def create_services(
    settings: Settings,
    store: Optional[EncryptedKeyValueStore] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> ClientServices:
    """Create shared services for the CLI."""
    store = store or create_secure_store(settings)
    session = SessionState(store)
    return ClientServices(
        settings=settings,
        store=store,
        session=session,
        gate=RouteAuthorizationGate(session),
        api=create_api_client(settings.api, session, transport),
    )


def get_services(ctx: click.Context) -> ClientServices:
    return ctx.obj["services"]


def require_access(ctx: click.Context, path: str) -> ClientServices:
    """Run the gate for ``path`` and stop the command if it denies entry."""
    services = get_services(ctx)
    decision = services.gate.authorize(path)
    if not decision.allow:
        console.print(f"[red]Access denied:[/red] {path}")
        console.print(f"Log in first: {decision.redirect_url()}")
        sys.exit(1)
    return services

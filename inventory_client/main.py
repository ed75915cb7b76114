"""
Main application entry point for the inventory client.

Provides CLI interface for session handling and inventory views.
"""

import sys
from typing import Optional

import click

from inventory_client.cli_commands.dashboard import dashboard
from inventory_client.cli_commands.listings import categories, products, suppliers, transactions
from inventory_client.cli_commands.manage import (
    category_add,
    category_delete,
    category_rename,
    product_add,
    product_delete,
    product_edit,
    purchase,
    register,
    sell,
    supplier_add,
    supplier_delete,
    supplier_edit,
    transaction,
)
from inventory_client.cli_commands.services import (
    console,
    create_services,
    get_services,
    require_access,
)
from inventory_client.core.config import get_settings, validate_required_settings
from inventory_client.core.exceptions import (
    AuthenticationError,
    InventoryClientError,
    StorageError,
)
from inventory_client.core.logging import set_correlation_id, setup_logging


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--correlation-id", help="Set correlation ID for request tracing")
@click.option("--json-logs", is_flag=True, help="Write logs as JSON lines instead of rich text")
@click.pass_context
def main(ctx, debug: bool, correlation_id: Optional[str], json_logs: bool):
    """Inventory management client.

    Keeps an encrypted local session and browses categories, suppliers,
    products and transactions of the inventory API.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    settings = get_settings()
    setup_logging(
        debug=debug or settings.debug,
        rich_output=not (json_logs or settings.json_logs),
    )

    if correlation_id:
        set_correlation_id(correlation_id)

    if "services" not in ctx.obj:
        services = create_services(settings)
        ctx.obj["services"] = services
        ctx.call_on_close(services.api.close)
    ctx.obj["debug"] = debug


main.add_command(products)
main.add_command(transactions)
main.add_command(categories)
main.add_command(suppliers)
main.add_command(dashboard)
main.add_command(register)
main.add_command(purchase)
main.add_command(sell)
main.add_command(transaction)
main.add_command(category_add)
main.add_command(category_rename)
main.add_command(category_delete)
main.add_command(supplier_add)
main.add_command(supplier_edit)
main.add_command(supplier_delete)
main.add_command(product_add)
main.add_command(product_edit)
main.add_command(product_delete)


@main.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, help="Account password")
@click.pass_context
def login(ctx, email: str, password: str):
    """Log in and store the session credentials."""
    services = get_services(ctx)
    try:
        response = services.api.login(email, password)
    except AuthenticationError as e:
        console.print(f"[red]Login failed:[/red] {e.message}")
        sys.exit(1)
    except InventoryClientError as e:
        console.print(f"[red]Unable to log in:[/red] {e.message}")
        sys.exit(1)

    console.print(f"[green]Logged in[/green] as {email} ({services.session.role.value})")
    if response.message:
        console.print(response.message)


@main.command()
@click.pass_context
def logout(ctx):
    """Clear the stored session."""
    try:
        get_services(ctx).session.logout()
    except StorageError as e:
        console.print(f"[red]Unable to clear session:[/red] {e.message}")
        sys.exit(1)
    console.print("Logged out")


@main.command()
@click.pass_context
def whoami(ctx):
    """Show the current user profile."""
    services = require_access(ctx, "/profile")
    try:
        info = services.api.get_logged_in_user_info()
    except InventoryClientError as e:
        console.print(f"[red]Unable to get user info:[/red] {e.message}")
        sys.exit(1)

    user = info.get("user") or {}
    console.print(f"Name:  {user.get('name', '-')}")
    console.print(f"Email: {user.get('email', '-')}")
    console.print(f"Role:  {services.session.role.value}")


@main.command()
@click.pass_context
def status(ctx):
    """Show whether a session is stored and its role."""
    session = get_services(ctx).session
    console.print(f"Session: {session.status.value}")


@main.command()
@click.pass_context
def config(ctx):
    """Validate and display configuration."""
    settings = get_services(ctx).settings
    problems = validate_required_settings(settings)
    console.print(f"API URL:        {settings.api.base_url}")
    console.print(f"Storage:        {settings.storage.path}")
    console.print(f"Items per page: {settings.items_per_page}")
    if problems:
        console.print("[red]Configuration Issues:[/red]")
        for item in problems:
            console.print(f"  - {item}")
        sys.exit(1)
    console.print("[green]Configuration Valid[/green]")


if __name__ == "__main__":
    main()

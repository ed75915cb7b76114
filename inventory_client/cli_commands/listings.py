"""
CLI commands for browsing inventory data.

Each listing fetches the full collection, then slices it client-side with a
page cursor, the same way the list screens do.
"""

import click
from rich.table import Table

from inventory_client.cli_commands.services import console, require_access
from inventory_client.core.exceptions import InventoryClientError
from inventory_client.core.models import Category, Supplier, parse_products, parse_transactions
from inventory_client.shaping.pagination import PageCursor, PageWindow, on_page_select


def _print_page_selector(page: PageWindow, cursor: PageCursor) -> None:
    if page.total_pages == 0:
        console.print("[dim]No results[/dim]")
        return
    numbers = " ".join(
        f"[bold][{n}][/bold]" if n == cursor.current_page else str(n) for n in cursor.page_numbers
    )
    if on_page_select(cursor.current_page, page.total_pages) is None:
        console.print(f"[yellow]No page {cursor.current_page}.[/yellow] Pages:  {numbers}")
        return
    console.print(f"Page {cursor.current_page} of {page.total_pages}:  {numbers}")


def _cursor(services, page_number: int) -> PageCursor:
    return PageCursor(items_per_page=services.settings.items_per_page, current_page=page_number)


@click.command()
@click.option(
    "--page", "page_number", type=click.IntRange(min=1), default=1, help="Page to show (default: 1)"
)
@click.pass_context
def products(ctx, page_number: int):
    """List products (admin only)."""
    services = require_access(ctx, "/product")
    try:
        items = parse_products(services.api.get_all_products())
    except InventoryClientError as e:
        console.print(f"[red]Unable to get products:[/red] {e.message}")
        ctx.exit(1)

    cursor = _cursor(services, page_number)
    page = cursor.window(items)

    table = Table(title="Products")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("SKU")
    table.add_column("Price", justify="right")
    table.add_column("Stock", justify="right")
    for product in page.page_items:
        table.add_row(
            str(product.id or ""),
            product.name,
            product.sku or "",
            f"{product.price:.2f}",
            str(product.stock_quantity),
        )
    console.print(table)
    _print_page_selector(page, cursor)


@click.command()
@click.option("--search", default="", help="Filter transactions by text")
@click.option(
    "--page", "page_number", type=click.IntRange(min=1), default=1, help="Page to show (default: 1)"
)
@click.pass_context
def transactions(ctx, search: str, page_number: int):
    """List transactions."""
    services = require_access(ctx, "/transaction")
    try:
        records = parse_transactions(services.api.get_all_transactions(search))
    except InventoryClientError as e:
        console.print(f"[red]Unable to get transactions:[/red] {e.message}")
        ctx.exit(1)

    cursor = _cursor(services, page_number)
    page = cursor.window(records)

    table = Table(title=f"Transactions{f' matching {search!r}' if search else ''}")
    table.add_column("ID", justify="right")
    table.add_column("Type")
    table.add_column("Total", justify="right")
    table.add_column("Status")
    table.add_column("Created")
    for record in page.page_items:
        table.add_row(
            str(record.id or ""),
            record.transaction_type,
            f"{record.total_price:.2f}",
            record.status or "",
            record.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)
    _print_page_selector(page, cursor)


@click.command()
@click.pass_context
def categories(ctx):
    """List categories (admin only)."""
    services = require_access(ctx, "/category")
    try:
        payload = services.api.get_all_categories()
    except InventoryClientError as e:
        console.print(f"[red]Unable to get categories:[/red] {e.message}")
        ctx.exit(1)

    table = Table(title="Categories")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    for category in (Category.model_validate(c) for c in payload.get("categories") or []):
        table.add_row(str(category.id or ""), category.name)
    console.print(table)


@click.command()
@click.pass_context
def suppliers(ctx):
    """List suppliers (admin only)."""
    services = require_access(ctx, "/supplier")
    try:
        payload = services.api.get_all_suppliers()
    except InventoryClientError as e:
        console.print(f"[red]Unable to get suppliers:[/red] {e.message}")
        ctx.exit(1)

    table = Table(title="Suppliers")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Contact")
    table.add_column("Address")
    for supplier in (Supplier.model_validate(s) for s in payload.get("suppliers") or []):
        table.add_row(
            str(supplier.id or ""), supplier.name, supplier.contact_info or "", supplier.address or ""
        )
    console.print(table)

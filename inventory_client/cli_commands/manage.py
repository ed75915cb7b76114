"""
CLI commands that change inventory data.

Each command is gated on the route of the screen it stands in for, then
sends one request to the inventory API and prints the server's message.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
import structlog
from rich.table import Table

from inventory_client.cli_commands.services import console, require_access
from inventory_client.core.exceptions import InventoryClientError
from inventory_client.core.models import Category, Product, Supplier, TransactionRecord

logger = structlog.get_logger(__name__)


def _submit(ctx: click.Context, failure: str, request: Callable[..., Dict[str, Any]], *args):
    """Run one API call, printing ``failure`` and exiting 1 if it fails."""
    try:
        return request(*args)
    except InventoryClientError as e:
        console.print(f"[red]{failure}:[/red] {e.message}")
        ctx.exit(1)


def _done(response: Dict[str, Any], default: str) -> None:
    console.print(f"[green]{response.get('message') or default}[/green]")


def _load(ctx: click.Context, payload: Dict[str, Any], key: str, model):
    """Parse the entity under ``key`` or stop if the response has none."""
    data = payload.get(key)
    if not data:
        console.print(f"[red]No {key} in response[/red]")
        ctx.exit(1)
    return model.model_validate(data)


def _pick(new, old):
    return old if new is None else new


# Account


@click.command()
@click.argument("email")
@click.option("--name", required=True, help="Full name")
@click.option("--phone-number", required=True, help="Contact phone number")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.pass_context
def register(ctx, email: str, name: str, phone_number: str, password: str):
    """Create a user account."""
    services = require_access(ctx, "/register")
    if not all((email, name, phone_number, password)):
        raise click.UsageError("All fields are required")

    body = {"email": email, "name": name, "phoneNumber": phone_number, "password": password}
    response = _submit(ctx, "Unable to register", services.api.register_user, body)
    _done(response, "Registered")
    console.print(f"Log in with: inventory-client login {email}")


# Transactions


@click.command()
@click.option("--product-id", type=int, required=True, help="Product to buy")
@click.option("--supplier-id", type=int, required=True, help="Supplier selling it")
@click.option("--quantity", type=click.IntRange(min=1), required=True)
@click.option("--description", default="", help="Optional note")
@click.pass_context
def purchase(ctx, product_id: int, supplier_id: int, quantity: int, description: str):
    """Record a purchase from a supplier."""
    services = require_access(ctx, "/purchase")
    body = {
        "productId": product_id,
        "supplierId": supplier_id,
        "quantity": quantity,
        "description": description,
    }
    response = _submit(ctx, "Unable to purchase", services.api.purchase_product, body)
    logger.info("Purchase recorded", product_id=product_id, quantity=quantity)
    _done(response, "Purchase recorded")


@click.command()
@click.option("--product-id", type=int, required=True, help="Product to sell")
@click.option("--quantity", type=click.IntRange(min=1), required=True)
@click.option("--description", default="", help="Optional note")
@click.pass_context
def sell(ctx, product_id: int, quantity: int, description: str):
    """Record a sale."""
    services = require_access(ctx, "/sell")
    body = {"productId": product_id, "quantity": quantity, "description": description}
    response = _submit(ctx, "Unable to sell", services.api.sell_product, body)
    logger.info("Sale recorded", product_id=product_id, quantity=quantity)
    _done(response, "Sale recorded")


@click.command()
@click.argument("transaction_id", type=int)
@click.option("--set-status", "new_status", help="Change the transaction status")
@click.pass_context
def transaction(ctx, transaction_id: int, new_status: Optional[str]):
    """Show one transaction and optionally update its status."""
    services = require_access(ctx, f"/transaction/{transaction_id}")
    payload = _submit(
        ctx, "Unable to get transaction", services.api.get_transaction_by_id, transaction_id
    )
    record = _load(ctx, payload, "transaction", TransactionRecord)

    table = Table(title=f"Transaction {transaction_id}", show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Type", record.transaction_type)
    table.add_row("Status", record.status or "")
    table.add_row("Total", f"{record.total_price:.2f}")
    table.add_row("Products", str(record.total_products or ""))
    table.add_row("Description", record.description or "")
    table.add_row("Created", record.created_at.strftime("%Y-%m-%d %H:%M"))
    console.print(table)

    if new_status:
        response = _submit(
            ctx,
            "Unable to update status",
            services.api.update_transaction_status,
            transaction_id,
            new_status,
        )
        _done(response, f"Status set to {new_status}")


# Categories


@click.command("category-add")
@click.argument("name")
@click.pass_context
def category_add(ctx, name: str):
    """Add a category (admin only)."""
    services = require_access(ctx, "/category")
    response = _submit(ctx, "Unable to add category", services.api.create_category, {"name": name})
    _done(response, f"Category {name!r} added")


@click.command("category-rename")
@click.argument("category_id", type=int)
@click.argument("name")
@click.pass_context
def category_rename(ctx, category_id: int, name: str):
    """Rename a category (admin only)."""
    services = require_access(ctx, "/category")
    payload = _submit(ctx, "Unable to get category", services.api.get_category_by_id, category_id)
    current = _load(ctx, payload, "category", Category)

    response = _submit(
        ctx, "Unable to update category", services.api.update_category, category_id, {"name": name}
    )
    _done(response, f"Category {current.name!r} renamed to {name!r}")


@click.command("category-delete")
@click.argument("category_id", type=int)
@click.confirmation_option(prompt="Delete this category?")
@click.pass_context
def category_delete(ctx, category_id: int):
    """Delete a category (admin only)."""
    services = require_access(ctx, "/category")
    response = _submit(
        ctx, "Unable to delete category", services.api.delete_category, category_id
    )
    _done(response, "Category deleted")


# Suppliers


@click.command("supplier-add")
@click.option("--name", required=True)
@click.option("--address", required=True)
@click.option("--contact-info", default="", help="Email or phone")
@click.pass_context
def supplier_add(ctx, name: str, address: str, contact_info: str):
    """Add a supplier (admin only)."""
    services = require_access(ctx, "/add-supplier")
    body = {"name": name, "address": address, "contactInfo": contact_info}
    response = _submit(ctx, "Unable to add supplier", services.api.add_supplier, body)
    _done(response, f"Supplier {name!r} added")


@click.command("supplier-edit")
@click.argument("supplier_id", type=int)
@click.option("--name")
@click.option("--address")
@click.option("--contact-info")
@click.pass_context
def supplier_edit(
    ctx,
    supplier_id: int,
    name: Optional[str],
    address: Optional[str],
    contact_info: Optional[str],
):
    """Update a supplier, keeping fields that are not given (admin only)."""
    services = require_access(ctx, f"/edit-supplier/{supplier_id}")
    payload = _submit(ctx, "Unable to get supplier", services.api.get_supplier_by_id, supplier_id)
    current = _load(ctx, payload, "supplier", Supplier)

    body = {
        "name": _pick(name, current.name),
        "address": _pick(address, current.address),
        "contactInfo": _pick(contact_info, current.contact_info),
    }
    response = _submit(
        ctx, "Unable to update supplier", services.api.update_supplier, supplier_id, body
    )
    _done(response, "Supplier updated")


@click.command("supplier-delete")
@click.argument("supplier_id", type=int)
@click.confirmation_option(prompt="Delete this supplier?")
@click.pass_context
def supplier_delete(ctx, supplier_id: int):
    """Delete a supplier (admin only)."""
    services = require_access(ctx, "/supplier")
    response = _submit(
        ctx, "Unable to delete supplier", services.api.delete_supplier, supplier_id
    )
    _done(response, "Supplier deleted")


# Products

_image_option = click.option(
    "--image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Product image to upload",
)


@click.command("product-add")
@click.option("--name", required=True)
@click.option("--sku", required=True)
@click.option("--price", type=click.FloatRange(min=0), required=True)
@click.option("--stock-quantity", type=click.IntRange(min=0), required=True)
@click.option("--category-id", type=int, required=True)
@click.option("--description", default="")
@_image_option
@click.pass_context
def product_add(
    ctx,
    name: str,
    sku: str,
    price: float,
    stock_quantity: int,
    category_id: int,
    description: str,
    image: Optional[Path],
):
    """Add a product (admin only)."""
    services = require_access(ctx, "/add-product")
    fields = {
        "name": name,
        "sku": sku,
        "price": price,
        "stockQuantity": stock_quantity,
        "categoryId": category_id,
        "description": description,
    }
    response = _submit(ctx, "Unable to add product", services.api.add_product, fields, image)
    _done(response, f"Product {name!r} added")


@click.command("product-edit")
@click.argument("product_id", type=int)
@click.option("--name")
@click.option("--sku")
@click.option("--price", type=click.FloatRange(min=0))
@click.option("--stock-quantity", type=click.IntRange(min=0))
@click.option("--category-id", type=int)
@click.option("--description")
@_image_option
@click.pass_context
def product_edit(
    ctx,
    product_id: int,
    name: Optional[str],
    sku: Optional[str],
    price: Optional[float],
    stock_quantity: Optional[int],
    category_id: Optional[int],
    description: Optional[str],
    image: Optional[Path],
):
    """Update a product, keeping fields that are not given (admin only)."""
    services = require_access(ctx, f"/edit-product/{product_id}")
    payload = _submit(ctx, "Unable to get product", services.api.get_product_by_id, product_id)
    current: Product = _load(ctx, payload, "product", Product)

    fields = {
        "name": _pick(name, current.name),
        "sku": _pick(sku, current.sku),
        "price": _pick(price, current.price),
        "stockQuantity": _pick(stock_quantity, current.stock_quantity),
        "categoryId": _pick(category_id, current.category_id),
        "description": _pick(description, current.description),
    }
    response = _submit(
        ctx, "Unable to update product", services.api.update_product, product_id, fields, image
    )
    _done(response, "Product updated")


@click.command("product-delete")
@click.argument("product_id", type=int)
@click.confirmation_option(prompt="Delete this product?")
@click.pass_context
def product_delete(ctx, product_id: int):
    """Delete a product (admin only)."""
    services = require_access(ctx, "/product")
    response = _submit(ctx, "Unable to delete product", services.api.delete_product, product_id)
    _done(response, "Product deleted")

"""
CLI command for the transaction dashboard.

Without a month the dashboard summarizes every transaction by type; with
``--month`` and ``--year`` it loads that month and adds the daily totals.
"""

from typing import Optional

import click
import structlog
from rich.table import Table

from inventory_client.cli_commands.services import console, require_access
from inventory_client.core.exceptions import InventoryClientError
from inventory_client.core.models import parse_transactions
from inventory_client.shaping.aggregation import DashboardSummary, filter_by_month, recent_years

logger = structlog.get_logger(__name__)


def _series_table(title: str, series, value_format: str = "{}") -> Table:
    table = Table(title=title)
    table.add_column("Name")
    table.add_column("Value", justify="right")
    for point in series:
        table.add_row(point["name"], value_format.format(point["value"]))
    return table


@click.command()
@click.option("--month", type=click.IntRange(1, 12), help="Month to break down by day (1-12)")
@click.option("--year", type=int, help="Year of --month")
@click.pass_context
def dashboard(ctx, month: Optional[int], year: Optional[int]):
    """Summarize transactions by type and, for a month, by day."""
    services = require_access(ctx, "/dashboard")

    if (month is None) != (year is None):
        raise click.UsageError("--month and --year must be given together")
    if year is not None and year not in recent_years():
        raise click.BadParameter(f"choose one of {recent_years()}", param_hint="--year")

    monthly = month is not None
    try:
        if monthly:
            payload = services.api.get_transactions_by_month_and_year(month, year)
        else:
            payload = services.api.get_all_transactions("")
        records = parse_transactions(payload)
        if monthly:
            # The server buckets months in its own zone; keep the local month only.
            records = filter_by_month(records, month, year)
    except InventoryClientError as e:
        console.print(f"[red]Unable to load transactions:[/red] {e.message}")
        ctx.exit(1)

    summary = DashboardSummary.from_records(records, include_daily=monthly)
    charts = summary.chart_data()
    logger.debug("Dashboard computed", records=len(records), monthly=monthly)

    console.print(_series_table("Transactions by type", charts["transaction_types"]))
    console.print(
        _series_table("Amount by type", charts["transaction_amounts"], value_format="{:.2f}")
    )
    if monthly:
        console.print(
            _series_table(
                f"Daily totals {year}-{month:02d}", charts["daily_totals"], value_format="{:.2f}"
            )
        )

"""
Client-side shaping of API collections for display.

Pagination slices a fetched list into pages; aggregation summarizes
transactions for the dashboard.
"""

from .aggregation import (
    DashboardSummary,
    count_by_type,
    sum_by_day_of_month,
    sum_by_type,
)
from .pagination import PageCursor, PageWindow, on_page_select, paginate, visible_page_numbers

__all__ = [
    "DashboardSummary",
    "PageCursor",
    "PageWindow",
    "count_by_type",
    "on_page_select",
    "paginate",
    "sum_by_day_of_month",
    "sum_by_type",
    "visible_page_numbers",
]

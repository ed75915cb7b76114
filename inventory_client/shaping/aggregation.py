"""
Dashboard aggregations over transaction records.

All reducers are pure: they read the records once, build a fresh mapping and
leave the input untouched. Calendar fields are taken in the local time zone
of the running client, so the same transaction can fall on a different day
for viewers in different zones.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional

from inventory_client.core.exceptions import ValidationError
from inventory_client.core.models import TransactionRecord


def _local(ts: datetime) -> datetime:
    # Naive timestamps are already wall-clock local time.
    if ts.tzinfo is None:
        return ts
    return ts.astimezone()


def count_by_type(records: Iterable[TransactionRecord]) -> Dict[str, int]:
    """Number of transactions per transaction type."""
    counts: Dict[str, int] = defaultdict(int)
    for record in records:
        counts[record.transaction_type] += 1
    return dict(counts)


def sum_by_type(records: Iterable[TransactionRecord]) -> Dict[str, float]:
    """Total price per transaction type."""
    totals: Dict[str, float] = defaultdict(float)
    for record in records:
        totals[record.transaction_type] += record.total_price
    return dict(totals)


def sum_by_day_of_month(records: Iterable[TransactionRecord]) -> Dict[int, float]:
    """Total price per local calendar day (1..31)."""
    totals: Dict[int, float] = defaultdict(float)
    for record in records:
        totals[_local(record.created_at).day] += record.total_price
    return dict(totals)


def filter_by_month(
    records: Iterable[TransactionRecord], month: int, year: int
) -> List[TransactionRecord]:
    """Records whose local creation time falls in ``month``/``year``."""
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12", details={"month": month})
    selected = []
    for record in records:
        created = _local(record.created_at)
        if created.month == month and created.year == year:
            selected.append(record)
    return selected


def recent_years(count: int = 10, today: Optional[date] = None) -> List[int]:
    """Selectable years, newest first."""
    current = (today or date.today()).year
    return [current - i for i in range(count)]


def to_chart_series(
    totals: Dict, label: Callable[[object], str] = str
) -> List[Dict[str, object]]:
    """Render a mapping as ``name``/``value`` pairs for charts and tables."""
    return [{"name": label(key), "value": value} for key, value in totals.items()]


def day_label(day: object) -> str:
    return f"Day {day}"


@dataclass
class DashboardSummary:
    """The three dashboard projections computed from one batch of records."""

    type_counts: Dict[str, int] = field(default_factory=dict)
    type_amounts: Dict[str, float] = field(default_factory=dict)
    daily_amounts: Dict[int, float] = field(default_factory=dict)

    @classmethod
    def from_records(
        cls, records: Iterable[TransactionRecord], include_daily: bool = True
    ) -> "DashboardSummary":
        records = list(records)
        return cls(
            type_counts=count_by_type(records),
            type_amounts=sum_by_type(records),
            daily_amounts=sum_by_day_of_month(records) if include_daily else {},
        )

    def chart_data(self) -> Dict[str, List[Dict[str, object]]]:
        return {
            "transaction_types": to_chart_series(self.type_counts),
            "transaction_amounts": to_chart_series(self.type_amounts),
            "daily_totals": to_chart_series(dict(sorted(self.daily_amounts.items())), day_label),
        }

"""Dashboard statistics.

Builds the snapshot shown on the dashboard:
    - total_expenses: all-time sum, never scoped by the reference month
    - monthly_total: sum within the reference month (default: current month)
    - monthly_data: per-month sums for the 6 calendar months ending with the
      *current* month, ascending, months without expenses omitted
    - category_data: all-time per-category sums, largest first, categories
      without expenses omitted

Computations are pure over an injected `Database` and an optional `today`, so
they are easy to unit test without freezing the clock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from app.db.dal import Database
from app.services.money import round2
from app.services.periods import month_window, trailing_months_window, utc_today

TRAILING_MONTHS = 6


@dataclass(frozen=True)
class MonthBucket:
    year: int
    month: int
    total: float


@dataclass(frozen=True)
class CategoryBucket:
    category: str
    total: float


@dataclass(frozen=True)
class StatsResult:
    total_expenses: float = 0.0
    monthly_total: float = 0.0
    monthly_data: List[MonthBucket] = field(default_factory=list)
    category_data: List[CategoryBucket] = field(default_factory=list)


def resolve_reference_month(
    month: Optional[int], year: Optional[int], today: Optional[date] = None
) -> Tuple[int, int]:
    """Return (year, month) to compute monthly_total for.

    Both omitted means the current month. Supplying only one of the pair is
    ambiguous and rejected with ValueError.
    """
    if month is None and year is None:
        today = today or utc_today()
        return today.year, today.month
    if month is None or year is None:
        raise ValueError("month and year must be provided together")
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    return year, month


def compute_monthly_total(db: Database, year: int, month: int) -> float:
    start, end = month_window(year, month)
    return round2(db.sum_amount(start=start, end=end))


def compute_stats(
    db: Database,
    month: Optional[int] = None,
    year: Optional[int] = None,
    today: Optional[date] = None,
) -> StatsResult:
    today = today or utc_today()
    ref_year, ref_month = resolve_reference_month(month, year, today)

    trailing_start, trailing_end = trailing_months_window(today, TRAILING_MONTHS)
    monthly_rows = db.monthly_totals(start=trailing_start, end=trailing_end)

    return StatsResult(
        total_expenses=round2(db.sum_amount()),
        monthly_total=compute_monthly_total(db, ref_year, ref_month),
        monthly_data=[
            MonthBucket(
                year=int(r["year"]), month=int(r["month"]), total=round2(r["total"])
            )
            for r in monthly_rows
        ],
        category_data=[
            CategoryBucket(category=r["category"], total=round2(r["total"]))
            for r in db.category_totals()
        ],
    )

"""Calendar window helpers for filters and statistics.

All windows are closed intervals on naive UTC datetimes, ending at the last
millisecond of their final day (matching the store's timestamp precision).
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timezone
from typing import Tuple

END_OF_DAY = time(23, 59, 59, 999000)

Window = Tuple[datetime, datetime]


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime, the clock stored dates use."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_today() -> date:
    return utc_now().date()


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def end_of_day(d: date) -> datetime:
    return datetime.combine(d, END_OF_DAY)


def month_window(year: int, month: int) -> Window:
    """Return [first day 00:00:00.000, last day 23:59:59.999] of the month."""
    last_day = calendar.monthrange(year, month)[1]
    return start_of_day(date(year, month, 1)), end_of_day(date(year, month, last_day))


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def trailing_months_window(today: date, months: int = 6) -> Window:
    """Window spanning `months` calendar months ending with today's month."""
    first_year, first_month = shift_month(today.year, today.month, -(months - 1))
    start, _ = month_window(first_year, first_month)
    _, end = month_window(today.year, today.month)
    return start, end

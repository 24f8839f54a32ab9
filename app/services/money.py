"""Money / rounding helpers.

Centralized so stats, budget status and export use identical rounding
semantics (half-up to cents) and float sums like 45.99 + 120 come out as
165.99 rather than a binary approximation.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP


def round2(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def percent_of(part: float, whole: float) -> float:
    """Return part/whole as a rounded percentage; 0 when whole is not positive."""
    if whole <= 0:
        return 0.0
    return round2(part / whole * 100)


def format_amount(value: float) -> str:
    """Render an amount the way the client prints numbers: 120 not 120.0."""
    amount = float(value)
    if amount.is_integer():
        return str(int(amount))
    return repr(amount)

"""Field-level expense validation shared by the store's insert and update paths.

Each rule produces a human readable message; all violations of one write are
collected and raised together as `ExpenseValidationError`, mirroring how the
API reports them (``"Amount cannot be negative, Foo is not a valid category"``).

Only the keys present in the mapping are checked, which is what lets partial
updates revalidate just the supplied fields.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping

from app.core.errors import ExpenseValidationError
from app.models.constants import Category

EXPENSE_FIELDS = ("amount", "category", "description", "date")

AMOUNT_REQUIRED = "Amount is required"
AMOUNT_NOT_NUMBER = "Amount must be a number"
AMOUNT_NEGATIVE = "Amount cannot be negative"
CATEGORY_REQUIRED = "Category is required"
DATE_REQUIRED = "Date is required"
DATE_INVALID = "Date must be a valid date"


def normalize_datetime(value: datetime | date) -> datetime:
    """Return a naive UTC datetime for storage and window comparisons."""
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _check_amount(value: Any, messages: List[str]) -> float | None:
    if value is None or value == "":
        messages.append(AMOUNT_REQUIRED)
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        messages.append(AMOUNT_NOT_NUMBER)
        return None
    if not math.isfinite(amount):
        messages.append(AMOUNT_NOT_NUMBER)
        return None
    if amount < 0:
        messages.append(AMOUNT_NEGATIVE)
        return None
    return amount


def _check_category(value: Any, messages: List[str]) -> str | None:
    if value is None or value == "":
        messages.append(CATEGORY_REQUIRED)
        return None
    try:
        return Category(value).value
    except ValueError:
        messages.append(f"{value} is not a valid category")
        return None


def _check_date(value: Any, messages: List[str]) -> datetime | None:
    if value is None:
        messages.append(DATE_REQUIRED)
        return None
    if not isinstance(value, (date, datetime)):
        messages.append(DATE_INVALID)
        return None
    return normalize_datetime(value)


def validate_expense_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate and normalize the supplied expense fields.

    Returns a new dict with coerced values (float amount, canonical category,
    trimmed description, naive UTC date). Raises `ExpenseValidationError`
    listing every violated rule, or `ValueError` for keys that are not
    expense fields at all.
    """
    unknown = set(fields) - set(EXPENSE_FIELDS)
    if unknown:
        raise ValueError(f"unknown expense field(s): {sorted(unknown)}")

    messages: List[str] = []
    clean: Dict[str, Any] = {}
    if "amount" in fields:
        clean["amount"] = _check_amount(fields["amount"], messages)
    if "category" in fields:
        clean["category"] = _check_category(fields["category"], messages)
    if "description" in fields:
        raw = fields["description"]
        clean["description"] = "" if raw is None else str(raw).strip()
    if "date" in fields:
        clean["date"] = _check_date(fields["date"], messages)

    if messages:
        raise ExpenseValidationError(messages)
    return clean

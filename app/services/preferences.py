"""User preferences backed by the metadata table.

Replaces the browser-local budget/theme storage with explicit load/save
operations. Reads are resilient: a missing or corrupt value falls back to the
configured default instead of failing the request.

Metadata keys:
  - monthly_budget: float >= 0 (default Settings.default_monthly_budget)
  - ui_theme: str in {light, dark}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from app.db.dal import Database
from app.models.constants import DEFAULT_THEME, THEMES

MONTHLY_BUDGET_KEY = "monthly_budget"
THEME_KEY = "ui_theme"

logger = logging.getLogger("app.preferences")


@dataclass
class UserPreferences:
    monthly_budget: float
    theme: str


def get_monthly_budget(db: Database, default: float) -> float:
    val = db.get_metadata(MONTHLY_BUDGET_KEY)
    if val is None:
        return default
    try:
        budget = float(val)
    except ValueError:
        logger.warning("ignoring corrupt monthly budget value %r", val)
        return default
    return budget if budget >= 0 else default


def set_monthly_budget(db: Database, amount: float) -> None:
    if amount < 0:
        raise ValueError("Monthly budget cannot be negative")
    db.set_metadata(MONTHLY_BUDGET_KEY, str(float(amount)))


def get_theme(db: Database) -> str:
    val = db.get_metadata(THEME_KEY)
    return val if val in THEMES else DEFAULT_THEME


def set_theme(db: Database, theme: str) -> None:
    if theme not in THEMES:
        raise ValueError(f"Unsupported theme '{theme}'")
    db.set_metadata(THEME_KEY, theme)


def load_preferences(db: Database, default_budget: float) -> UserPreferences:
    return UserPreferences(
        monthly_budget=get_monthly_budget(db, default_budget), theme=get_theme(db)
    )


def save_preferences(
    db: Database,
    default_budget: float,
    monthly_budget: Optional[float] = None,
    theme: Optional[str] = None,
) -> UserPreferences:
    """Persist whichever values are given and return the resulting preferences."""
    if monthly_budget is not None:
        set_monthly_budget(db, monthly_budget)
    if theme is not None:
        set_theme(db, theme)
    return load_preferences(db, default_budget)

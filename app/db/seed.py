"""Seeding helpers for demo data.

`seed_sample_expenses` inserts a small set of sample expenses dated relative
to today so the dashboard has something to chart. It goes through the normal
store path (validation, ids, timestamps). Run directly with
``python -m app.db.seed``.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from pathlib import Path
import logging
from typing import Sequence, Tuple

from .dal import Database
from .migrate import apply_migrations

logger = logging.getLogger("app.db.seed")

# (amount, category, description, days ago)
SAMPLE_EXPENSES: Sequence[Tuple[float, str, str, int]] = (
    (45.99, "Food", "Grocery shopping", 0),
    (120.00, "Travel", "Gas for weekend trip", 1),
    (89.50, "Shopping", "New running shoes", 2),
    (250.00, "Bills", "Electric bill", 5),
    (15.00, "Food", "Coffee with friends", 0),
    (75.00, "Other", "Charity donation", 7),
    (35.00, "Food", "Restaurant dinner", 3),
    (200.00, "Travel", "Hotel booking", 14),
)


def seed_sample_expenses(db_path: Path, now: datetime | None = None) -> int:
    apply_migrations(db_path)  # ensure tables exist
    now = now or datetime.now(timezone.utc)
    db = Database(db_path)
    for amount, category, description, days_ago in SAMPLE_EXPENSES:
        db.insert_expense(
            amount=amount,
            category=category,
            description=description,
            date=now - timedelta(days=days_ago),
        )
    logger.info("seeded %d sample expenses", len(SAMPLE_EXPENSES))
    return len(SAMPLE_EXPENSES)


if __name__ == "__main__":  # pragma: no cover
    from app.core.config import get_settings
    from app.core.logging import init_logging

    settings = get_settings()
    init_logging(debug=settings.debug)
    seed_sample_expenses(settings.db_path)

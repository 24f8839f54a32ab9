"""Database schema DDL definitions and initialization utilities.

Tables:
  - expenses: individual expense records (the only domain entity)
  - metadata: key/value store (schema version, user preferences)

Timestamps are stored as UTC text with millisecond precision
(``YYYY-MM-DDTHH:MM:SS.fffZ``) so that lexical order equals time order.
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

from app.models.constants import CATEGORIES

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

_CATEGORY_LIST = ", ".join(f"'{c}'" for c in CATEGORIES)

EXPENSES_DDL = f"""
CREATE TABLE IF NOT EXISTS expenses (
    id TEXT PRIMARY KEY,
    amount REAL NOT NULL CHECK (amount >= 0),
    category TEXT NOT NULL CHECK (category IN ({_CATEGORY_LIST})),
    description TEXT NOT NULL DEFAULT '',
    date TEXT NOT NULL, -- UTC timestamp, millisecond precision
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

EXPENSES_DATE_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_expenses_date ON expenses(date DESC);"
)
EXPENSES_CATEGORY_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_expenses_category ON expenses(category);"
)

DDL_ORDER: Sequence[str] = (
    EXPENSES_DDL,
    METADATA_DDL,
)

INDEX_DDL: Sequence[str] = (
    EXPENSES_DATE_INDEX_DDL,
    EXPENSES_CATEGORY_INDEX_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables and indexes idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        for ddl in INDEX_DDL:
            cur.execute(ddl)
        conn.commit()
    finally:
        conn.close()

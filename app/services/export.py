"""Flat CSV dump of the expense table."""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Any, Dict, Iterable

from app.db.dal import parse_db_timestamp
from app.services.money import format_amount
from app.services.periods import utc_today

CSV_HEADERS = ("Date", "Amount", "Category", "Description")


def export_filename(today: date | None = None) -> str:
    today = today or utc_today()
    return f"expenses-{today.isoformat()}.csv"


def expenses_to_csv(rows: Iterable[Dict[str, Any]]) -> str:
    """Render expense rows as CSV with every cell quoted."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for r in rows:
        writer.writerow(
            (
                parse_db_timestamp(r["date"]).date().isoformat(),
                format_amount(r["amount"]),
                r["category"],
                r.get("description") or "",
            )
        )
    return buf.getvalue()

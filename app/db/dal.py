"""Data Access Layer for expenses and metadata.

Responsibilities
----------------
- CRUD helpers for expenses; every write goes through
  `validate_expense_fields` so the table never holds an invalid record.
- Filtered listing (category, inclusive date bounds) ordered newest first.
- Aggregation helpers (total, per month, per category) used by the stats
  engine and budget checks.
- Raw metadata access for preferences and schema bookkeeping.

Rows are returned as plain dicts; timestamps stay in their stored text form
and are parsed with `parse_db_timestamp` at the API edge.
"""

from __future__ import annotations

import re
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from app.core.errors import InvalidIdError
from app.services.expense_validation import EXPENSE_FIELDS, validate_expense_fields

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"
EXPENSE_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def to_db_timestamp(value: datetime) -> str:
    """Format a naive UTC datetime the way SQLite's UTC_NOW_SQL does."""
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_db_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", ""))


def new_expense_id() -> str:
    return uuid.uuid4().hex


def check_expense_id(expense_id: str) -> str:
    if not isinstance(expense_id, str) or not EXPENSE_ID_RE.match(expense_id):
        raise InvalidIdError(str(expense_id))
    return expense_id


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _date_clauses(
        start: Optional[datetime], end: Optional[datetime]
    ) -> tuple[List[str], List[Any]]:
        clauses: List[str] = []
        params: List[Any] = []
        if start is not None:
            clauses.append("date >= ?")
            params.append(to_db_timestamp(start))
        if end is not None:
            clauses.append("date <= ?")
            params.append(to_db_timestamp(end))
        return clauses, params

    # ------------------------------------------------------------------
    # Expense CRUD
    def insert_expense(
        self,
        amount: Any,
        category: Any,
        date: Any,
        description: Any = "",
    ) -> Dict[str, Any]:
        clean = validate_expense_fields(
            {
                "amount": amount,
                "category": category,
                "description": description,
                "date": date,
            }
        )
        expense_id = new_expense_id()
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO expenses (id, amount, category, description, date, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ({UTC_NOW_SQL}), ({UTC_NOW_SQL}))
                """,
                (
                    expense_id,
                    clean["amount"],
                    clean["category"],
                    clean["description"],
                    to_db_timestamp(clean["date"]),
                ),
            )
            cur.execute("SELECT * FROM expenses WHERE id = ?", (expense_id,))
            row = cur.fetchone()
            conn.commit()
            return dict(row)

    def get_expense(self, expense_id: str) -> Optional[Dict[str, Any]]:
        check_expense_id(expense_id)
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM expenses WHERE id = ?", (expense_id,))
            row = cur.fetchone()
            return dict(row) if row else None

    def list_expenses(
        self,
        category: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        clauses, params = self._date_clauses(start, end)
        if category:
            clauses.append("category = ?")
            params.append(category)
        where = (" WHERE " + " AND ".join(clauses)) if clauses else ""
        sql = f"SELECT * FROM expenses{where} ORDER BY date DESC, created_at DESC"
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(sql, params)
            return [dict(r) for r in cur.fetchall()]

    def count_expenses(self) -> int:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM expenses")
            row = cur.fetchone()
            return int(row[0] if row and row[0] is not None else 0)

    def update_expense(
        self, expense_id: str, changes: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Apply only the keys present in `changes`; refresh updated_at regardless."""
        check_expense_id(expense_id)
        clean = validate_expense_fields(changes)
        assignments: List[str] = []
        params: List[Any] = []
        for field in EXPENSE_FIELDS:
            if field not in clean:
                continue
            value = clean[field]
            if field == "date":
                value = to_db_timestamp(value)
            assignments.append(f"{field} = ?")
            params.append(value)
        assignments.append(f"updated_at = ({UTC_NOW_SQL})")
        params.append(expense_id)
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"UPDATE expenses SET {', '.join(assignments)} WHERE id = ?", params
            )
            if cur.rowcount == 0:
                return None
            cur.execute("SELECT * FROM expenses WHERE id = ?", (expense_id,))
            row = cur.fetchone()
            conn.commit()
            return dict(row) if row else None

    def delete_expense(self, expense_id: str) -> Optional[Dict[str, Any]]:
        check_expense_id(expense_id)
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM expenses WHERE id = ?", (expense_id,))
            row = cur.fetchone()
            if not row:
                return None
            cur.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            if cur.rowcount == 0:
                # a concurrent delete removed it after our SELECT
                return None
            conn.commit()
            return dict(row)

    # ------------------------------------------------------------------
    # Aggregations
    def sum_amount(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> float:
        clauses, params = self._date_clauses(start, end)
        where = (" WHERE " + " AND ".join(clauses)) if clauses else ""
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(f"SELECT COALESCE(SUM(amount), 0.0) FROM expenses{where}", params)
            val = cur.fetchone()[0]
            return float(val or 0.0)

    def monthly_totals(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """Sums grouped by (year, month) of `date`, oldest month first."""
        clauses, params = self._date_clauses(start, end)
        where = (" WHERE " + " AND ".join(clauses)) if clauses else ""
        sql = f"""
            SELECT
                CAST(substr(date, 1, 4) AS INTEGER) AS year,
                CAST(substr(date, 6, 2) AS INTEGER) AS month,
                SUM(amount) AS total
            FROM expenses
            {where}
            GROUP BY year, month
            ORDER BY year ASC, month ASC
        """
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(sql, params)
            return [dict(r) for r in cur.fetchall()]

    def category_totals(self) -> List[Dict[str, Any]]:
        """Sums grouped by category, largest first (ties by name)."""
        sql = """
            SELECT category, SUM(amount) AS total
            FROM expenses
            GROUP BY category
            ORDER BY total DESC, category ASC
        """
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(sql)
            return [dict(r) for r in cur.fetchall()]

    # ------------------------------------------------------------------
    # Metadata
    def get_metadata(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT value FROM metadata WHERE key = ?", (key,))
            row = cur.fetchone()
            return row[0] if row else None

    def set_metadata(self, key: str, value: str) -> None:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO metadata (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = ({UTC_NOW_SQL})
                """,
                (key, value),
            )
            conn.commit()

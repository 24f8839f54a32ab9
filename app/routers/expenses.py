import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from app.core.deps import get_db
from app.core.errors import ExpenseNotFoundError, ExpenseValidationError
from app.db.dal import Database, parse_db_timestamp
from app.models.constants import ALL_CATEGORIES, CATEGORIES
from app.models.expense import (
    ExpenseCreateIn,
    ExpenseDeletedOut,
    ExpenseOut,
    ExpenseUpdateIn,
)
from app.models.stats import CategoryTotal, MonthKey, MonthlyTotal, StatsSnapshot
from app.services.export import expenses_to_csv, export_filename
from app.services.periods import end_of_day, start_of_day, utc_now
from app.services.stats import compute_stats

router = APIRouter(prefix="/api/expenses", tags=["expenses"])

logger = logging.getLogger("app.expenses")


# Helpers ----------------------------------------------------------


def _row_to_expense_out(row: dict) -> ExpenseOut:
    return ExpenseOut(
        id=row["id"],
        amount=row["amount"],
        category=row["category"],
        description=row.get("description") or "",
        date=parse_db_timestamp(row["date"]),
        created_at=parse_db_timestamp(row["created_at"]),
        updated_at=parse_db_timestamp(row["updated_at"]),
    )


def _resolve_filters(
    category: Optional[str], start_date: Optional[date], end_date: Optional[date]
) -> dict:
    """Translate list query params into store filter arguments."""
    if start_date and end_date and start_date > end_date:
        raise ExpenseValidationError(["startDate cannot be after endDate"])
    if category == ALL_CATEGORIES or not category:
        category = None
    elif category not in CATEGORIES:
        raise ExpenseValidationError([f"{category} is not a valid category"])
    return {
        "category": category,
        "start": start_of_day(start_date) if start_date else None,
        # endDate covers the whole day so a single-day range is inclusive
        "end": end_of_day(end_date) if end_date else None,
    }


# Routes -----------------------------------------------------------
@router.get(
    "", response_model=List[ExpenseOut], summary="List expenses with optional filters"
)
async def list_expenses_endpoint(
    category: Optional[str] = Query(
        None, description="Category filter; 'all' means no filter"
    ),
    start_date: Optional[date] = Query(
        None, alias="startDate", description="Filter: start date inclusive"
    ),
    end_date: Optional[date] = Query(
        None, alias="endDate", description="Filter: end date inclusive"
    ),
    db: Database = Depends(get_db),
):
    filters = _resolve_filters(category, start_date, end_date)
    rows = db.list_expenses(**filters)
    return [_row_to_expense_out(r) for r in rows]


@router.get(
    "/stats", response_model=StatsSnapshot, summary="Dashboard statistics snapshot"
)
async def stats_endpoint(
    month: Optional[int] = Query(None, ge=1, le=12, description="Reference month"),
    year: Optional[int] = Query(None, ge=1, le=9999, description="Reference year"),
    db: Database = Depends(get_db),
):
    """Return all-time total, reference month total, trailing 6-month series
    and category breakdown.

    month/year default to the current month; passing only one of them is a 400.
    """
    try:
        result = compute_stats(db, month=month, year=year)
    except ValueError as e:
        raise ExpenseValidationError([str(e)]) from e
    return StatsSnapshot(
        total_expenses=result.total_expenses,
        monthly_total=result.monthly_total,
        monthly_data=[
            MonthlyTotal(key=MonthKey(year=b.year, month=b.month), total=b.total)
            for b in result.monthly_data
        ],
        category_data=[
            CategoryTotal(category=b.category, total=b.total)
            for b in result.category_data
        ],
    )


@router.get("/export", summary="Download the (filtered) expense table as CSV")
async def export_expenses_endpoint(
    category: Optional[str] = Query(None, description="Same as list filter"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Database = Depends(get_db),
):
    filters = _resolve_filters(category, start_date, end_date)
    rows = db.list_expenses(**filters)
    return Response(
        content=expenses_to_csv(rows),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename()}"'
        },
    )


@router.get(
    "/categories", response_model=List[str], summary="Allowed expense categories"
)
async def list_categories_endpoint():
    return list(CATEGORIES)


@router.get("/{expense_id}", response_model=ExpenseOut, summary="Fetch one expense")
async def get_expense_endpoint(expense_id: str, db: Database = Depends(get_db)):
    row = db.get_expense(expense_id)
    if not row:
        raise ExpenseNotFoundError(expense_id)
    return _row_to_expense_out(row)


@router.post("", response_model=ExpenseOut, status_code=201, summary="Create an expense")
async def create_expense(payload: ExpenseCreateIn, db: Database = Depends(get_db)):
    row = db.insert_expense(
        amount=payload.amount,
        category=payload.category,
        description=payload.description or "",
        date=payload.date or utc_now(),
    )
    logger.info("expense created", extra={"expense_id": row["id"]})
    return _row_to_expense_out(row)


@router.put(
    "/{expense_id}", response_model=ExpenseOut, summary="Edit an expense (partial)"
)
async def update_expense(
    expense_id: str,
    payload: ExpenseUpdateIn,
    db: Database = Depends(get_db),
):
    row = db.update_expense(expense_id, payload.changes())
    if not row:
        raise ExpenseNotFoundError(expense_id)
    logger.info("expense updated", extra={"expense_id": expense_id})
    return _row_to_expense_out(row)


@router.delete(
    "/{expense_id}", response_model=ExpenseDeletedOut, summary="Delete an expense"
)
async def delete_expense(expense_id: str, db: Database = Depends(get_db)):
    row = db.delete_expense(expense_id)
    if not row:
        raise ExpenseNotFoundError(expense_id)
    logger.info("expense deleted", extra={"expense_id": expense_id})
    return ExpenseDeletedOut(
        message="Expense deleted successfully", expense=_row_to_expense_out(row)
    )

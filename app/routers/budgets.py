from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.config import Settings
from app.core.deps import get_app_settings, get_db
from app.core.errors import ExpenseValidationError
from app.db.dal import Database
from app.models.settings import BudgetStatusOut
from app.services.budget import budget_status
from app.services.preferences import get_monthly_budget
from app.services.stats import compute_monthly_total, resolve_reference_month

router = APIRouter(prefix="/api/budget", tags=["budget"])


@router.get(
    "/status",
    response_model=BudgetStatusOut,
    summary="Monthly spend measured against the saved monthly budget",
)
async def budget_status_endpoint(
    month: Optional[int] = Query(None, ge=1, le=12, description="Reference month"),
    year: Optional[int] = Query(None, ge=1, le=9999, description="Reference year"),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    try:
        ref_year, ref_month = resolve_reference_month(month, year)
    except ValueError as e:
        raise ExpenseValidationError([str(e)]) from e
    status = budget_status(
        monthly_total=compute_monthly_total(db, ref_year, ref_month),
        monthly_budget=get_monthly_budget(db, settings.default_monthly_budget),
        warn_pct=settings.budget_warn_pct,
    )
    return BudgetStatusOut(
        monthly_budget=status.monthly_budget,
        monthly_total=status.monthly_total,
        remaining=status.remaining,
        percent_used=status.percent_used,
        status=status.status,
    )

from fastapi import APIRouter, Depends

from app.core.config import Settings
from app.core.deps import get_app_settings, get_db
from app.core.errors import ExpenseValidationError
from app.db.dal import Database
from app.models.settings import Preferences, PreferencesUpdateIn
from app.services.preferences import load_preferences, save_preferences

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=Preferences, summary="Load user preferences")
async def get_preferences(
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    prefs = load_preferences(db, settings.default_monthly_budget)
    return Preferences(monthly_budget=prefs.monthly_budget, theme=prefs.theme)


@router.put("", response_model=Preferences, summary="Save user preferences (partial)")
async def put_preferences(
    payload: PreferencesUpdateIn,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    try:
        prefs = save_preferences(
            db,
            settings.default_monthly_budget,
            monthly_budget=payload.monthly_budget,
            theme=payload.theme,
        )
    except ValueError as e:
        raise ExpenseValidationError([str(e)]) from e
    return Preferences(monthly_budget=prefs.monthly_budget, theme=prefs.theme)

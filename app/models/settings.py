from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Theme = Literal["light", "dark"]
BudgetState = Literal["ok", "warning", "exceeded"]


class Preferences(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    monthly_budget: float = Field(alias="monthlyBudget")
    theme: Theme


class PreferencesUpdateIn(BaseModel):
    """Partial preferences update; omitted keys keep their stored value."""

    model_config = ConfigDict(populate_by_name=True)

    monthly_budget: Optional[float] = Field(None, ge=0, alias="monthlyBudget")
    theme: Optional[Theme] = None


class BudgetStatusOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    monthly_budget: float = Field(alias="monthlyBudget")
    monthly_total: float = Field(alias="monthlyTotal")
    remaining: float
    percent_used: float = Field(alias="percentUsed")
    status: BudgetState

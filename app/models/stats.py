from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class MonthKey(BaseModel):
    year: int
    month: int


class MonthlyTotal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    key: MonthKey = Field(alias="_id")
    total: float


class CategoryTotal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: str = Field(alias="_id")
    total: float


class StatsSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_expenses: float = Field(alias="totalExpenses")
    monthly_total: float = Field(alias="monthlyTotal")
    monthly_data: List[MonthlyTotal] = Field(alias="monthlyData")
    category_data: List[CategoryTotal] = Field(alias="categoryData")

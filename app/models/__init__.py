"""Pydantic domain models for the Smart Expense Tracker."""

from .constants import CATEGORIES, Category  # re-export
from .expense import ExpenseCreateIn, ExpenseDeletedOut, ExpenseOut, ExpenseUpdateIn
from .settings import BudgetStatusOut, Preferences, PreferencesUpdateIn
from .stats import CategoryTotal, MonthKey, MonthlyTotal, StatsSnapshot

__all__ = [
    "CATEGORIES",
    "Category",
    "ExpenseCreateIn",
    "ExpenseUpdateIn",
    "ExpenseOut",
    "ExpenseDeletedOut",
    "Preferences",
    "PreferencesUpdateIn",
    "BudgetStatusOut",
    "MonthKey",
    "MonthlyTotal",
    "CategoryTotal",
    "StatsSnapshot",
]

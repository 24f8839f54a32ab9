"""Domain constants and enumerations for validation.

`Category` is the one place the closed category set is declared; store
validation, list filtering and the categories endpoint all read from it.
"""

from enum import Enum
from typing import Tuple


class Category(str, Enum):
    FOOD = "Food"
    TRAVEL = "Travel"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    OTHER = "Other"


CATEGORIES: Tuple[str, ...] = tuple(c.value for c in Category)

# Sentinel accepted by the list/export filters meaning "no category constraint".
ALL_CATEGORIES = "all"

THEMES: Tuple[str, ...] = ("light", "dark")
DEFAULT_THEME = "light"

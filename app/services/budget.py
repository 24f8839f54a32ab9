"""Monthly budget status.

Compares a month's spend against the stored monthly budget:
  - exceeded: spend >= budget
  - warning:  spend >= warn_pct% of budget
  - ok:       otherwise

A zero budget counts as exceeded as soon as anything is spent.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.services.money import percent_of, round2


@dataclass(frozen=True)
class BudgetStatus:
    monthly_budget: float
    monthly_total: float
    remaining: float
    percent_used: float
    status: str


def budget_status(monthly_total: float, monthly_budget: float, warn_pct: int) -> BudgetStatus:
    if monthly_budget <= 0:
        state = "exceeded" if monthly_total > 0 else "ok"
    elif monthly_total >= monthly_budget:
        state = "exceeded"
    elif monthly_total >= monthly_budget * warn_pct / 100:
        state = "warning"
    else:
        state = "ok"
    return BudgetStatus(
        monthly_budget=round2(monthly_budget),
        monthly_total=round2(monthly_total),
        remaining=round2(max(monthly_budget - monthly_total, 0.0)),
        percent_used=percent_of(monthly_total, monthly_budget),
        status=state,
    )

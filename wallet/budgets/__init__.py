"""Budgets package."""

from wallet.budgets.store import BudgetStore
from wallet.budgets.tracker import (
    NO_LIMIT_PERCENTAGE,
    BudgetTracker,
    budget_status,
    expenses_by_category,
)

__all__ = [
    "NO_LIMIT_PERCENTAGE",
    "BudgetStore",
    "BudgetTracker",
    "budget_status",
    "expenses_by_category",
]

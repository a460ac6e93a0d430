"""
Budget Tracker

Pure projection of ledger + budgets into a spend-vs-limit view for one
calendar month. Recomputed on every call; nothing is cached.

Only categories with a budget are reported. Spend in other categories
stays visible in the raw ledger and in the spending breakdown.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from wallet.models.analytics import BudgetStatus
from wallet.models.ledger import Budget, Transaction, TransactionType
from wallet.periods import YearMonth, in_month, month_of
from wallet.state import DomainState


# Reported percentage for a budget whose limit is not positive.
NO_LIMIT_PERCENTAGE = 100.0


def expenses_by_category(
    transactions: Iterable[Transaction],
    month: YearMonth,
) -> dict[str, Decimal]:
    """Sum of expense amounts per category within the month."""
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for t in transactions:
        if t.type == TransactionType.EXPENSE and in_month(t.date, month):
            totals[t.category] += t.amount
    return dict(totals)


def budget_status(budget: Budget, spent: Decimal) -> BudgetStatus:
    """
    Spend-vs-limit for one budget.

    A limit of zero or below cannot be divided by: such a budget is always
    over, with the percentage pinned to NO_LIMIT_PERCENTAGE.
    """
    if budget.limit <= 0:
        percentage = NO_LIMIT_PERCENTAGE
        over = True
    else:
        percentage = float(spent / budget.limit * 100)
        over = percentage > 100
    return BudgetStatus(
        category=budget.category,
        color=budget.color,
        spent=spent,
        limit=budget.limit,
        percentage=percentage,
        is_over_budget=over,
    )


class BudgetTracker:
    """Computes budget consumption from a `DomainState`."""

    def __init__(
        self,
        state: DomainState,
        clock: Callable[[], date] = date.today,
    ):
        self._state = state
        self._clock = clock

    def track(self, month: Optional[YearMonth] = None) -> list[BudgetStatus]:
        """
        Budget consumption for `month` (default: the current month).

        Returns one entry per budget, in budget order.
        """
        month = month or month_of(self._clock())
        spending = expenses_by_category(self._state.transactions, month)
        return [
            budget_status(budget, spending.get(budget.category, Decimal("0")))
            for budget in self._state.budgets
        ]

    def status_for(
        self,
        category: str,
        month: Optional[YearMonth] = None,
    ) -> Optional[BudgetStatus]:
        """Consumption of a single budget, or None if it does not exist."""
        for status in self.track(month):
            if status.category == category:
                return status
        return None

    def over_budget(self, month: Optional[YearMonth] = None) -> list[BudgetStatus]:
        return [s for s in self.track(month) if s.is_over_budget]

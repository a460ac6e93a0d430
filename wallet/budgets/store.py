"""Budget definitions, keyed by category."""

from decimal import Decimal
from typing import Optional, Union

import structlog

from wallet.errors import DuplicateBudgetError
from wallet.models.ledger import Budget
from wallet.state import (
    ChangeAction,
    ColorPolicy,
    CyclingColorPolicy,
    DomainState,
    EntityKind,
    index_by_key,
    replace_fields,
)


class BudgetStore:
    """
    Budget CRUD on a `DomainState`.

    There is at most one budget per category. Colors are assigned by the
    injected policy when the caller does not pick one.
    """

    def __init__(
        self,
        state: DomainState,
        color_policy: Optional[ColorPolicy] = None,
    ):
        self._state = state
        self._colors = color_policy or CyclingColorPolicy()
        self._logger = structlog.get_logger(__name__)

    def add(
        self,
        category: str,
        limit: Union[Decimal, int, float, str],
        color: Optional[str] = None,
    ) -> Budget:
        """
        Create a budget.

        Raises:
            DuplicateBudgetError: If the category already has a budget
            ValidationError: If the limit is not positive or the category empty
        """
        budget = Budget(
            category=category,
            limit=limit,
            color=color or self._colors.next_color([b.color for b in self._state.budgets]),
        )
        if index_by_key(self._state.budgets, budget.category, key="category") is not None:
            raise DuplicateBudgetError(budget.category)

        self._state.budgets.append(budget)
        self._state.notify(EntityKind.BUDGET, ChangeAction.ADDED, budget.category)
        return budget

    def update(
        self,
        category: str,
        limit: Union[Decimal, int, float, str],
    ) -> Optional[Budget]:
        """Change the limit of a budget. None if the category has no budget."""
        index = index_by_key(self._state.budgets, category, key="category")
        if index is None:
            self._logger.debug("budget_not_found", category=category, op="update")
            return None

        updated = replace_fields(self._state.budgets[index], {"limit": limit}, keep=("category",))
        self._state.budgets[index] = updated
        self._state.notify(EntityKind.BUDGET, ChangeAction.UPDATED, category)
        return updated

    def delete(self, category: str) -> bool:
        index = index_by_key(self._state.budgets, category, key="category")
        if index is None:
            self._logger.debug("budget_not_found", category=category, op="delete")
            return False

        del self._state.budgets[index]
        self._state.notify(EntityKind.BUDGET, ChangeAction.DELETED, category)
        return True

    def get(self, category: str) -> Optional[Budget]:
        index = index_by_key(self._state.budgets, category, key="category")
        return None if index is None else self._state.budgets[index]

    def list(self) -> list[Budget]:
        return list(self._state.budgets)

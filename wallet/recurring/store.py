"""Recurring bill and income templates."""

from decimal import Decimal
from typing import Optional, Union

import structlog

from wallet.audit import AuditLogger
from wallet.models.ledger import RecurringTransaction, TransactionType, new_id
from wallet.state import ChangeAction, DomainState, EntityKind, index_by_key, replace_fields
from wallet.validation import EntryValidator


class RecurringStore:
    """CRUD for `RecurringTransaction` templates on a `DomainState`."""

    def __init__(
        self,
        state: DomainState,
        validator: Optional[EntryValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._state = state
        self._validator = validator
        self._audit_logger = audit_logger
        self._logger = structlog.get_logger(__name__)

    def _advise(self, template: RecurringTransaction) -> None:
        if not self._validator:
            return
        result = self._validator.check_recurring(template, self._state.recurring_transactions)
        if result.issues and self._audit_logger:
            self._audit_logger.log_validation_warnings("recurring", result.as_dicts())

    def add(
        self,
        type: TransactionType,
        amount: Union[Decimal, int, float, str],
        category: str,
        description: str,
        day_of_month: int,
        is_active: bool = True,
    ) -> RecurringTransaction:
        template = RecurringTransaction(
            id=new_id(),
            type=type,
            amount=amount,
            category=category,
            description=description,
            day_of_month=day_of_month,
            is_active=is_active,
        )
        self._advise(template)

        self._state.recurring_transactions.append(template)
        self._state.notify(EntityKind.RECURRING, ChangeAction.ADDED, template.id)
        return template

    def update(self, recurring_id: str, **changes) -> Optional[RecurringTransaction]:
        """Partial update, e.g. `update(id, is_active=False)` to pause a bill."""
        index = index_by_key(self._state.recurring_transactions, recurring_id)
        if index is None:
            self._logger.debug("recurring_not_found", recurring_id=recurring_id, op="update")
            return None

        updated = replace_fields(self._state.recurring_transactions[index], changes)
        self._advise(updated)
        self._state.recurring_transactions[index] = updated
        self._state.notify(EntityKind.RECURRING, ChangeAction.UPDATED, recurring_id)
        return updated

    def delete(self, recurring_id: str) -> bool:
        index = index_by_key(self._state.recurring_transactions, recurring_id)
        if index is None:
            self._logger.debug("recurring_not_found", recurring_id=recurring_id, op="delete")
            return False

        del self._state.recurring_transactions[index]
        self._state.notify(EntityKind.RECURRING, ChangeAction.DELETED, recurring_id)
        return True

    def get(self, recurring_id: str) -> Optional[RecurringTransaction]:
        index = index_by_key(self._state.recurring_transactions, recurring_id)
        return None if index is None else self._state.recurring_transactions[index]

    def list(self) -> list[RecurringTransaction]:
        return list(self._state.recurring_transactions)

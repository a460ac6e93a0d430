"""
Ledger Store

CRUD over the ordered collection of transactions.

GUARANTEES:
- Insertion order is preserved; `list()` never sorts
- Every stored transaction passed model validation (amount > 0, ...)
- Update/delete of an unknown id is a no-op, not an error
"""

from datetime import date
from typing import Optional

import structlog

from wallet.audit import AuditLogger
from wallet.models.ledger import Transaction, TransactionDraft, TransactionType, new_id
from wallet.state import ChangeAction, DomainState, EntityKind, index_by_key, replace_fields
from wallet.validation import EntryValidator


class LedgerStore:
    """Transaction CRUD on a `DomainState`."""

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

    def add(self, draft: TransactionDraft) -> Transaction:
        """
        Record a new transaction.

        Advisory checks (untracked category, future date, huge amount) are
        audited but never block the add.
        """
        if self._validator:
            result = self._validator.check_transaction(draft, self._state.budgets)
            if result.issues and self._audit_logger:
                self._audit_logger.log_validation_warnings("transaction", result.as_dicts())

        transaction = Transaction(id=new_id(), **draft.model_dump())
        self._state.transactions.append(transaction)
        self._state.notify(EntityKind.TRANSACTION, ChangeAction.ADDED, transaction.id)
        return transaction

    def update(self, transaction_id: str, **changes) -> Optional[Transaction]:
        """
        Partially replace the fields of a transaction.

        Returns the updated transaction, or None if the id is unknown.
        The id itself cannot be changed.
        """
        index = index_by_key(self._state.transactions, transaction_id)
        if index is None:
            self._logger.debug("transaction_not_found", transaction_id=transaction_id, op="update")
            return None

        updated = replace_fields(self._state.transactions[index], changes)
        self._state.transactions[index] = updated
        self._state.notify(EntityKind.TRANSACTION, ChangeAction.UPDATED, transaction_id)
        return updated

    def delete(self, transaction_id: str) -> bool:
        """Remove a transaction. Returns False if the id is unknown."""
        index = index_by_key(self._state.transactions, transaction_id)
        if index is None:
            self._logger.debug("transaction_not_found", transaction_id=transaction_id, op="delete")
            return False

        del self._state.transactions[index]
        self._state.notify(EntityKind.TRANSACTION, ChangeAction.DELETED, transaction_id)
        return True

    def get(self, transaction_id: str) -> Optional[Transaction]:
        index = index_by_key(self._state.transactions, transaction_id)
        return None if index is None else self._state.transactions[index]

    def query(
        self,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[Transaction]:
        """
        Filtered view, newest first.

        Date bounds are inclusive. Transactions on the same date keep their
        insertion order.
        """
        matches = [
            t for t in self._state.transactions
            if (type is None or t.type == type)
            and (category is None or t.category == category)
            and (date_from is None or t.date >= date_from)
            and (date_to is None or t.date <= date_to)
        ]
        return sorted(matches, key=lambda t: t.date, reverse=True)

    # Defined last: from here on `list` in the class body is this method.
    def list(self) -> list[Transaction]:
        """All transactions in insertion order."""
        return list(self._state.transactions)

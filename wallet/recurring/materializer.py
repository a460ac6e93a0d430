"""
Recurring Materializer

Turns active recurring templates into concrete ledger entries on their
due day.

GUARANTEES:
- Idempotent per day: a template is booked at most once per date, however
  often `process` runs. The guard is an existing recurring entry with the
  same date and description.
- Paused templates (is_active=False) are never booked and never due.
- Fail-soft: a broken template is logged and skipped, the rest of the
  batch still runs.

There is no timer. The orchestrator calls `process` once per session
start; calling it again the same day is harmless.
"""

from datetime import date
from typing import Callable, Optional

import structlog
from dateutil.relativedelta import relativedelta

from wallet.audit import AuditLogger
from wallet.ledger import LedgerStore
from wallet.models.analytics import UpcomingBill
from wallet.models.ledger import (
    RecurringTransaction,
    Transaction,
    TransactionDraft,
    TransactionType,
)
from wallet.state import DomainState


class RecurringMaterializer:
    """Books due recurring templates into the ledger."""

    def __init__(
        self,
        state: DomainState,
        ledger: LedgerStore,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], date] = date.today,
    ):
        self._state = state
        self._ledger = ledger
        self._audit_logger = audit_logger
        self._clock = clock
        self._logger = structlog.get_logger(__name__)

    def _already_booked(self, description: str, on: date) -> bool:
        return any(
            t.is_recurring and t.date == on and t.description == description
            for t in self._state.transactions
        )

    def _materialize(self, template: RecurringTransaction, today: date) -> Optional[Transaction]:
        if not template.is_active or template.day_of_month != today.day:
            return None
        if self._already_booked(template.description, today):
            return None

        draft = TransactionDraft(
            type=template.type,
            amount=template.amount,
            category=template.category,
            description=template.description,
            date=today,
            is_recurring=True,
            recurring_day=template.day_of_month,
        )
        return self._ledger.add(draft)

    def process(self, today: Optional[date] = None) -> list[Transaction]:
        """
        Book every active template due on `today` (default: the clock's date).

        Returns the transactions created by this run; empty when everything
        due was already booked.
        """
        today = today or self._clock()
        booked = []

        for template in list(self._state.recurring_transactions):
            recurring_id = getattr(template, "id", None)
            try:
                transaction = self._materialize(template, today)
            except Exception as e:
                self._logger.error(
                    "recurring_materialize_failed",
                    recurring_id=recurring_id,
                    error=str(e),
                )
                if self._audit_logger:
                    self._audit_logger.log_recurring_failed(recurring_id, str(e))
                continue

            if transaction is None:
                continue
            booked.append(transaction)
            if self._audit_logger:
                self._audit_logger.log_recurring_materialized(
                    recurring_id=recurring_id,
                    transaction_id=transaction.id,
                    description=transaction.description,
                    on=today.isoformat(),
                )

        return booked

    def upcoming(
        self,
        today: Optional[date] = None,
        horizon_days: int = 14,
    ) -> list[UpcomingBill]:
        """
        Active recurring expenses due within `horizon_days`, soonest first.

        A template whose day has already passed this month is due next month.
        """
        today = today or self._clock()
        bills = []

        for template in self._state.recurring_transactions:
            if not template.is_active or template.type != TransactionType.EXPENSE:
                continue
            next_due = today.replace(day=template.day_of_month)
            if next_due < today:
                next_due += relativedelta(months=1)
            days_until = (next_due - today).days
            if days_until > horizon_days:
                continue
            bills.append(UpcomingBill(
                recurring_id=template.id,
                description=template.description,
                category=template.category,
                amount=template.amount,
                next_due=next_due,
                days_until=days_until,
            ))

        return sorted(bills, key=lambda b: b.days_until)

"""
Advisory Entry Validation

DESIGN DECISION: Validation happens in two distinct layers:

LAYER 1 - SCHEMA (the pydantic models):
- Positive amounts and limits
- Day of month within 1..28
- Known milestone percentages
- Required text fields present
This layer rejects: an invalid record is never stored.

LAYER 2 - SEMANTIC (this module):
- Expense in a category without a budget (untracked spend)
- Entry dated far in the future
- Absurdly large amount
- Recurring template whose description collides with another active one
This layer only advises. Findings are returned and audited; the entry is
still accepted.

IMPORTANT: Validation NEVER silently fixes issues.
"""

from datetime import date, timedelta
from typing import Callable, Optional, Sequence

from wallet.config import AppSettings, get_settings
from wallet.models.ledger import (
    Budget,
    RecurringTransaction,
    TransactionDraft,
    TransactionType,
)
from wallet.models.validation import ValidationIssue, ValidationResult


class EntryValidator:
    """Semantic checks for ledger entries and recurring templates."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        clock: Callable[[], date] = date.today,
    ):
        self._settings = settings or get_settings().app
        self._clock = clock

    def check_transaction(
        self,
        draft: TransactionDraft,
        budgets: Sequence[Budget],
    ) -> ValidationResult:
        issues = []

        if draft.type == TransactionType.EXPENSE:
            tracked = {b.category for b in budgets}
            if draft.category not in tracked:
                issues.append(ValidationIssue(
                    field="category",
                    issue_type="untracked_category",
                    message=f"No budget exists for '{draft.category}'",
                    severity="info",
                    suggested_fix="Add a budget to track this category",
                ))

        latest = self._clock() + timedelta(days=self._settings.future_date_tolerance_days)
        if draft.date > latest:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Entry is dated {draft.date.isoformat()}, far in the future",
                severity="warning",
                suggested_fix="Check the year and month of the entry",
            ))

        issues.extend(self._check_amount(draft.amount))
        return ValidationResult(issues=issues)

    def check_recurring(
        self,
        template: RecurringTransaction,
        existing: Sequence[RecurringTransaction],
    ) -> ValidationResult:
        issues = []

        clashes = [
            other for other in existing
            if other.id != template.id
            and other.is_active
            and other.description == template.description
            and other.day_of_month == template.day_of_month
        ]
        if template.is_active and clashes:
            issues.append(ValidationIssue(
                field="description",
                issue_type="duplicate_description",
                message=(
                    f"Another active entry named '{template.description}' is due on "
                    f"day {template.day_of_month}; only one of them will be booked"
                ),
                severity="warning",
                suggested_fix="Give each recurring entry a distinct description",
            ))

        issues.extend(self._check_amount(template.amount))
        return ValidationResult(issues=issues)

    def _check_amount(self, amount) -> list[ValidationIssue]:
        if float(amount) > self._settings.max_transaction_amount:
            return [ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount {amount} seems unusually high",
                severity="warning",
                suggested_fix="Check for an extra digit",
            )]
        return []

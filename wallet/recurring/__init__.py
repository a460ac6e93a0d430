"""Recurring transactions package."""

from wallet.recurring.materializer import RecurringMaterializer
from wallet.recurring.store import RecurringStore

__all__ = ["RecurringMaterializer", "RecurringStore"]

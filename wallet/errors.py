"""
Engine exceptions.

The taxonomy is shallow: unknown ids are not errors (update/delete of a
missing record is a no-op), and malformed records are rejected by model
validation. What remains is raised from here.
"""


class WalletError(Exception):
    """Base exception for engine operations."""
    pass


class InvalidInputError(WalletError, ValueError):
    """An operation argument violates a ledger invariant."""
    pass


class DuplicateBudgetError(WalletError):
    """A budget for this category already exists."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"A budget for '{category}' already exists")

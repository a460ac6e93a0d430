"""Validation package."""

from wallet.validation.validator import EntryValidator

__all__ = ["EntryValidator"]

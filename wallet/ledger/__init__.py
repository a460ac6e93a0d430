"""Ledger package."""

from wallet.ledger.store import LedgerStore

__all__ = ["LedgerStore"]

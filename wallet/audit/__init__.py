"""Audit logging package."""

from wallet.audit.logger import AuditLogger

__all__ = ["AuditLogger"]

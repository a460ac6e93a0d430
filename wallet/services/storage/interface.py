"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the JSON file backend today and swap it later
2. Use in-memory storage for testing
3. Keep the domain logic decoupled from where snapshots live

The interface is intentionally simple. The engine persists the whole
domain state as one snapshot under one name; there is no incremental
or log-structured persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional

from wallet.models.audit import AuditEvent
from wallet.models.ledger import DomainSnapshot


class StateStorageInterface(ABC):
    """
    Abstract interface for whole-state snapshot storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load_snapshot(self, name: str) -> Optional[DomainSnapshot]:
        """
        Load the snapshot stored under `name`.

        Returns:
            The snapshot, or None if nothing has been stored yet

        Raises:
            SnapshotCorruptError: If stored data cannot be parsed
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save_snapshot(self, name: str, snapshot: DomainSnapshot) -> bool:
        """
        Replace the snapshot stored under `name`.

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    def delete_snapshot(self, name: str) -> bool:
        """
        Remove the snapshot stored under `name`.

        Returns:
            True if something was deleted
        """
        pass

    @abstractmethod
    def list_snapshots(self) -> list[str]:
        """Names of all stored snapshots."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity, in chronological order.
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class SnapshotCorruptError(StorageError):
    """Stored snapshot exists but cannot be parsed."""
    pass

"""
Snapshot persistence subscriber.

Listens to domain state changes and rewrites the whole snapshot after
each one. Failures are logged and swallowed: the in-memory state stays
authoritative and the next successful mutation writes it out again.
"""

from typing import Callable, Optional

import structlog

from wallet.audit import AuditLogger
from wallet.services.storage import StateStorageInterface
from wallet.state.container import DomainState, StateChange


class SnapshotPersister:
    """Writes the whole domain state to storage on every change."""

    def __init__(
        self,
        state: DomainState,
        storage: StateStorageInterface,
        storage_name: str,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._state = state
        self._storage = storage
        self._storage_name = storage_name
        self._audit_logger = audit_logger
        self._logger = structlog.get_logger(__name__)
        self.failures = 0

    def attach(self) -> Callable[[], None]:
        """Subscribe to the state. Returns the unsubscribe callable."""
        return self._state.subscribe(self)

    def flush(self, reason: str = "manual") -> bool:
        """Persist the current state now. Returns False on failure."""
        try:
            self._storage.save_snapshot(self._storage_name, self._state.snapshot())
        except Exception as e:
            self.failures += 1
            self._logger.error(
                "snapshot_save_failed",
                storage_name=self._storage_name,
                error=str(e),
            )
            if self._audit_logger:
                self._audit_logger.log_snapshot_save_failed(self._storage_name, str(e))
            return False

        if self._audit_logger:
            self._audit_logger.log_snapshot_saved(self._storage_name, reason)
        return True

    def __call__(self, change: StateChange) -> None:
        self.flush(reason=f"{change.entity.value}_{change.action.value}")

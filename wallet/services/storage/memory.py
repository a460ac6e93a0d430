"""In-memory storage, for tests and throwaway sessions."""

from typing import Optional

from pydantic import ValidationError

from wallet.models.audit import AuditEvent
from wallet.models.ledger import DomainSnapshot
from wallet.services.storage.interface import (
    AuditStorageInterface,
    SnapshotCorruptError,
    StateStorageInterface,
)


class InMemoryStateStorage(StateStorageInterface):
    """
    Keeps serialized snapshots in a dict.

    Snapshots are stored as JSON text so a load returns an independent copy,
    the same as reading a file back would.
    """

    def __init__(self):
        self._snapshots: dict[str, str] = {}
        self.save_count = 0

    def load_snapshot(self, name: str) -> Optional[DomainSnapshot]:
        raw = self._snapshots.get(name)
        if raw is None:
            return None
        try:
            return DomainSnapshot.model_validate_json(raw)
        except ValidationError as e:
            raise SnapshotCorruptError(f"Snapshot {name} is not valid: {e}") from e

    def save_snapshot(self, name: str, snapshot: DomainSnapshot) -> bool:
        self._snapshots[name] = snapshot.model_dump_json()
        self.save_count += 1
        return True

    def delete_snapshot(self, name: str) -> bool:
        return self._snapshots.pop(name, None) is not None

    def list_snapshots(self) -> list[str]:
        return sorted(self._snapshots)


class InMemoryAuditStorage(AuditStorageInterface):

    def __init__(self):
        self.events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return True

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            e for e in self.events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self.events))[:limit]

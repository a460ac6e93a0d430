"""
JSON File Storage Implementation

DESIGN DECISION: Snapshots are plain JSON files because:
1. The state of a single-user tracker is small
2. Users can inspect and back up their data by copying a file
3. No database setup required

Each snapshot lives in `<data_dir>/<name>.json` and is rewritten wholesale.
Writes go to a temporary file first and are swapped in with os.replace,
so a crash mid-write leaves the previous snapshot intact.

Audit events are appended to `<data_dir>/<name>.audit.jsonl`.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from wallet.config import get_settings
from wallet.models.audit import AuditEvent
from wallet.models.ledger import DomainSnapshot
from wallet.services.storage.interface import (
    AuditStorageInterface,
    SnapshotCorruptError,
    StateStorageInterface,
    StorageError,
)


SNAPSHOT_SUFFIX = ".json"
AUDIT_SUFFIX = ".audit.jsonl"


class JsonFileStateStorage(StateStorageInterface):
    """Snapshot storage backed by one JSON file per storage name."""

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = Path(data_dir or get_settings().storage.data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path(self, name: str) -> Path:
        return self._data_dir / f"{name}{SNAPSHOT_SUFFIX}"

    def load_snapshot(self, name: str) -> Optional[DomainSnapshot]:
        path = self._path(name)
        if not path.exists():
            return None

        try:
            raw = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SnapshotCorruptError(f"Snapshot {path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read snapshot {path}: {e}") from e

        try:
            return DomainSnapshot.model_validate_json(raw)
        except ValidationError as e:
            raise SnapshotCorruptError(f"Snapshot {path} is not valid: {e}") from e

    def save_snapshot(self, name: str, snapshot: DomainSnapshot) -> bool:
        path = self._path(name)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir, prefix=f".{name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(snapshot.model_dump_json(indent=2))
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write snapshot {path}: {e}") from e
        return True

    def delete_snapshot(self, name: str) -> bool:
        path = self._path(name)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete snapshot {path}: {e}") from e
        return True

    def list_snapshots(self) -> list[str]:
        if not self._data_dir.exists():
            return []
        return sorted(
            p.name[: -len(SNAPSHOT_SUFFIX)]
            for p in self._data_dir.glob(f"*{SNAPSHOT_SUFFIX}")
            if not p.name.endswith(AUDIT_SUFFIX)
        )


class JsonFileAuditStorage(AuditStorageInterface):
    """Append-only audit log as JSON lines."""

    def __init__(self, name: str, data_dir: Optional[Path] = None):
        data_dir = Path(data_dir or get_settings().storage.data_dir)
        self._path = data_dir / f"{name}{AUDIT_SUFFIX}"

    def append_event(self, event: AuditEvent) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as fh:
                fh.write(event.model_dump_json() + "\n")
        except OSError as e:
            raise StorageError(f"Failed to append audit event: {e}") from e
        return True

    def _read_all(self) -> list[AuditEvent]:
        if not self._path.exists():
            return []
        events = []
        with self._path.open(encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line:
                    continue
                try:
                    events.append(AuditEvent.model_validate(json.loads(line)))
                except (ValueError, ValidationError):
                    # A torn trailing line from an interrupted append
                    continue
        return events

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            e for e in self._read_all()
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._read_all()))[:limit]

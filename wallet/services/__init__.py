"""Services package."""

from wallet.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    InMemoryStateStorage,
    JsonFileAuditStorage,
    JsonFileStateStorage,
    SnapshotCorruptError,
    StateStorageInterface,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryStateStorage",
    "JsonFileAuditStorage",
    "JsonFileStateStorage",
    "SnapshotCorruptError",
    "StateStorageInterface",
    "StorageError",
]

"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements JSON files as the backend, but designed to be swappable.
"""

from wallet.services.storage.interface import (
    AuditStorageInterface,
    SnapshotCorruptError,
    StateStorageInterface,
    StorageError,
)
from wallet.services.storage.json_file import (
    JsonFileAuditStorage,
    JsonFileStateStorage,
)
from wallet.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryStateStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "StateStorageInterface",
    # Exceptions
    "SnapshotCorruptError",
    "StorageError",
    # JSON file implementation
    "JsonFileAuditStorage",
    "JsonFileStateStorage",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryStateStorage",
]

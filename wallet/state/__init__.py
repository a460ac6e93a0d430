"""Domain state package."""

from wallet.state.colors import (
    ColorPolicy,
    CyclingColorPolicy,
    SeededRandomColorPolicy,
)
from wallet.state.container import (
    ChangeAction,
    DomainState,
    EntityKind,
    StateChange,
    StateListener,
    index_by_key,
    replace_fields,
)
from wallet.state.persistence import SnapshotPersister

__all__ = [
    "ChangeAction",
    "ColorPolicy",
    "CyclingColorPolicy",
    "DomainState",
    "EntityKind",
    "SeededRandomColorPolicy",
    "SnapshotPersister",
    "StateChange",
    "StateListener",
    "index_by_key",
    "replace_fields",
]

"""
Domain State Container

DESIGN DECISION: All collections live in one explicitly owned object that
is handed to every component. Nothing reaches for a global store, so any
component can be exercised against a state fabricated in a test.

Mutations announce themselves through `notify`. Whatever needs to react
(persistence, audit) subscribes; the mutation code does not know or care.
"""

from enum import Enum
from typing import Callable, Optional, Sequence

from pydantic import BaseModel

from wallet.models.ledger import (
    Budget,
    DomainSnapshot,
    Goal,
    Note,
    Profile,
    RecurringTransaction,
    Theme,
    Transaction,
)


class EntityKind(str, Enum):
    TRANSACTION = "transaction"
    BUDGET = "budget"
    RECURRING = "recurring"
    GOAL = "goal"
    NOTE = "note"
    PROFILE = "profile"
    THEME = "theme"


class ChangeAction(str, Enum):
    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"
    TOGGLED = "toggled"


class StateChange(BaseModel):
    """Notification emitted after every successful mutation."""

    entity: EntityKind
    action: ChangeAction
    entity_id: Optional[str] = None


StateListener = Callable[[StateChange], None]


def index_by_key(items: Sequence[BaseModel], value: str, key: str = "id") -> Optional[int]:
    """Position of the first record whose `key` equals `value`."""
    for i, item in enumerate(items):
        if getattr(item, key) == value:
            return i
    return None


def replace_fields(record: BaseModel, changes: dict, keep: tuple[str, ...] = ("id",)):
    """
    Partial update of a record, re-validated through its model.

    Fields named in `keep` cannot be changed. Raises pydantic's
    ValidationError for invalid values or unknown fields.
    """
    data = record.model_dump()
    data.update(changes)
    for field in keep:
        if field in data:
            data[field] = getattr(record, field)
    return type(record).model_validate(data)


class DomainState:
    """
    The single mutable store of the engine.

    Holds the ledger, budgets, recurring templates, goals, notes, profile
    and theme. Stores in the component packages mutate the collections
    and call `notify`; notes, profile and theme are simple enough to be
    managed here directly.
    """

    def __init__(
        self,
        transactions: Optional[list[Transaction]] = None,
        budgets: Optional[list[Budget]] = None,
        recurring_transactions: Optional[list[RecurringTransaction]] = None,
        goals: Optional[list[Goal]] = None,
        notes: Optional[list[Note]] = None,
        profile: Optional[Profile] = None,
        theme: Theme = Theme.LIGHT,
    ):
        self.transactions: list[Transaction] = list(transactions or [])
        self.budgets: list[Budget] = list(budgets or [])
        self.recurring_transactions: list[RecurringTransaction] = list(recurring_transactions or [])
        self.goals: list[Goal] = list(goals or [])
        self.notes: list[Note] = list(notes or [])
        self.profile: Profile = profile or Profile()
        self.theme: Theme = theme
        self._listeners: list[StateListener] = []

    @classmethod
    def from_snapshot(cls, snapshot: DomainSnapshot) -> "DomainState":
        return cls(
            transactions=snapshot.transactions,
            budgets=snapshot.budgets,
            recurring_transactions=snapshot.recurring_transactions,
            goals=snapshot.goals,
            notes=snapshot.notes,
            profile=snapshot.profile,
            theme=snapshot.theme,
        )

    def snapshot(self) -> DomainSnapshot:
        """Whole state as one persistable document."""
        return DomainSnapshot(
            transactions=list(self.transactions),
            budgets=list(self.budgets),
            recurring_transactions=list(self.recurring_transactions),
            goals=list(self.goals),
            notes=list(self.notes),
            profile=self.profile,
            theme=self.theme,
        )

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener for state changes.

        Returns a callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(
        self,
        entity: EntityKind,
        action: ChangeAction,
        entity_id: Optional[str] = None,
    ) -> None:
        change = StateChange(entity=entity, action=action, entity_id=entity_id)
        for listener in list(self._listeners):
            listener(change)

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    def add_note(self, content: str) -> Note:
        note = Note(content=content)
        self.notes.append(note)
        self.notify(EntityKind.NOTE, ChangeAction.ADDED, note.id)
        return note

    def update_note(self, note_id: str, content: str) -> Optional[Note]:
        index = index_by_key(self.notes, note_id)
        if index is None:
            return None
        note = replace_fields(self.notes[index], {"content": content})
        self.notes[index] = note
        self.notify(EntityKind.NOTE, ChangeAction.UPDATED, note_id)
        return note

    def delete_note(self, note_id: str) -> bool:
        index = index_by_key(self.notes, note_id)
        if index is None:
            return False
        del self.notes[index]
        self.notify(EntityKind.NOTE, ChangeAction.DELETED, note_id)
        return True

    # -------------------------------------------------------------------------
    # Profile & theme
    # -------------------------------------------------------------------------

    def update_profile(self, **changes) -> Profile:
        self.profile = replace_fields(self.profile, changes, keep=())
        self.notify(EntityKind.PROFILE, ChangeAction.UPDATED)
        return self.profile

    def toggle_theme(self) -> Theme:
        self.theme = Theme.DARK if self.theme == Theme.LIGHT else Theme.LIGHT
        self.notify(EntityKind.THEME, ChangeAction.TOGGLED, self.theme.value)
        return self.theme

"""Tests for the ledger store and the domain state container."""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from factories import budget, expense, income
from wallet.ledger import LedgerStore
from wallet.models.audit import AuditEventType
from wallet.models.ledger import Theme, TransactionType
from wallet.state import ChangeAction, DomainState, EntityKind
from wallet.validation import EntryValidator


@pytest.fixture
def ledger(state):
    return LedgerStore(state)


class TestLedgerStore:
    """Tests for transaction CRUD."""

    def test_add_assigns_unique_ids(self, ledger):
        """Test every added transaction gets its own id."""
        a = ledger.add(expense(100, "Shopping", date(2026, 3, 1)))
        b = ledger.add(expense(100, "Shopping", date(2026, 3, 1)))
        assert a.id and b.id
        assert a.id != b.id

    def test_list_keeps_insertion_order(self, ledger):
        """Test listing keeps insertion order."""
        first = ledger.add(expense(10, "Shopping", date(2026, 3, 10)))
        second = ledger.add(expense(20, "Shopping", date(2026, 1, 1)))
        third = ledger.add(income(30, date(2026, 2, 1)))
        assert [t.id for t in ledger.list()] == [first.id, second.id, third.id]

    def test_list_returns_a_copy(self, ledger, state):
        """Test the listed collection is a copy."""
        ledger.add(expense(10, "Shopping", date(2026, 3, 10)))
        ledger.list().clear()
        assert len(state.transactions) == 1

    def test_update_changes_fields_but_not_id(self, ledger):
        """Test update replaces fields but keeps the id."""
        txn = ledger.add(expense(100, "Shopping", date(2026, 3, 1)))
        updated = ledger.update(txn.id, amount=Decimal("250"), id="other")
        assert updated.id == txn.id
        assert updated.amount == Decimal("250")
        assert ledger.get(txn.id).amount == Decimal("250")

    def test_update_rejects_invalid_amount(self, ledger):
        """Test update re-validates the transaction."""
        txn = ledger.add(expense(100, "Shopping", date(2026, 3, 1)))
        with pytest.raises(ValidationError):
            ledger.update(txn.id, amount=Decimal("-5"))
        assert ledger.get(txn.id).amount == Decimal("100")

    def test_update_unknown_id_is_noop(self, ledger, state):
        """Test updating an unknown id changes nothing."""
        ledger.add(expense(100, "Shopping", date(2026, 3, 1)))
        before = list(state.transactions)
        assert ledger.update("missing", amount=Decimal("1")) is None
        assert state.transactions == before

    def test_delete(self, ledger):
        """Test deleting a transaction."""
        txn = ledger.add(expense(100, "Shopping", date(2026, 3, 1)))
        assert ledger.delete(txn.id) is True
        assert ledger.list() == []
        assert ledger.get(txn.id) is None

    def test_delete_unknown_id_is_noop(self, ledger):
        """Test deleting an unknown id changes nothing."""
        ledger.add(expense(100, "Shopping", date(2026, 3, 1)))
        assert ledger.delete("missing") is False
        assert len(ledger.list()) == 1


class TestLedgerQuery:
    """Tests for filtered transaction views."""

    @pytest.fixture
    def populated(self, ledger):
        ledger.add(expense(450, "Food & Dining", date(2026, 3, 8), "Groceries"))
        ledger.add(income(25000, date(2026, 3, 1)))
        ledger.add(expense(1200, "Transportation", date(2026, 2, 20), "Fuel"))
        ledger.add(expense(80, "Food & Dining", date(2026, 2, 2), "Coffee"))
        return ledger

    def test_newest_first(self, populated):
        """Test query results are newest first."""
        dates = [t.date for t in populated.query()]
        assert dates == sorted(dates, reverse=True)

    def test_filter_by_type(self, populated):
        """Test filtering by transaction type."""
        result = populated.query(type=TransactionType.INCOME)
        assert len(result) == 1
        assert result[0].amount == Decimal("25000")

    def test_filter_by_category(self, populated):
        """Test filtering by category."""
        result = populated.query(category="Food & Dining")
        assert [t.description for t in result] == ["Groceries", "Coffee"]

    def test_date_bounds_are_inclusive(self, populated):
        """Test date bounds include both ends."""
        result = populated.query(date_from=date(2026, 2, 20), date_to=date(2026, 3, 1))
        assert {t.date for t in result} == {date(2026, 2, 20), date(2026, 3, 1)}

    def test_no_match(self, populated):
        """Test a query without matches."""
        assert populated.query(category="Healthcare") == []


class TestLedgerAdvisoryValidation:
    """Advisory findings are audited but never block an add."""

    def test_untracked_category_is_audited(self, state, app_settings, clock, audit_logger, audit_storage):
        """Test an expense without a budget is audited but stored."""
        state.budgets.append(budget("Shopping", 4000))
        ledger = LedgerStore(
            state,
            validator=EntryValidator(app_settings, clock=clock),
            audit_logger=audit_logger,
        )
        txn = ledger.add(expense(100, "Pets", date(2026, 3, 1)))

        assert ledger.get(txn.id) is not None
        warnings = [e for e in audit_storage.events if e.event_type == AuditEventType.VALIDATION_WARNING]
        assert len(warnings) == 1
        assert warnings[0].details["issues"][0]["type"] == "untracked_category"

    def test_clean_entry_is_not_audited(self, state, app_settings, clock, audit_logger, audit_storage):
        """Test an entry without findings is not audited."""
        state.budgets.append(budget("Shopping", 4000))
        ledger = LedgerStore(
            state,
            validator=EntryValidator(app_settings, clock=clock),
            audit_logger=audit_logger,
        )
        ledger.add(expense(100, "Shopping", date(2026, 3, 1)))
        assert audit_storage.events == []


class TestDomainState:
    """Tests for change notification, notes, profile and theme."""

    def test_mutations_notify_subscribers(self, state):
        """Test mutations notify subscribers."""
        changes = []
        state.subscribe(changes.append)
        ledger = LedgerStore(state)

        txn = ledger.add(expense(10, "Shopping", date(2026, 3, 1)))
        ledger.delete(txn.id)

        assert [(c.entity, c.action) for c in changes] == [
            (EntityKind.TRANSACTION, ChangeAction.ADDED),
            (EntityKind.TRANSACTION, ChangeAction.DELETED),
        ]
        assert changes[0].entity_id == txn.id

    def test_noop_does_not_notify(self, state):
        """Test a no-op does not notify."""
        changes = []
        state.subscribe(changes.append)
        LedgerStore(state).delete("missing")
        assert changes == []

    def test_unsubscribe(self, state):
        """Test an unsubscribed listener is not called."""
        changes = []
        unsubscribe = state.subscribe(changes.append)
        unsubscribe()
        state.toggle_theme()
        assert changes == []

    def test_notes(self, state):
        """Test note add, update and delete."""
        note = state.add_note("Pay the plumber")
        assert state.update_note(note.id, "Paid the plumber").content == "Paid the plumber"
        assert state.update_note("missing", "x") is None
        assert state.delete_note(note.id) is True
        assert state.delete_note(note.id) is False
        assert state.notes == []

    def test_update_profile(self, state):
        """Test profile update strips whitespace."""
        profile = state.update_profile(name="  Asha  ", email="asha@example.com")
        assert profile.name == "Asha"
        assert state.profile.email == "asha@example.com"

    def test_update_profile_rejects_unknown_field(self, state):
        """Test profile update rejects unknown fields."""
        with pytest.raises(ValidationError):
            state.update_profile(nickname="A")

    def test_toggle_theme(self, state):
        """Test toggling the theme."""
        assert state.theme == Theme.LIGHT
        assert state.toggle_theme() == Theme.DARK
        assert state.toggle_theme() == Theme.LIGHT

    def test_snapshot_round_trip(self, state):
        """Test state survives a snapshot round trip."""
        LedgerStore(state).add(expense(10, "Shopping", date(2026, 3, 1)))
        state.budgets.append(budget("Shopping", 4000))
        state.toggle_theme()

        restored = DomainState.from_snapshot(state.snapshot())
        assert restored.transactions == state.transactions
        assert restored.budgets == state.budgets
        assert restored.theme == Theme.DARK

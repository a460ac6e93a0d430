"""
Main Orchestrator for Wallet

This module ties together all the components and defines the session
lifecycle:
1. Startup (load snapshot or defaults → attach persistence and audit →
   book due recurring entries)
2. Operation (presentation layer calls the component operations)

DESIGN DECISION: The orchestrator owns the wiring, nothing else.
Components never look each other up; they receive the same `DomainState`,
clock and color policy from here. Tests can build any component on its
own with a fabricated state.
"""

from datetime import date
from typing import Callable, Optional

import structlog

from wallet.analytics import AnalyticsEngine
from wallet.audit import AuditLogger
from wallet.budgets import BudgetStore, BudgetTracker
from wallet.config import Settings, get_settings
from wallet.goals import GoalEngine
from wallet.ledger import LedgerStore
from wallet.models.analytics import GoalOutlook, Recommendation, UpcomingBill
from wallet.models.defaults import default_snapshot
from wallet.models.ledger import DomainSnapshot, Transaction
from wallet.recurring import RecurringMaterializer, RecurringStore
from wallet.services.storage import (
    JsonFileAuditStorage,
    JsonFileStateStorage,
    SnapshotCorruptError,
    StateStorageInterface,
    StorageError,
)
from wallet.state import ColorPolicy, CyclingColorPolicy, DomainState, SnapshotPersister
from wallet.validation import EntryValidator


class FinanceEngine:
    """
    The assembled engine for one session.

    Exposes one attribute per operation group:
    - ledger: add/update/delete/list/query transactions
    - budgets, tracker: budget CRUD and spend-vs-limit
    - recurring, materializer: template CRUD, booking, upcoming bills
    - goals: goal CRUD, contributions, approaching milestones
    - analytics: series, insights, recommendations and calendar
    - state: notes, profile and theme
    """

    def __init__(
        self,
        state: DomainState,
        settings: Optional[Settings] = None,
        audit_logger: Optional[AuditLogger] = None,
        color_policy: Optional[ColorPolicy] = None,
        clock: Callable[[], date] = date.today,
    ):
        settings = settings or get_settings()
        color_policy = color_policy or CyclingColorPolicy()

        self.state = state
        self.settings = settings
        self.audit_logger = audit_logger
        self.clock = clock

        validator = EntryValidator(settings.app, clock=clock)
        self.ledger = LedgerStore(state, validator=validator, audit_logger=audit_logger)
        self.budgets = BudgetStore(state, color_policy=color_policy)
        self.tracker = BudgetTracker(state, clock=clock)
        self.recurring = RecurringStore(state, validator=validator, audit_logger=audit_logger)
        self.materializer = RecurringMaterializer(
            state, self.ledger, audit_logger=audit_logger, clock=clock
        )
        self.goals = GoalEngine(
            state, color_policy=color_policy, audit_logger=audit_logger, clock=clock
        )
        self.analytics = AnalyticsEngine(state, settings=settings.analytics, clock=clock)

    def start_session(self, today: Optional[date] = None) -> list[Transaction]:
        """Book recurring entries due today. Safe to call more than once a day."""
        return self.materializer.process(today)

    def upcoming_bills(self) -> list[UpcomingBill]:
        return self.materializer.upcoming(
            horizon_days=self.settings.analytics.upcoming_horizon_days,
        )

    def approaching_goals(self) -> list[GoalOutlook]:
        analytics = self.settings.analytics
        return self.goals.approaching(
            milestone_proximity=analytics.milestone_proximity,
            deadline_proximity_days=analytics.deadline_proximity_days,
        )

    def recommendations(self) -> list[Recommendation]:
        return self.analytics.current_recommendations()


def load_state(
    storage: StateStorageInterface,
    storage_name: str,
    seed_sample_data: bool = False,
    audit_logger: Optional[AuditLogger] = None,
) -> DomainState:
    """
    Restore the domain state from storage, or start from defaults.

    An unreadable snapshot is audited and replaced by defaults rather than
    aborting startup. It is left in place until the first mutation
    overwrites it.
    """
    snapshot: Optional[DomainSnapshot]
    try:
        snapshot = storage.load_snapshot(storage_name)
    except SnapshotCorruptError as e:
        if audit_logger:
            audit_logger.log_snapshot_corrupt(storage_name, str(e))
        snapshot = None
    else:
        if audit_logger:
            audit_logger.log_snapshot_loaded(storage_name, found=snapshot is not None)

    if snapshot is None:
        snapshot = default_snapshot(seed_sample_data=seed_sample_data)
    return DomainState.from_snapshot(snapshot)


def create_engine(
    storage: Optional[StateStorageInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
    settings: Optional[Settings] = None,
    color_policy: Optional[ColorPolicy] = None,
    clock: Callable[[], date] = date.today,
    process_recurring: bool = True,
) -> FinanceEngine:
    """
    Factory function to create a ready-to-use engine.

    Args:
        storage: Snapshot storage. Defaults to JSON files in the configured
                data directory.
        audit_logger: Defaults to a logger appending to the JSON-lines
                audit file (or local-only when disabled in settings).
        process_recurring: Book due recurring entries before returning.

    Returns:
        The wired FinanceEngine with persistence attached
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    storage_name = storage_settings.storage_name
    logger = structlog.get_logger(__name__)

    if storage is None:
        storage = JsonFileStateStorage(storage_settings.data_dir)
    if audit_logger is None:
        audit_storage = None
        if storage_settings.keep_audit_log:
            audit_storage = JsonFileAuditStorage(storage_name, storage_settings.data_dir)
        audit_logger = AuditLogger(audit_storage)

    try:
        state = load_state(
            storage,
            storage_name,
            seed_sample_data=settings.app.seed_sample_data,
            audit_logger=audit_logger,
        )
    except StorageError as e:
        # Storage unreadable - continue with defaults, in memory
        logger.warning("snapshot_load_failed", storage_name=storage_name, error=str(e))
        audit_logger.log_error("snapshot_load_failed", str(e))
        state = DomainState.from_snapshot(
            default_snapshot(seed_sample_data=settings.app.seed_sample_data)
        )

    state.subscribe(audit_logger.log_state_change)
    SnapshotPersister(state, storage, storage_name, audit_logger=audit_logger).attach()

    engine = FinanceEngine(
        state,
        settings=settings,
        audit_logger=audit_logger,
        color_policy=color_policy,
        clock=clock,
    )
    if process_recurring:
        engine.start_session()
    return engine

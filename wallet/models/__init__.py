"""
Data Models Package

This package contains all Pydantic models used by the Wallet engine.
All data flowing through the system must conform to these schemas.
"""

from wallet.models.ledger import (
    MILESTONES,
    Budget,
    DomainSnapshot,
    Goal,
    GoalStatus,
    Note,
    Profile,
    RecurringTransaction,
    Theme,
    Transaction,
    TransactionDraft,
    TransactionType,
    new_id,
)
from wallet.models.analytics import (
    BudgetStatus,
    CalendarEvent,
    CalendarEventKind,
    CalendarMonth,
    GoalOutlook,
    Insights,
    MilestoneMessage,
    MonthlySummary,
    Recommendation,
    RecommendationKind,
    SpendingSlice,
    UpcomingBill,
)
from wallet.models.validation import ValidationIssue, ValidationResult
from wallet.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "MILESTONES",
    "Budget",
    "DomainSnapshot",
    "Goal",
    "GoalStatus",
    "Note",
    "Profile",
    "RecurringTransaction",
    "Theme",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "new_id",
    # Derived views
    "BudgetStatus",
    "CalendarEvent",
    "CalendarEventKind",
    "CalendarMonth",
    "GoalOutlook",
    "Insights",
    "MilestoneMessage",
    "MonthlySummary",
    "Recommendation",
    "RecommendationKind",
    "SpendingSlice",
    "UpcomingBill",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

"""
Audit Models for Wallet

Every mutation of the domain state, and every notable derived event
(milestones crossed, recurring entries materialized, snapshot writes),
is recorded as an audit event. This provides:
1. Traceability of how the ledger got into its current state
2. Debugging information when persistence misbehaves
3. A history the presentation layer can show

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Entity mutations share one event type per action; the entity kind is
    carried in `entity_type`.
    """
    # State mutations
    ENTITY_ADDED = "entity_added"
    ENTITY_UPDATED = "entity_updated"
    ENTITY_DELETED = "entity_deleted"
    THEME_TOGGLED = "theme_toggled"

    # Goals
    GOAL_CONTRIBUTION = "goal_contribution"
    MILESTONE_REACHED = "milestone_reached"

    # Recurring
    RECURRING_MATERIALIZED = "recurring_materialized"
    RECURRING_FAILED = "recurring_failed"

    # Validation
    VALIDATION_WARNING = "validation_warning"

    # Persistence
    SNAPSHOT_LOADED = "snapshot_loaded"
    SNAPSHOT_SAVED = "snapshot_saved"
    SNAPSHOT_SAVE_FAILED = "snapshot_save_failed"
    SNAPSHOT_CORRUPT = "snapshot_corrupt"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'goal', 'snapshot')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entity_changed("added", "goal", goal_id)
        event = AuditEventBuilder.milestone_reached(goal_id, "Car", 50)
    """

    _MUTATIONS = {
        "added": AuditEventType.ENTITY_ADDED,
        "updated": AuditEventType.ENTITY_UPDATED,
        "deleted": AuditEventType.ENTITY_DELETED,
        "toggled": AuditEventType.THEME_TOGGLED,
    }

    @staticmethod
    def entity_changed(
        action: str,
        entity_type: str,
        entity_id: Optional[str],
    ) -> AuditEvent:
        event_type = AuditEventBuilder._MUTATIONS.get(action, AuditEventType.ENTITY_UPDATED)
        return AuditEvent(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type.capitalize()} {action}",
            details={"action": action},
        )

    @staticmethod
    def goal_contribution(
        goal_id: str,
        amount: str,
        new_amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_CONTRIBUTION,
            entity_type="goal",
            entity_id=goal_id,
            description=f"Contributed {amount} to goal",
            details={
                "amount": amount,
                "current_amount": new_amount,
            },
        )

    @staticmethod
    def milestone_reached(
        goal_id: str,
        goal_name: str,
        milestone: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MILESTONE_REACHED,
            entity_type="goal",
            entity_id=goal_id,
            description=f"Goal '{goal_name}' reached {milestone}%",
            details={"milestone": milestone},
        )

    @staticmethod
    def recurring_materialized(
        recurring_id: str,
        transaction_id: str,
        description: str,
        on: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECURRING_MATERIALIZED,
            entity_type="recurring",
            entity_id=recurring_id,
            description=f"Recurring entry '{description}' booked for {on}",
            details={
                "transaction_id": transaction_id,
                "date": on,
            },
        )

    @staticmethod
    def recurring_failed(
        recurring_id: Optional[str],
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECURRING_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="recurring",
            entity_id=recurring_id,
            description="Recurring entry could not be materialized",
            error_message=error_message,
        )

    @staticmethod
    def validation_warning(
        entity_type: str,
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_WARNING,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            description=f"{entity_type.capitalize()} accepted with {len(issues)} warnings",
            details={"issues": issues},
        )

    @staticmethod
    def snapshot_loaded(
        storage_name: str,
        found: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_LOADED,
            entity_type="snapshot",
            entity_id=storage_name,
            description=(
                "Domain state restored from snapshot"
                if found
                else "No snapshot found, starting from defaults"
            ),
            details={"found": found},
        )

    @staticmethod
    def snapshot_saved(storage_name: str, action: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="snapshot",
            entity_id=storage_name,
            description="Domain state persisted",
            details={"trigger": action},
        )

    @staticmethod
    def snapshot_save_failed(storage_name: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="snapshot",
            entity_id=storage_name,
            description="Domain state could not be persisted",
            error_message=error_message,
        )

    @staticmethod
    def snapshot_corrupt(storage_name: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_CORRUPT,
            severity=AuditSeverity.ERROR,
            entity_type="snapshot",
            entity_id=storage_name,
            description="Snapshot unreadable, starting from defaults",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )

"""
Audit Logger

DESIGN DECISION: Every mutation of the domain state is logged.
This provides:
1. Complete traceability of the ledger
2. Debugging capability for persistence problems
3. A history the user can look through

The audit logger:
- Is synchronous, like the rest of the engine
- Gracefully handles failures (doesn't crash the app if logging fails)
- Can be subscribed directly to domain state changes
"""

from typing import Optional

import structlog

from wallet.models.audit import AuditEvent, AuditEventBuilder
from wallet.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for persistence and user visibility), if configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("wallet.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_state_change(self, change) -> None:
        """Subscriber for `DomainState` change notifications."""
        self.log(AuditEventBuilder.entity_changed(
            action=change.action.value,
            entity_type=change.entity.value,
            entity_id=change.entity_id,
        ))

    def log_goal_contribution(
        self,
        goal_id: str,
        amount: str,
        new_amount: str,
    ) -> None:
        self.log(AuditEventBuilder.goal_contribution(
            goal_id=goal_id,
            amount=amount,
            new_amount=new_amount,
        ))

    def log_milestones_reached(
        self,
        goal_id: str,
        goal_name: str,
        milestones: list[int],
    ) -> None:
        """One event per newly crossed milestone."""
        for milestone in milestones:
            self.log(AuditEventBuilder.milestone_reached(
                goal_id=goal_id,
                goal_name=goal_name,
                milestone=milestone,
            ))

    def log_recurring_materialized(
        self,
        recurring_id: str,
        transaction_id: str,
        description: str,
        on: str,
    ) -> None:
        self.log(AuditEventBuilder.recurring_materialized(
            recurring_id=recurring_id,
            transaction_id=transaction_id,
            description=description,
            on=on,
        ))

    def log_recurring_failed(
        self,
        recurring_id: Optional[str],
        error_message: str,
    ) -> None:
        self.log(AuditEventBuilder.recurring_failed(
            recurring_id=recurring_id,
            error_message=error_message,
        ))

    def log_validation_warnings(
        self,
        entity_type: str,
        issues: list[dict],
    ) -> None:
        self.log(AuditEventBuilder.validation_warning(
            entity_type=entity_type,
            issues=issues,
        ))

    def log_snapshot_loaded(self, storage_name: str, found: bool) -> None:
        self.log(AuditEventBuilder.snapshot_loaded(storage_name, found))

    def log_snapshot_saved(self, storage_name: str, action: str) -> None:
        self.log(AuditEventBuilder.snapshot_saved(storage_name, action))

    def log_snapshot_save_failed(self, storage_name: str, error_message: str) -> None:
        self.log(AuditEventBuilder.snapshot_save_failed(storage_name, error_message))

    def log_snapshot_corrupt(self, storage_name: str, error_message: str) -> None:
        self.log(AuditEventBuilder.snapshot_corrupt(storage_name, error_message))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))

"""
Audit Models for Finance Tracker

Every ledger mutation and every persistence problem is recorded as an
audit event. This provides:
1. Traceability of what changed the ledger and when
2. Debugging information when a snapshot fails to load or save
3. A record of rejected input

DESIGN DECISION: Events are immutable value objects. The AuditLogger
decides where they go; the models only describe what happened.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger mutations
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_REMOVED = "transaction_removed"
    VALIDATION_FAILED = "validation_failed"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_LOAD_FAILED = "ledger_load_failed"
    SNAPSHOT_SAVED = "snapshot_saved"
    SAVE_FAILED = "save_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action on the ledger creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'snapshot')"
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
        event = AuditEventBuilder.transaction_added(
            transaction_id="...",
            amount="50.75",
            category="Food",
            type="expense",
        )
    """

    @staticmethod
    def transaction_added(
        transaction_id: str,
        amount: str,
        category: str,
        type: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Added {type} of {amount} in {category}",
            details={"amount": amount, "category": category, "type": type},
        )

    @staticmethod
    def transaction_removed(transaction_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REMOVED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Removed transaction {transaction_id}",
        )

    @staticmethod
    def validation_failed(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            description="Transaction rejected by validation",
            details={"issues": issues},
        )

    @staticmethod
    def ledger_loaded(key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="snapshot",
            entity_id=key,
            description=f"Loaded {count} transactions",
            details={"count": count},
        )

    @staticmethod
    def ledger_load_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="snapshot",
            entity_id=key,
            description="Stored ledger could not be read; starting empty",
            error_message=error_message,
        )

    @staticmethod
    def snapshot_saved(key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="snapshot",
            entity_id=key,
            description=f"Saved snapshot of {count} transactions",
            details={"count": count},
        )

    @staticmethod
    def save_failed(key: str, count: int, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="snapshot",
            entity_id=key,
            description="Snapshot write failed; in-memory ledger retained",
            details={"count": count},
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
            details=details or {},
            error_message=error_message,
        )

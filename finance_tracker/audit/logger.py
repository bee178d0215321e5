"""
Audit Logger

DESIGN DECISION: Every ledger mutation and persistence problem is logged.
This provides:
1. Traceability of what changed the ledger
2. Debugging capability when a snapshot fails to load or save
3. A record of rejected input

The audit logger:
- Is synchronous, like the rest of the engine
- Keeps a short in-memory history for the UI
"""

from typing import Optional

import structlog

from finance_tracker.models.audit import AuditEvent, AuditEventBuilder


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

    Writes ledger events to the structured local log. Events are also
    kept in a bounded in-memory history so the UI can show recent activity.
    """

    def __init__(self, logger_name: str = "finance_tracker", history_size: int = 100):
        self._logger = structlog.get_logger(logger_name)
        self._history: list[AuditEvent] = []
        self._history_size = history_size

    @property
    def history(self) -> list[AuditEvent]:
        """Most recent events, oldest first."""
        return list(self._history)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level its severity dictates."""
        self._history.append(event)
        if len(self._history) > self._history_size:
            del self._history[: len(self._history) - self._history_size]

        log_dict = event.to_log_dict()
        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_transaction_added(
        self,
        transaction_id: str,
        amount: str,
        category: str,
        type: str,
    ) -> None:
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            amount=amount,
            category=category,
            type=type,
        ))

    def log_transaction_removed(self, transaction_id: str) -> None:
        self.log(AuditEventBuilder.transaction_removed(transaction_id))

    def log_validation_failed(self, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.validation_failed(issues))

    def log_ledger_loaded(self, key: str, count: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(key, count))

    def log_ledger_load_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.ledger_load_failed(key, error_message))

    def log_snapshot_saved(self, key: str, count: int) -> None:
        self.log(AuditEventBuilder.snapshot_saved(key, count))

    def log_save_failed(self, key: str, count: int, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(key, count, error_message))

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

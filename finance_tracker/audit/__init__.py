"""Audit logging package."""

from finance_tracker.audit.logger import AuditLogger

__all__ = ["AuditLogger"]

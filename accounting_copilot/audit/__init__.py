"""Audit logging package."""

from accounting_copilot.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]

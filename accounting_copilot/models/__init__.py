"""
Data Models Package

This package contains all Pydantic models used by Accounting Copilot.
All data flowing between the command loop, the store and the entries
file must conform to these schemas.
"""

from accounting_copilot.models.entry import (
    RECORD_FIELDS,
    DeletionFlag,
    JournalEntry,
    JournalEntryDraft,
)
from accounting_copilot.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Entry models
    "RECORD_FIELDS",
    "DeletionFlag",
    "JournalEntry",
    "JournalEntryDraft",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

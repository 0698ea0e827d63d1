"""
Audit Models for Accounting Copilot

Every change to the journal, and every record the loader had to drop,
is described by an AuditEvent and written to the structured log.
This provides:
1. Traceability of each add/update/delete
2. Visibility into records skipped while loading
3. Debugging information when a save fails

DESIGN DECISION: Audit events are only logged, never persisted.
The entries file is the single piece of persisted state.
"""

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    STORE_LOADED = "store_loaded"
    RECORD_SKIPPED = "record_skipped"
    LOAD_FAILED = "load_failed"

    # Mutations
    ENTRY_ADDED = "entry_added"
    ENTRY_UPDATED = "entry_updated"
    ENTRY_DELETED = "entry_deleted"
    ENTRY_NOT_FOUND = "entry_not_found"

    # Persistence
    STORE_SAVED = "store_saved"
    SAVE_FAILED = "save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which entry is this about?
    entity_id: Optional[int] = Field(
        default=None,
        description="Journal entry id this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    # Additional data (event-specific)
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
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entry_added(entry_id=3, total="60.00")
        audit_logger.log(event)
    """

    @staticmethod
    def store_loaded(
        path: Path,
        loaded: int,
        skipped: int,
        next_id: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            description=f"Loaded {loaded} entries from {path}",
            details={
                "path": str(path),
                "loaded": loaded,
                "skipped": skipped,
                "next_id": next_id,
            },
        )

    @staticmethod
    def record_skipped(
        path: Path,
        line_number: int,
        reason: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_SKIPPED,
            severity=AuditSeverity.DEBUG,
            description=f"Skipped unreadable record on line {line_number}",
            details={"path": str(path), "line_number": line_number},
            error_message=reason,
        )

    @staticmethod
    def load_failed(path: Path, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.CRITICAL,
            description=f"Could not read entries file {path}",
            details={"path": str(path)},
            error_message=error_message,
        )

    @staticmethod
    def entry_added(entry_id: int, total: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_ADDED,
            entity_id=entry_id,
            description=f"Journal entry {entry_id} added",
            details={"total": total},
        )

    @staticmethod
    def entry_updated(entry_id: int, total: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_UPDATED,
            entity_id=entry_id,
            description=f"Journal entry {entry_id} updated",
            details={"total": total},
        )

    @staticmethod
    def entry_deleted(entry_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_DELETED,
            entity_id=entry_id,
            description=f"Journal entry {entry_id} marked as deleted",
        )

    @staticmethod
    def entry_not_found(entry_id: int, operation: str) -> AuditEvent:
        """Lookup miss. A normal outcome, not an error."""
        return AuditEvent(
            event_type=AuditEventType.ENTRY_NOT_FOUND,
            severity=AuditSeverity.INFO,
            entity_id=entry_id,
            description=f"{operation}: no visible entry with id {entry_id}",
            details={"operation": operation},
        )

    @staticmethod
    def store_saved(path: Path, record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SAVED,
            severity=AuditSeverity.DEBUG,
            description=f"Rewrote {path}",
            details={"path": str(path), "records": record_count},
        )

    @staticmethod
    def save_failed(path: Path, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.CRITICAL,
            description=f"Could not write entries file {path}",
            details={"path": str(path)},
            error_message=error_message,
        )

"""
Audit Logger

DESIGN DECISION: Every change to the journal is logged.
This provides:
1. Traceability of adds, updates and deletes
2. A record of lines the loader could not read
3. Debugging context when the entries file cannot be written

The audit logger:
- Writes structured records through structlog on top of stdlib logging
- Sends everything to stderr so the command loop's stdout stays clean
- Never persists events; the entries file is the only persisted state
"""

import logging
import sys
from typing import Optional

import structlog

from accounting_copilot.models.audit import AuditEvent, AuditSeverity


def _shared_processors() -> list:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(level: int = logging.WARNING, fmt: str = "console") -> None:
    """
    Configure stdlib logging and structlog for the process.

    Args:
        level: Minimum stdlib level that reaches stderr
        fmt: 'json' for machine-readable lines, anything else for console
    """
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(message)s",
        force=True,
    )

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=_shared_processors() + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


# Default configuration until the CLI calls configure_logging()
structlog.configure(
    processors=_shared_processors() + [structlog.processors.JSONRenderer()],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=False,
)


class AuditLogger:
    """
    Central audit logging service.

    Each AuditEvent becomes one "audit_event" record whose level
    follows the event severity.
    """

    def __init__(self, logger_name: Optional[str] = None):
        """
        Initialize audit logger.

        Args:
            logger_name: stdlib logger name. Defaults to this module's name.
        """
        self._logger = structlog.get_logger(logger_name or __name__)

    def log(self, event: AuditEvent) -> AuditEvent:
        """Log an audit event and hand it back to the caller."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.CRITICAL:
            self._logger.critical("audit_event", **log_dict)
        elif event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        return event

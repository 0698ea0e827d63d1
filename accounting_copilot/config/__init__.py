"""Configuration package."""

from accounting_copilot.config.settings import (
    LOG_FORMATS,
    JournalSettings,
    get_settings,
)

__all__ = [
    "LOG_FORMATS",
    "JournalSettings",
    "get_settings",
]

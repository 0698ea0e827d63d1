"""
Configuration Management for Accounting Copilot

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The only external state is the entries file, so there is very little to
configure: where that file lives and how chatty the logs are.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMATS = ("console", "json")


class JournalSettings(BaseSettings):
    """
    Journal store and logging settings.

    Loads configuration from JOURNAL_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="JOURNAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    entries_path: Path = Field(
        default=Path("entries.txt"),
        description="Backing file holding one JSON journal entry per line"
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for the structured log (stderr)"
    )
    log_format: str = Field(
        default="console",
        description="Log renderer: 'console' or 'json'"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept level names the stdlib logging module knows."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"Unsupported log format: {v}. Allowed: {LOG_FORMATS}")
        return fmt

    @property
    def log_level_number(self) -> int:
        """Get the log level as a stdlib logging constant."""
        return logging.getLevelName(self.log_level)


@lru_cache()
def get_settings() -> JournalSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return JournalSettings()

"""Environment-driven settings for the immutable_table package.

Values are read from ``IMMUTABLE_TABLE_*`` environment variables, after
loading ``<project root>/.env`` with python-dotenv on first access.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from immutable_table.constants import DEFAULT_CSV_DELIMITER, DEFAULT_REPR_MAX_CELLS, ENV_PREFIX

logger = logging.getLogger(__name__)

ROOT = Path(__file__).parent.parent.parent.resolve()

# Module-level cache (lazy-initialised); cleared by reset_settings()
_CACHE: dict = {"settings": None}


class Settings(BaseModel):
    """Tunable defaults for CSV parsing, text rendering, and CLI logging."""

    csv_delimiter: str = DEFAULT_CSV_DELIMITER
    repr_max_cells: int = Field(default=DEFAULT_REPR_MAX_CELLS, ge=0)
    log_level: str = "WARNING"

    @field_validator("csv_delimiter")
    @classmethod
    def validate_delimiter(cls, value: str) -> str:
        """Reject an empty delimiter, which str.split() cannot use."""
        if not value:
            raise ValueError("csv_delimiter must be a non-empty string")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise to an upper-case level name known to the logging module."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level


def _from_environment() -> dict[str, str]:
    """Collect the IMMUTABLE_TABLE_* variables that map onto Settings fields."""
    values: dict[str, str] = {}
    for field_name in Settings.model_fields:
        raw = os.getenv(ENV_PREFIX + field_name.upper())
        if raw is not None:
            values[field_name] = raw
    return values


def get_settings() -> Settings:
    """Load and cache the package settings.

    The first call reads ``.env`` from the project root (missing file is fine);
    subsequent calls return the cached object until reset_settings().
    """
    if _CACHE["settings"] is not None:
        return _CACHE["settings"]

    load_dotenv(ROOT / ".env")
    settings = Settings(**_from_environment())
    logger.debug("Settings loaded: %s", settings.model_dump())
    _CACHE["settings"] = settings
    return settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    _CACHE["settings"] = None

"""
legalops.settings
=================

Configuration settings for the LegalOps compliance service.

This module provides centralized configuration options that can be used across
the package. It includes default values that can be overridden via environment
variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

from .calendar_rules import OccurrencePolicy

# ---------------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------------
# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent

# Database settings
# ---------------------------------------------------------------------------
DB_FILE = os.environ.get("LEGALOPS_DB_FILE", BASE_DIR / "legalops.db")
DB_URL = os.environ.get("LEGALOPS_DB_URL", f"sqlite:///{DB_FILE}")
DB_ECHO = os.environ.get("LEGALOPS_DB_ECHO", "False").lower() == "true"

# API settings
# ---------------------------------------------------------------------------
API_HOST = os.environ.get("LEGALOPS_API_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("LEGALOPS_API_PORT", "8000"))
API_DEBUG = os.environ.get("LEGALOPS_API_DEBUG", "False").lower() == "true"

# Batch / logging settings
# ---------------------------------------------------------------------------
BATCH_MAX_WORKERS = int(os.environ.get("LEGALOPS_BATCH_MAX_WORKERS", "4"))
LOG_LEVEL = os.environ.get("LEGALOPS_LOG_LEVEL", "INFO").upper()


# ---------------------------------------------------------------------------
# Pydantic settings model
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Pydantic model for application settings, loaded from environment variables."""

    db_url: str = Field(default=DB_URL, description="SQLAlchemy URL of the entity store")
    db_echo: bool = Field(default=DB_ECHO, description="Echo SQL statements")

    weekday_occurrence_policy: OccurrencePolicy = Field(
        default=OccurrencePolicy.ROLLOVER,
        description="How an out-of-range 'Nth weekday of month' request is handled",
    )
    batch_max_workers: int = Field(
        default=BATCH_MAX_WORKERS, ge=1, description="Worker pool size for batch scoring"
    )
    log_level: str = Field(default=LOG_LEVEL, description="Root logging level for CLI entry points")

    class Config:
        """Configuration for the settings model."""
        env_prefix = "LEGALOPS_"
        env_file = ".env"  # load from .env file if present
        case_sensitive = False  # case-insensitive environment variables


# Initialize settings
settings = Settings()

"""
api.deps
========

FastAPI dependency providers.

`get_repository` returns a shared **DBPortfolioManager** so every request
talks to the persistent SQLite store.  `get_now` is the only place the
HTTP layer reads the clock; tests override it to pin dates.
"""

from datetime import datetime
from functools import lru_cache

from legalops.portfolio_db import DBPortfolioManager
from legalops.settings import Settings, settings


@lru_cache
def get_repository() -> DBPortfolioManager:
    """Singleton DB‑backed repository (persists across requests)."""
    return DBPortfolioManager()


@lru_cache
def get_settings() -> Settings:
    """Return application settings."""
    return settings


def get_now() -> datetime:
    """Evaluation instant for the current request."""
    return datetime.now()

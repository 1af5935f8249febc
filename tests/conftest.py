"""
Pytest configuration: make sure `import legalops` works regardless of
where pytest is invoked, and provide shared fixtures.

It prepends the project root (one directory above *tests/*) to
``sys.path`` **before** any tests are collected.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# /path/to/project/tests -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from legalops.models import EntitySnapshot, EntityType  # noqa: E402


@pytest.fixture
def llc():
    """LLC formed 2020-01-15 with every document on file."""
    return EntitySnapshot(
        entity_type=EntityType.LLC,
        formation_date=date(2020, 1, 15),
        purpose_text="Any legitimate business purpose",
        legal_name="Sunshine Coast LLC",
    )


@pytest.fixture
def sqlite_engine(tmp_path):
    """Fresh SQLite file with the schema created."""
    from legalops.db import create_all, make_engine

    engine = make_engine(f"sqlite:///{tmp_path / 'legalops.db'}")
    create_all(engine)
    yield engine
    engine.dispose()

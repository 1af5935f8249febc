"""
legalops.db
===========

SQLite persistence layer for LegalOps.

This module exposes:

* ``engine`` – a global SQLModel engine built from ``legalops.settings.settings.db_url``
* ``SessionLocal`` – a session factory used via ``with SessionLocal() as s:``
* ``create_all()`` – helper to create tables at first run
* ORM rows for business entities, their filings and their orders
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from enum import Enum
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Field, Session, SQLModel, create_engine, select

from legalops.models import (
    EntitySnapshot,
    EntityType,
    FilingRecord,
    FilingType,
    OperatingStatus,
)
from legalops.settings import settings

OVERDUE_AFTER = timedelta(days=30)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def make_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Build an engine; SQLite connections may be shared across worker threads.

    *url* and *echo* default to ``settings.db_url`` and ``settings.db_echo``.
    """
    url = url or settings.db_url
    echo = settings.db_echo if echo is None else echo
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = make_engine()


# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def SessionLocal(bind: Optional[Engine] = None) -> Session:  # noqa: N802 (factory camel‑case for consistency with FastAPI docs)
    """Return a new Session bound to *bind* or the global engine."""
    return Session(bind or engine)


# ---------------------------------------------------------------------------
# ORM models
# ---------------------------------------------------------------------------
class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class BusinessEntityDB(SQLModel, table=True):
    """
    Stored business entity plus its last computed health score.

    The primary‑key *slug* is a lower‑cased, dash‑separated version of the
    legal name so look‑ups stay fast and deterministic.
    """

    slug: str = Field(primary_key=True, index=True)
    legal_name: str
    entity_type: EntityType
    formation_date: Optional[date] = None
    operating_status: OperatingStatus = OperatingStatus.ACTIVE
    registered_agent_name: Optional[str] = None
    fei_number: Optional[str] = None
    purpose: str = ""
    dba_name: Optional[str] = None
    health_score: Optional[int] = None
    last_health_check: Optional[datetime] = None

    # ---------------------------------------------------------------------
    # Converters
    # ---------------------------------------------------------------------
    def to_snapshot(self) -> EntitySnapshot:
        """Project the row onto the fields the compliance core reads."""
        return EntitySnapshot(
            entity_type=self.entity_type,
            formation_date=self.formation_date,
            operating_status=self.operating_status,
            has_registered_agent=bool(self.registered_agent_name),
            tax_id_present=bool(self.fei_number),
            purpose_text=self.purpose or "",
            dba_name=self.dba_name,
            legal_name=self.legal_name,
        )


class FilingDB(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    entity_slug: str = Field(foreign_key="businessentitydb.slug", index=True)
    filing_type: FilingType
    filed_at: datetime

    def to_record(self) -> FilingRecord:
        return FilingRecord(filing_type=self.filing_type, filed_at=self.filed_at)


class OrderDB(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    entity_slug: str = Field(foreign_key="businessentitydb.slug", index=True)
    order_status: OrderStatus = OrderStatus.PENDING
    created_at: datetime


# ---------------------------------------------------------------------------
# Convenience CRUD helpers
# ---------------------------------------------------------------------------
def upsert_entity(s: Session, row: BusinessEntityDB) -> None:
    """Insert or update an entity row."""
    s.merge(row)
    s.commit()


def get_entity(s: Session, slug: str) -> BusinessEntityDB | None:
    """Return an entity row by slug or *None* if missing."""
    return s.get(BusinessEntityDB, slug)


def all_entities(s: Session) -> list[BusinessEntityDB]:
    """Return every entity row in the database."""
    return list(s.exec(select(BusinessEntityDB)).all())


def all_slugs(s: Session) -> list[str]:
    return list(s.exec(select(BusinessEntityDB.slug)).all())


def add_filing(s: Session, slug: str, filing_type: FilingType, filed_at: datetime) -> None:
    s.add(FilingDB(entity_slug=slug, filing_type=filing_type, filed_at=filed_at))
    s.commit()


def add_order(
    s: Session,
    slug: str,
    created_at: datetime,
    status: OrderStatus = OrderStatus.PENDING,
) -> None:
    s.add(OrderDB(entity_slug=slug, order_status=status, created_at=created_at))
    s.commit()


def filings_for(s: Session, slug: str) -> List[FilingRecord]:
    rows = s.exec(select(FilingDB).where(FilingDB.entity_slug == slug)).all()
    return [row.to_record() for row in rows]


def overdue_order_count(s: Session, slug: str, as_of: datetime) -> int:
    """Pending orders created more than 30 days before *as_of*."""
    # timestamps are stored naive
    cutoff = (as_of - OVERDUE_AFTER).replace(tzinfo=None)
    stmt = (
        select(func.count())
        .select_from(OrderDB)
        .where(OrderDB.entity_slug == slug)
        .where(OrderDB.order_status == OrderStatus.PENDING)
        .where(OrderDB.created_at < cutoff)
    )
    return s.exec(stmt).one()


# ---------------------------------------------------------------------------
# Utility: create tables
# ---------------------------------------------------------------------------
def create_all(bind: Optional[Engine] = None) -> None:
    """Create all tables for imported SQLModel subclasses."""
    SQLModel.metadata.create_all(bind or engine)

# ---------------------------------------------------------------------------
# Lightweight CLI
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    """
    Quick bootstrap helper.

    Examples
    --------
    $ python -m legalops.db --create        # first‑time table creation
    """
    import argparse
    import textwrap

    parser = argparse.ArgumentParser(
        prog="python -m legalops.db",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            LegalOps DB utilities
            ---------------------
            --create   Create all SQLModel tables (safe if they already exist)
            """
        ),
    )
    parser.add_argument("--create", action="store_true", help="create tables")
    args = parser.parse_args()

    if args.create:
        create_all()
        print(f"✅ {settings.db_url} schema initialised")

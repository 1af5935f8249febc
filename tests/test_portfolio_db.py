"""
tests/test_portfolio_db.py
==========================

SQLite repository: snapshot projection, overdue orders and score storage.
"""

from datetime import date, datetime, timedelta

import pytest

from legalops.batch import BatchScoreRunner
from legalops.db import (
    BusinessEntityDB,
    OrderStatus,
    SessionLocal,
    add_filing,
    add_order,
    overdue_order_count,
)
from legalops.errors import EntityNotFound
from legalops.models import EntityType, FilingType, OperatingStatus
from legalops.portfolio_db import DBPortfolioManager

NOW = datetime(2024, 6, 1, 12, 0)


def _row(slug="sunshine-coast-llc", **overrides):
    fields = dict(
        slug=slug,
        legal_name="Sunshine Coast LLC",
        entity_type=EntityType.LLC,
        formation_date=date(2020, 1, 15),
        registered_agent_name="Registered Agents of Florida",
        fei_number="12-3456789",
        purpose="Any legitimate business purpose",
    )
    fields.update(overrides)
    return BusinessEntityDB(**fields)


@pytest.fixture
def repo(sqlite_engine):
    return DBPortfolioManager(bind=sqlite_engine)


def test_add_and_get(repo):
    slug = repo.add(_row())
    row = repo.get(slug)

    assert row.legal_name == "Sunshine Coast LLC"
    assert row.entity_type is EntityType.LLC
    assert len(repo) == 1
    assert repo.list_entity_ids() == [slug]


def test_get_unknown_raises(repo):
    with pytest.raises(EntityNotFound):
        repo.get("ghost")
    with pytest.raises(EntityNotFound):
        repo.fetch_record("ghost", NOW)


def test_snapshot_projection(repo):
    slug = repo.add(_row(registered_agent_name=None, fei_number="", dba_name="Sunny",
                         operating_status=OperatingStatus.INACTIVE))
    snap = repo.fetch_record(slug, NOW).snapshot

    assert not snap.has_registered_agent
    assert not snap.tax_id_present
    assert snap.dba_name == "Sunny"
    assert snap.operating_status is OperatingStatus.INACTIVE
    assert snap.formation_date == date(2020, 1, 15)


def test_fetch_record_reads_filings(repo, sqlite_engine):
    slug = repo.add(_row())
    with SessionLocal(sqlite_engine) as s:
        add_filing(s, slug, FilingType.ANNUAL_REPORT, datetime(2024, 2, 1, 10))

    record = repo.fetch_record(slug, NOW)
    assert [f.filing_type for f in record.filings] == [FilingType.ANNUAL_REPORT]
    assert record.filings[0].filed_at.year == 2024


def test_only_old_pending_orders_are_overdue(repo, sqlite_engine):
    slug = repo.add(_row())
    with SessionLocal(sqlite_engine) as s:
        add_order(s, slug, NOW - timedelta(days=45))
        add_order(s, slug, NOW - timedelta(days=60))
        add_order(s, slug, NOW - timedelta(days=10))
        add_order(s, slug, NOW - timedelta(days=90), status=OrderStatus.PAID)
        add_order(s, slug, NOW - timedelta(days=90), status=OrderStatus.CANCELLED)

        assert overdue_order_count(s, slug, NOW) == 2

    assert repo.fetch_record(slug, NOW).overdue_invoice_count == 2


def test_save_health_score(repo):
    slug = repo.add(_row())
    repo.save_health_score(slug, 80, NOW)

    row = repo.get(slug)
    assert row.health_score == 80
    assert row.last_health_check == NOW
    assert repo.health_scores() == {slug: 80}


def test_batch_over_database(repo, sqlite_engine):
    late = repo.add(_row())
    filed = repo.add(_row(slug="filed-co", legal_name="Filed Co"))
    bare = repo.add(_row(slug="bare-co", legal_name="Bare Co", registered_agent_name=None))
    with SessionLocal(sqlite_engine) as s:
        add_filing(s, filed, FilingType.ANNUAL_REPORT, datetime(2024, 3, 3))
        add_order(s, bare, NOW - timedelta(days=31))

    outcome = BatchScoreRunner(repo, clock=lambda: NOW, max_workers=2).run_all()

    assert outcome.ok
    assert repo.health_scores() == {late: 80, filed: 100, bare: 50}

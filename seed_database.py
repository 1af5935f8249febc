#!/usr/bin/env python
"""
Seed database with sample entities for testing.

This script creates sample entities, filings and orders in the database
so the health score dashboard has something meaningful to show.
"""

from datetime import date, datetime, timedelta

from legalops.db import BusinessEntityDB, OrderStatus, SessionLocal, add_filing, add_order
from legalops.models import EntityType, FilingType, OperatingStatus
from legalops.portfolio import slugify
from legalops.portfolio_db import DBPortfolioManager

AGENT = "Registered Agents of Florida"


def _entity(name, entity_type, formed, **extra):
    return BusinessEntityDB(
        slug=slugify(name),
        legal_name=name,
        entity_type=entity_type,
        formation_date=formed,
        **extra,
    )


# Sample entities covering every compliance outcome
SAMPLE_ENTITIES = [
    _entity("Sunshine Coast LLC", EntityType.LLC, date(2020, 1, 15),
            registered_agent_name=AGENT, fei_number="12-3456789",
            purpose="Any legitimate business purpose"),
    _entity("Gulf Holdings", EntityType.CORPORATION, date(2017, 9, 8),
            registered_agent_name=AGENT, fei_number="98-7654321",
            purpose="Holding company", dba_name="Gulf Capital"),
    _entity("Everglades Conservancy", EntityType.NONPROFIT_CORPORATION, date(2019, 6, 22),
            registered_agent_name=AGENT, purpose="Wetland conservation"),
    _entity("Keys Charter Co", EntityType.LLC, date(2012, 4, 2),
            fei_number="55-0001234", purpose="Boat charters"),
    _entity("Tampa Bay Partners", EntityType.PARTNERSHIP, date(2021, 3, 10),
            registered_agent_name=AGENT, operating_status=OperatingStatus.INACTIVE),
    _entity("Pending Startup LLC", EntityType.LLC, None,
            operating_status=OperatingStatus.PENDING),
]


def seed_database():
    """Add sample entities, filings and orders to the database."""
    pm = DBPortfolioManager()
    now = datetime.now()

    for entity in SAMPLE_ENTITIES:
        pm.add(entity)
        print(f"Added: {entity.legal_name} ({entity.entity_type.name})")

    with SessionLocal() as s:
        # Gulf Holdings is current for this year, after a reinstatement
        add_filing(s, "gulf-holdings", FilingType.REINSTATEMENT, datetime(now.year, 1, 12))
        add_filing(s, "gulf-holdings", FilingType.ANNUAL_REPORT, datetime(now.year, 1, 20))
        add_filing(s, "everglades-conservancy", FilingType.ANNUAL_REPORT, datetime(now.year, 2, 3))

        add_order(s, "sunshine-coast-llc", now - timedelta(days=45))
        add_order(s, "keys-charter-co", now - timedelta(days=90))
        add_order(s, "keys-charter-co", now - timedelta(days=5))
        add_order(s, "gulf-holdings", now - timedelta(days=60), status=OrderStatus.PAID)

    print(f"\nAdded {len(SAMPLE_ENTITIES)} entities to the database!")


if __name__ == "__main__":
    # Initialize DB if needed
    from legalops.db import create_all
    print("Ensuring database tables exist...")
    create_all()

    # Seed the database
    print("Seeding database with sample entities...")
    seed_database()

    print("\nDone! Score them with:")
    print("python -m legalops.batch")
    print("and run the API server with:")
    print("uvicorn api.main:app --reload --port 8000")

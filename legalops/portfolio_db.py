"""
legalops.portfolio_db
=====================

SQLite‑backed implementation of :class:`legalops.ports.EntityRepository`.

This adapter wraps the CRUD helpers in :pymod:`legalops.db`.  Every call
opens and closes its own session, so one manager can be shared by the
batch runner's worker threads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.engine import Engine

from legalops.db import (
    BusinessEntityDB,
    SessionLocal,
    all_entities,
    all_slugs,
    filings_for,
    get_entity,
    overdue_order_count,
    upsert_entity,
)
from legalops.errors import EntityNotFound
from legalops.models import EntityRecord


class DBPortfolioManager:
    """
    Repository over the SQLite store.

    Methods:
    * add(row) / get(slug)
    * list_entity_ids() / fetch_record(slug, as_of) / save_health_score(...)
    * health_scores() – stored totals for the dashboard summary
    * len()
    """

    def __init__(self, bind: Optional[Engine] = None) -> None:
        self._bind = bind

    # ------------------------------------------------------------------ CRUD
    def add(self, row: BusinessEntityDB) -> str:
        with SessionLocal(self._bind) as s:
            upsert_entity(s, row)
        return row.slug

    def get(self, slug: str) -> BusinessEntityDB:
        with SessionLocal(self._bind) as s:
            row = get_entity(s, slug)
            if row is None:
                raise EntityNotFound(slug)
            s.expunge(row)
            return row

    # ------------------------------------------------------ EntityRepository
    def list_entity_ids(self) -> List[str]:
        with SessionLocal(self._bind) as s:
            return all_slugs(s)

    def fetch_record(self, entity_id: str, as_of: datetime) -> EntityRecord:
        # one session, so the entity, its filings and its orders are read together
        with SessionLocal(self._bind) as s:
            row = get_entity(s, entity_id)
            if row is None:
                raise EntityNotFound(entity_id)
            return EntityRecord(
                entity_id=entity_id,
                snapshot=row.to_snapshot(),
                filings=filings_for(s, entity_id),
                overdue_invoice_count=overdue_order_count(s, entity_id, as_of),
            )

    def save_health_score(self, entity_id: str, total_score: int, evaluated_at: datetime) -> None:
        with SessionLocal(self._bind) as s:
            row = get_entity(s, entity_id)
            if row is None:
                raise EntityNotFound(entity_id)
            row.health_score = total_score
            row.last_health_check = evaluated_at
            s.add(row)
            s.commit()

    def health_scores(self) -> Dict[str, Optional[int]]:
        with SessionLocal(self._bind) as s:
            return {row.slug: row.health_score for row in all_entities(s)}

    # ------------------------------------------------------ dunder helpers
    def __len__(self) -> int:
        return len(self.list_entity_ids())

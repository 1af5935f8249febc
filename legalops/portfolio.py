"""
legalops.portfolio
==================

An in‑memory registry that stores :class:`legalops.models.EntityRecord`
objects keyed by a slugified version of their legal name.

This module uses only the standard library, so that
it can be unit‑tested without external dependencies or a database.  It
satisfies :class:`legalops.ports.EntityRepository`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from .errors import EntityNotFound
from .models import EntityRecord, EntitySnapshot, FilingRecord


def slugify(name: str) -> str:
    """lower‑cased, dash‑separated key used as unique identifier."""
    return name.lower().replace(" ", "-")


class PortfolioManager:
    """
    Dictionary‑backed registry of entities and their saved scores.

    Example
    -------
    >>> from datetime import date
    >>> from legalops.models import EntitySnapshot, EntityType
    >>> pm = PortfolioManager()
    >>> pm.add(EntitySnapshot(EntityType.LLC, date(2020, 1, 15), legal_name="Foo LLC"))
    'foo-llc'
    >>> pm.list_entity_ids()
    ['foo-llc']
    """

    def __init__(self) -> None:
        self._records: Dict[str, EntityRecord] = {}
        self._scores: Dict[str, Tuple[int, datetime]] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def add(
        self,
        snapshot: EntitySnapshot,
        filings: Optional[List[FilingRecord]] = None,
        overdue_invoice_count: int = 0,
    ) -> str:
        """Insert or overwrite an entity; return its slug."""
        slug = slugify(snapshot.legal_name)
        self._records[slug] = EntityRecord(
            entity_id=slug,
            snapshot=snapshot,
            filings=list(filings or []),
            overdue_invoice_count=overdue_invoice_count,
        )
        return slug

    def get(self, slug: str) -> EntityRecord:
        """Retrieve by slug (raise EntityNotFound if not present)."""
        try:
            return self._records[slug]
        except KeyError:
            raise EntityNotFound(slug) from None

    def add_filing(self, slug: str, filing: FilingRecord) -> None:
        self.get(slug).filings.append(filing)

    def health_score(self, slug: str) -> Optional[Tuple[int, datetime]]:
        """Last saved ``(total_score, evaluated_at)`` or None."""
        return self._scores.get(slug)

    # ------------------------------------------------------------------
    # EntityRepository
    # ------------------------------------------------------------------
    def list_entity_ids(self) -> List[str]:
        return list(self._records)

    def fetch_record(self, entity_id: str, as_of: datetime) -> EntityRecord:
        record = self.get(entity_id)
        # hand out a copy so callers never see a half‑updated filing list
        return EntityRecord(
            entity_id=record.entity_id,
            snapshot=record.snapshot,
            filings=list(record.filings),
            overdue_invoice_count=record.overdue_invoice_count,
        )

    def save_health_score(self, entity_id: str, total_score: int, evaluated_at: datetime) -> None:
        self.get(entity_id)
        self._scores[entity_id] = (total_score, evaluated_at)

    # ------------------------------------------------------------------
    # Dunder helpers for convenience
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._records)

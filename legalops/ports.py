"""
legalops.ports
==============

Repository interface the batch runner and the API depend on.

The compliance core itself never touches storage; it only receives the
:class:`~legalops.models.EntityRecord` a repository hands over.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Protocol

from .models import EntityRecord


class EntityRepository(Protocol):
    """Load entity snapshots and store computed health scores."""

    def list_entity_ids(self) -> List[str]:
        """Return every known entity id."""
        ...

    def fetch_record(self, entity_id: str, as_of: datetime) -> EntityRecord:
        """
        Return one consistent snapshot of *entity_id*.

        *as_of* decides which unpaid orders count as overdue.  Raises
        :class:`~legalops.errors.EntityNotFound` for unknown ids.
        """
        ...

    def save_health_score(self, entity_id: str, total_score: int, evaluated_at: datetime) -> None:
        """Persist the total score and the time it was computed."""
        ...

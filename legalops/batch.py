"""
legalops.batch
==============

Score many entities in one pass.

Each entity is loaded through an :class:`~legalops.ports.EntityRepository`,
run through the compliance evaluator and the health score calculator,
and its total is written back with the run's timestamp.  A failure on
one entity is logged and reported; it never stops the others.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Union

from .calendar_rules import OccurrencePolicy
from .compliance import evaluate
from .health_score import calculate
from .models import ComplianceVerdict, EntityRecord, HealthScoreBreakdown
from .ports import EntityRepository

logger = logging.getLogger(__name__)


@dataclass
class Assessment:
    verdict: ComplianceVerdict
    breakdown: HealthScoreBreakdown


@dataclass
class ScoreResult:
    entity_id: str
    verdict: ComplianceVerdict
    breakdown: HealthScoreBreakdown
    evaluated_at: datetime


@dataclass
class BatchFailure:
    entity_id: str
    reason: str


@dataclass
class BatchResult:
    successes: List[ScoreResult] = field(default_factory=list)
    failures: List[BatchFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def assess(
    record: EntityRecord,
    now: Union[date, datetime],
    policy: OccurrencePolicy = OccurrencePolicy.ROLLOVER,
) -> Assessment:
    """Evaluate then score one already-loaded entity."""
    verdict = evaluate(record.snapshot, record.filings, now, policy)
    breakdown = calculate(verdict, record.snapshot, record.overdue_invoice_count)
    return Assessment(verdict=verdict, breakdown=breakdown)


def update_health_score(
    repository: EntityRepository,
    entity_id: str,
    now: datetime,
    policy: OccurrencePolicy = OccurrencePolicy.ROLLOVER,
) -> ScoreResult:
    """Load, assess and persist a single entity; errors propagate."""
    record = repository.fetch_record(entity_id, now)
    result = assess(record, now, policy)
    repository.save_health_score(entity_id, result.breakdown.total_score, now)
    return ScoreResult(entity_id, result.verdict, result.breakdown, now)


class BatchScoreRunner:
    """
    Best-effort health score refresh across a repository.

    Parameters
    ----------
    repository : EntityRepository
        Source of snapshots and sink for scores.
    clock : callable, default=datetime.now
        Read once per run; every entity in the run shares that timestamp.
    max_workers : int, default=1
        ``1`` runs sequentially, larger values use a bounded thread pool.
    policy : OccurrencePolicy
        Weekday occurrence policy handed to the evaluator.
    """

    def __init__(
        self,
        repository: EntityRepository,
        clock: Callable[[], datetime] = datetime.now,
        max_workers: int = 1,
        policy: OccurrencePolicy = OccurrencePolicy.ROLLOVER,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.repository = repository
        self.clock = clock
        self.max_workers = max_workers
        self.policy = policy

    def run_all(self, entity_ids: Optional[Iterable[str]] = None) -> BatchResult:
        ids = list(entity_ids) if entity_ids is not None else self.repository.list_entity_ids()
        now = self.clock()
        result = BatchResult()
        logger.info("Scoring %d entities (workers=%d)", len(ids), self.max_workers)

        if self.max_workers == 1:
            for entity_id in ids:
                self._collect(result, entity_id, lambda eid=entity_id: self._score_one(eid, now))
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {executor.submit(self._score_one, eid, now): eid for eid in ids}
                for future in as_completed(futures):
                    self._collect(result, futures[future], future.result)

        logger.info(
            "Batch finished: %d scored, %d failed",
            len(result.successes), len(result.failures),
        )
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _score_one(self, entity_id: str, now: datetime) -> ScoreResult:
        return update_health_score(self.repository, entity_id, now, self.policy)

    @staticmethod
    def _collect(result: BatchResult, entity_id: str, produce: Callable[[], ScoreResult]) -> None:
        try:
            result.successes.append(produce())
        except Exception as exc:
            logger.error("Failed to update health score for entity %s: %s", entity_id, exc, exc_info=exc)
            result.failures.append(BatchFailure(entity_id, str(exc) or type(exc).__name__))


# ---------------------------------------------------------------------
# CLI:  python -m legalops.batch  [--workers N] [--ids a,b]
# ---------------------------------------------------------------------
if __name__ == "__main__":
    import argparse

    from .portfolio_db import DBPortfolioManager
    from .settings import settings

    parser = argparse.ArgumentParser(description="Recompute and store health scores for stored entities.")
    parser.add_argument("--workers", type=int, default=settings.batch_max_workers,
                        help="worker pool size (1 = sequential)")
    parser.add_argument("--ids", help="comma-separated entity slugs (default: all)")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    runner = BatchScoreRunner(
        DBPortfolioManager(),
        max_workers=args.workers,
        policy=settings.weekday_occurrence_policy,
    )
    ids = [i.strip() for i in args.ids.split(",") if i.strip()] if args.ids else None
    outcome = runner.run_all(ids)

    for res in sorted(outcome.successes, key=lambda r: r.entity_id):
        print(f"{res.entity_id:<30} {res.breakdown.total_score:>3}  {res.breakdown.band.label}")
    for failure in outcome.failures:
        print(f"⛔ {failure.entity_id}: {failure.reason}")
    raise SystemExit(0 if outcome.ok else 1)

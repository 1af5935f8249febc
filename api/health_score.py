"""
api.health_score
================

FastAPI endpoints for the business health score.

* ``GET  /health-score/summary`` – stored scores rolled up by band
* ``POST /health-score/batch``   – recompute and store every entity
* ``GET  /health-score/{slug}``  – compute and return the full breakdown
* ``POST /health-score/{slug}``  – compute and store the total
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from legalops.batch import BatchScoreRunner, assess, update_health_score
from legalops.errors import EntityNotFound
from legalops.health_score import summarize_scores
from legalops.portfolio_db import DBPortfolioManager
from legalops.settings import Settings
from .deps import get_now, get_repository, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health-score", tags=["health-score"])


# The fixed paths are registered before /{slug} so they are not captured by it.
@router.get("/summary")
def score_summary(repo: DBPortfolioManager = Depends(get_repository)):
    """Count of stored scores per band plus the portfolio average."""
    summary = summarize_scores(repo.health_scores().values())
    return {
        "success": True,
        "average": summary.average,
        "scored": summary.scored,
        "unscored": summary.unscored,
        "bands": {band.label: count for band, count in summary.counts.items()},
    }


@router.post("/batch")
def run_batch(
    repo: DBPortfolioManager = Depends(get_repository),
    settings: Settings = Depends(get_settings),
    now: datetime = Depends(get_now),
):
    """Recompute every stored entity; individual failures are reported, not raised."""
    runner = BatchScoreRunner(
        repo,
        clock=lambda: now,
        max_workers=settings.batch_max_workers,
        policy=settings.weekday_occurrence_policy,
    )
    outcome = runner.run_all()
    return {
        "success": outcome.ok,
        "scored": len(outcome.successes),
        "failed": len(outcome.failures),
        "failures": [{"entity_id": f.entity_id, "reason": f.reason} for f in outcome.failures],
    }


@router.get("/{slug}")
def get_health_score(
    slug: str,
    repo: DBPortfolioManager = Depends(get_repository),
    settings: Settings = Depends(get_settings),
    now: datetime = Depends(get_now),
):
    """
    Calculate and return the health score with its full breakdown.

    404 if *slug* is not in the store.  Nothing is persisted.
    """
    try:
        record = repo.fetch_record(slug, now)
    except EntityNotFound:
        raise HTTPException(status_code=404, detail="Business not found")

    result = assess(record, now, settings.weekday_occurrence_policy)
    return {
        "success": True,
        "entity_id": slug,
        "health_score": result.breakdown.total_score,
        "band": result.breakdown.band.label,
        "breakdown": result.breakdown,
        "compliance": result.verdict,
    }


@router.post("/{slug}")
def save_health_score(
    slug: str,
    repo: DBPortfolioManager = Depends(get_repository),
    settings: Settings = Depends(get_settings),
    now: datetime = Depends(get_now),
):
    """Calculate the health score and store it on the entity record."""
    try:
        result = update_health_score(repo, slug, now, settings.weekday_occurrence_policy)
    except EntityNotFound:
        raise HTTPException(status_code=404, detail="Business not found")

    logger.info("Stored health score %d for %s", result.breakdown.total_score, slug)
    return {
        "success": True,
        "entity_id": slug,
        "health_score": result.breakdown.total_score,
        "message": "Health score updated successfully",
    }

"""
legalops.compliance
===================

Florida annual-report compliance rules.

Annual reports are due between January 1 and May 1.  After May 1 a $400
late fee applies; an entity that still has not filed by the 3rd Friday
of September is administratively dissolved (revoked) on the 4th Friday
of September.  A revoked entity may be reinstated for up to ten years
against a fee that grows with every year of revocation.

:pyfunc:`evaluate` is a pure function of the snapshot, the filing
history and the caller's ``now``; it never reads the system clock.
"""

from __future__ import annotations

import calendar
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, NamedTuple, Optional, Union

from .calendar_rules import OccurrencePolicy, nth_weekday_of_month
from .errors import InvalidInput
from .models import (
    ComplianceStatus,
    ComplianceVerdict,
    EntitySnapshot,
    EntityType,
    FilingRecord,
    FilingType,
    REINSTATEMENT_WINDOW_YEARS,
)

logger = logging.getLogger(__name__)

LATE_FEE = Decimal("400")
DUE_SOON_WINDOW_DAYS = 60

_SECONDS_PER_DAY = 24 * 60 * 60


# ---------------------------------------------------------------------
# Reinstatement fee schedules
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class FeeSchedule:
    """``base + per_year × years_revoked``."""
    base: Decimal
    per_year: Decimal

    def fee(self, years_revoked: int) -> Decimal:
        return self.base + self.per_year * years_revoked


REINSTATEMENT_FEE_SCHEDULES = {
    EntityType.LLC: FeeSchedule(Decimal("100"), Decimal("138.75")),
    EntityType.CORPORATION: FeeSchedule(Decimal("600"), Decimal("150")),
    EntityType.NONPROFIT_CORPORATION: FeeSchedule(Decimal("175"), Decimal("61.25")),
}

# Entity types without a published schedule are charged nothing.
UNKNOWN_ENTITY_TYPE_FEE_SCHEDULE = FeeSchedule(Decimal("0"), Decimal("0"))


def reinstatement_fee_schedule(entity_type: EntityType) -> FeeSchedule:
    return REINSTATEMENT_FEE_SCHEDULES.get(entity_type, UNKNOWN_ENTITY_TYPE_FEE_SCHEDULE)


# ---------------------------------------------------------------------
# Statutory calendar
# ---------------------------------------------------------------------
class StatutoryDates(NamedTuple):
    due_date: datetime          # May 1
    late_deadline: datetime     # 3rd Friday of September
    revocation_date: datetime   # 4th Friday of September


def statutory_dates(
    year: int,
    tzinfo=None,
    policy: OccurrencePolicy = OccurrencePolicy.ROLLOVER,
) -> StatutoryDates:
    """Midnight of each deadline in *year*, in the caller's timezone."""
    def _midnight(d: date) -> datetime:
        return datetime.combine(d, time(), tzinfo=tzinfo)

    return StatutoryDates(
        due_date=_midnight(date(year, 5, 1)),
        late_deadline=_midnight(nth_weekday_of_month(year, 9, calendar.FRIDAY, 3, policy)),
        revocation_date=_midnight(nth_weekday_of_month(year, 9, calendar.FRIDAY, 4, policy)),
    )


def _as_datetime(now: Union[date, datetime]) -> datetime:
    if isinstance(now, datetime):
        return now
    return datetime.combine(now, time())


def _days_until(target: datetime, now: datetime) -> int:
    return math.ceil((target - now).total_seconds() / _SECONDS_PER_DAY)


def _filed_in(filings: Iterable[FilingRecord], filing_type: FilingType, year: int) -> bool:
    return any(f.filing_type == filing_type and f.filed_at.year == year for f in filings)


# ---------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------
def evaluate(
    snapshot: Optional[EntitySnapshot],
    filings: Iterable[FilingRecord],
    now: Union[date, datetime],
    policy: OccurrencePolicy = OccurrencePolicy.ROLLOVER,
) -> ComplianceVerdict:
    """
    Derive the annual-report verdict for the calendar year of *now*.

    Parameters
    ----------
    snapshot : EntitySnapshot
        Entity fields; ``None`` raises :class:`InvalidInput`.
    filings : iterable of FilingRecord
        Full filing history; only filings from ``now.year`` are read.
    now : datetime.datetime | datetime.date
        Evaluation instant.  A bare date is treated as midnight.
    policy : OccurrencePolicy
        Passed through to the September deadline calculation.

    Returns
    -------
    ComplianceVerdict
    """
    if snapshot is None:
        raise InvalidInput("an entity snapshot is required")

    filings = list(filings or [])
    now = _as_datetime(now)
    year = now.year

    if snapshot.formation_date is None:
        logger.debug("no formation date on file; deadlines not enforced")
        return ComplianceVerdict(status=ComplianceStatus.ACTIVE)

    if _filed_in(filings, FilingType.ANNUAL_REPORT, year):
        reinstated = _filed_in(filings, FilingType.REINSTATEMENT, year)
        return ComplianceVerdict(
            status=ComplianceStatus.REINSTATED if reinstated else ComplianceStatus.ACTIVE
        )

    dates = statutory_dates(year, now.tzinfo, policy)
    days_until_due = _days_until(dates.due_date, now)
    days_until_revocation = _days_until(dates.late_deadline, now)

    verdict = ComplianceVerdict(
        status=ComplianceStatus.ACTIVE,
        days_until_due=days_until_due if days_until_due >= 0 else None,
        days_until_revocation=days_until_revocation if days_until_revocation >= 0 else None,
        due_date=dates.due_date.date() if days_until_due >= 0 else None,
    )

    if now >= dates.revocation_date:
        # Measured from the formation year, not the year of revocation.
        years_revoked = year - snapshot.formation_date.year
        verdict.status = ComplianceStatus.REVOKED
        verdict.revocation_date = dates.revocation_date.date()
        verdict.years_revoked = years_revoked
        verdict.can_be_reinstated = years_revoked <= REINSTATEMENT_WINDOW_YEARS
        verdict.reinstatement_fee = reinstatement_fee_schedule(snapshot.entity_type).fee(years_revoked)
    elif dates.late_deadline <= now:
        verdict.status = ComplianceStatus.PENDING_REVOCATION
        verdict.late_fee = LATE_FEE
    elif now > dates.due_date:
        verdict.status = ComplianceStatus.LATE
        verdict.late_fee = LATE_FEE
    else:
        verdict.is_due_soon = 0 <= days_until_due <= DUE_SOON_WINDOW_DAYS

    logger.debug("annual report verdict for %s: %s", year, verdict.status.name)
    return verdict


class AnnualReportComplianceEvaluator:
    """
    Evaluator bound to one occurrence policy.

    Example
    -------
    >>> ev = AnnualReportComplianceEvaluator()
    >>> snap = EntitySnapshot(EntityType.LLC, formation_date=date(2020, 1, 15))
    >>> ev.evaluate(snap, [], date(2024, 6, 1)).status
    <ComplianceStatus.LATE: 'LATE'>
    """

    def __init__(self, policy: OccurrencePolicy = OccurrencePolicy.ROLLOVER) -> None:
        self.policy = policy

    def evaluate(
        self,
        snapshot: Optional[EntitySnapshot],
        filings: Iterable[FilingRecord],
        now: Union[date, datetime],
    ) -> ComplianceVerdict:
        return evaluate(snapshot, filings, now, self.policy)

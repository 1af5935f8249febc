"""
tests/test_compliance.py
========================

Unit tests for legalops.compliance.evaluate
"""

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from legalops.compliance import (
    LATE_FEE,
    UNKNOWN_ENTITY_TYPE_FEE_SCHEDULE,
    AnnualReportComplianceEvaluator,
    evaluate,
    reinstatement_fee_schedule,
    statutory_dates,
)
from legalops.errors import InvalidInput
from legalops.models import ComplianceStatus, EntityType, FilingRecord, FilingType


def _annual_report(day):
    return FilingRecord(FilingType.ANNUAL_REPORT, day)


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------
def test_late_after_may_first(llc):
    verdict = evaluate(llc, [], datetime(2024, 6, 1))

    assert verdict.status is ComplianceStatus.LATE
    assert verdict.late_fee == Decimal("400")
    assert verdict.reinstatement_fee == 0
    assert verdict.days_until_due is None
    assert verdict.due_date is None
    assert verdict.days_until_revocation == 111
    assert verdict.is_late and verdict.is_overdue


def test_revoked_day_after_fourth_friday(llc):
    verdict = evaluate(llc, [], datetime(2024, 9, 28))

    assert verdict.status is ComplianceStatus.REVOKED
    assert verdict.years_revoked == 4
    assert verdict.reinstatement_fee == Decimal("655.00")
    assert verdict.can_be_reinstated
    assert verdict.revocation_date == date(2024, 9, 27)
    assert verdict.late_fee == 0
    assert verdict.days_until_revocation is None


def test_annual_report_this_year_is_active(llc):
    verdict = evaluate(llc, [_annual_report(date(2024, 3, 1))], datetime(2024, 6, 1))

    assert verdict.status is ComplianceStatus.ACTIVE
    assert verdict.late_fee == 0
    assert verdict.reinstatement_fee == 0
    assert not verdict.is_due_soon


def test_annual_report_and_reinstatement_this_year(llc):
    filings = [
        FilingRecord(FilingType.REINSTATEMENT, datetime(2024, 2, 10, 9, 30)),
        _annual_report(datetime(2024, 2, 11, 14, 0)),
    ]
    verdict = evaluate(llc, filings, datetime(2024, 10, 15))

    assert verdict.status is ComplianceStatus.REINSTATED
    assert verdict.late_fee == verdict.reinstatement_fee == 0


def test_reinstatement_without_annual_report_does_not_count(llc):
    filings = [FilingRecord(FilingType.REINSTATEMENT, date(2024, 2, 10))]
    assert evaluate(llc, filings, datetime(2024, 6, 1)).status is ComplianceStatus.LATE


def test_last_years_annual_report_is_ignored(llc):
    verdict = evaluate(llc, [_annual_report(date(2023, 4, 2))], datetime(2024, 6, 1))
    assert verdict.status is ComplianceStatus.LATE


def test_unrelated_filings_are_ignored(llc):
    filings = [
        FilingRecord(FilingType.AMENDMENT, date(2024, 1, 5)),
        FilingRecord(FilingType.ADDRESS_CHANGE, date(2024, 2, 5)),
    ]
    assert evaluate(llc, filings, datetime(2024, 6, 1)).status is ComplianceStatus.LATE


def test_missing_formation_date_is_always_active(llc):
    snap = replace(llc, formation_date=None)
    verdict = evaluate(snap, [], datetime(2024, 12, 31))

    assert verdict.status is ComplianceStatus.ACTIVE
    assert verdict.days_until_due is None
    assert verdict.days_until_revocation is None
    assert verdict.due_date is None
    assert verdict.revocation_date is None
    assert verdict.late_fee == verdict.reinstatement_fee == 0
    assert verdict.years_revoked is None


def test_none_snapshot_raises():
    with pytest.raises(InvalidInput):
        evaluate(None, [], datetime(2024, 6, 1))


# ---------------------------------------------------------------------------
# Deadline boundaries (2024: 3rd Friday Sept 20, 4th Friday Sept 27)
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2024, 5, 1), ComplianceStatus.ACTIVE),
        (datetime(2024, 5, 2), ComplianceStatus.LATE),
        (datetime(2024, 9, 19, 23, 59), ComplianceStatus.LATE),
        (datetime(2024, 9, 20), ComplianceStatus.PENDING_REVOCATION),
        (datetime(2024, 9, 26, 23, 59), ComplianceStatus.PENDING_REVOCATION),
        (datetime(2024, 9, 27), ComplianceStatus.REVOKED),
        (datetime(2024, 12, 31), ComplianceStatus.REVOKED),
    ],
)
def test_status_boundaries(llc, now, expected):
    assert evaluate(llc, [], now).status is expected


def test_pending_revocation_carries_late_fee(llc):
    verdict = evaluate(llc, [], datetime(2024, 9, 22))

    assert verdict.status is ComplianceStatus.PENDING_REVOCATION
    assert verdict.late_fee == LATE_FEE
    assert verdict.revocation_date is None
    assert verdict.is_pending_revocation


def test_plain_date_is_treated_as_midnight(llc):
    assert evaluate(llc, [], date(2024, 9, 27)).status is ComplianceStatus.REVOKED
    assert evaluate(llc, [], date(2024, 9, 26)).status is ComplianceStatus.PENDING_REVOCATION


def test_timezone_aware_now(llc):
    now = datetime(2024, 9, 20, 8, 0, tzinfo=timezone(timedelta(hours=-4)))
    assert evaluate(llc, [], now).status is ComplianceStatus.PENDING_REVOCATION


# ---------------------------------------------------------------------------
# Due-soon window
# ---------------------------------------------------------------------------
def test_due_soon_within_sixty_days(llc):
    verdict = evaluate(llc, [], datetime(2024, 3, 15))

    assert verdict.status is ComplianceStatus.ACTIVE
    assert verdict.is_due_soon
    assert verdict.days_until_due == 47
    assert verdict.due_date == date(2024, 5, 1)


@pytest.mark.parametrize(
    "now, due_soon",
    [
        (datetime(2024, 3, 1), False),   # 61 days out
        (datetime(2024, 3, 2), True),    # 60 days out
        (datetime(2024, 5, 1), True),    # due today
        (datetime(2024, 1, 2), False),
    ],
)
def test_due_soon_edges(llc, now, due_soon):
    assert evaluate(llc, [], now).is_due_soon is due_soon


def test_partial_days_round_up(llc):
    verdict = evaluate(llc, [], datetime(2024, 4, 30, 18, 0))
    assert verdict.days_until_due == 1


def test_late_entity_is_never_due_soon(llc):
    assert not evaluate(llc, [], datetime(2024, 6, 1)).is_due_soon


# ---------------------------------------------------------------------------
# Reinstatement fees
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "entity_type, formed_year, expected_fee",
    [
        (EntityType.LLC, 2024, Decimal("100")),
        (EntityType.CORPORATION, 2020, Decimal("1200")),
        (EntityType.NONPROFIT_CORPORATION, 2020, Decimal("420.00")),
        (EntityType.PARTNERSHIP, 2020, Decimal("0")),
        (EntityType.SOLE_PROPRIETORSHIP, 2010, Decimal("0")),
    ],
)
def test_reinstatement_fee_by_entity_type(llc, entity_type, formed_year, expected_fee):
    snap = replace(llc, entity_type=entity_type, formation_date=date(formed_year, 3, 1))
    verdict = evaluate(snap, [], datetime(2024, 10, 1))

    assert verdict.status is ComplianceStatus.REVOKED
    assert verdict.reinstatement_fee == expected_fee


def test_unknown_entity_type_uses_named_zero_schedule():
    assert reinstatement_fee_schedule(EntityType.PARTNERSHIP) is UNKNOWN_ENTITY_TYPE_FEE_SCHEDULE
    assert UNKNOWN_ENTITY_TYPE_FEE_SCHEDULE.fee(7) == 0


@pytest.mark.parametrize(
    "entity_type",
    [EntityType.LLC, EntityType.CORPORATION, EntityType.NONPROFIT_CORPORATION],
)
def test_reinstatement_fee_never_decreases_with_years(entity_type):
    schedule = reinstatement_fee_schedule(entity_type)
    fees = [schedule.fee(years) for years in range(0, 15)]
    assert fees == sorted(fees)


@pytest.mark.parametrize(
    "formed_year, years, reinstatable",
    [(2014, 10, True), (2013, 11, False)],
)
def test_ten_year_reinstatement_window(llc, formed_year, years, reinstatable):
    snap = replace(llc, entity_type=EntityType.CORPORATION, formation_date=date(formed_year, 6, 1))
    verdict = evaluate(snap, [], datetime(2024, 10, 1))

    assert verdict.years_revoked == years
    assert verdict.can_be_reinstated is reinstatable
    assert verdict.reinstatement_fee == Decimal("600") + Decimal("150") * years


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("month", range(1, 13))
@pytest.mark.parametrize("reinstated", [False, True])
def test_annual_report_on_file_means_no_fees(llc, month, reinstated):
    filings = [_annual_report(date(2024, 1, 20))]
    if reinstated:
        filings.append(FilingRecord(FilingType.REINSTATEMENT, date(2024, 1, 10)))
    verdict = evaluate(llc, filings, datetime(2024, month, 28))

    assert verdict.status in (ComplianceStatus.ACTIVE, ComplianceStatus.REINSTATED)
    assert verdict.late_fee == 0
    assert verdict.reinstatement_fee == 0


def test_statutory_dates_2025():
    dates = statutory_dates(2025)
    assert dates.due_date == datetime(2025, 5, 1)
    assert dates.late_deadline == datetime(2025, 9, 19)
    assert dates.revocation_date == datetime(2025, 9, 26)


def test_evaluator_class_matches_function(llc):
    now = datetime(2024, 9, 28)
    assert AnnualReportComplianceEvaluator().evaluate(llc, [], now) == evaluate(llc, [], now)

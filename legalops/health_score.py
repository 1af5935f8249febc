"""
legalops.health_score
=====================

Business Health Score (0–100) for a single entity:

- Compliance status   (40 points): annual report, registered agent, status
- Document completeness (30 points): EIN, business purpose, DBA
- Payment status      (30 points): invoices overdue by more than 30 days

Each component starts at its maximum and loses points per finding.  A
component may go negative; only the total is clamped.  Recommendations
follow the order in which findings are evaluated, so the most severe
compliance problems come first.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional

from .errors import InvalidInput
from .models import (
    ComplianceStatus,
    ComplianceVerdict,
    ComponentScore,
    EntitySnapshot,
    Factor,
    HealthScoreBreakdown,
    OperatingStatus,
    REINSTATEMENT_WINDOW_YEARS,
    ScoreBand,
    Severity,
)


def _fmt_date(d: Optional[date], missing: str = "the due date") -> str:
    return f"{d.month}/{d.day}/{d.year}" if d else missing


def score_band(total_score: int) -> ScoreBand:
    """Map a total onto the dashboard band (Excellent / Good / …)."""
    return ScoreBand.for_score(total_score)


@dataclass
class ScoreSummary:
    """Portfolio roll-up of stored scores; unscored entities are skipped."""
    counts: Dict[ScoreBand, int]
    average: Optional[float]
    scored: int
    unscored: int


def summarize_scores(scores: Iterable[Optional[int]]) -> ScoreSummary:
    counts = {band: 0 for band in ScoreBand}
    values = []
    unscored = 0
    for score in scores:
        if score is None:
            unscored += 1
            continue
        values.append(score)
        counts[score_band(score)] += 1
    average = round(sum(values) / len(values), 1) if values else None
    return ScoreSummary(counts=counts, average=average, scored=len(values), unscored=unscored)


class HealthScoreCalculator:
    """
    Turns a :class:`ComplianceVerdict` plus document and payment signals
    into a :class:`HealthScoreBreakdown`.

    Only the verdict's fields are read, never the evaluator itself.
    """

    COMPLIANCE_MAX = 40
    DOCUMENTS_MAX = 30
    PAYMENTS_MAX = 30

    REVOKED_PENALTY = 30
    PENDING_REVOCATION_PENALTY = 25
    LATE_PENALTY = 20
    DUE_SOON_PENALTY = 5
    REINSTATED_BONUS = 2
    NO_AGENT_PENALTY = 10
    INACTIVE_PENALTY = 10
    MISSING_EIN_PENALTY = 10
    MISSING_PURPOSE_PENALTY = 5
    OVERDUE_INVOICE_PENALTY = 20

    def calculate(
        self,
        verdict: Optional[ComplianceVerdict],
        snapshot: Optional[EntitySnapshot],
        overdue_invoice_count: int,
    ) -> HealthScoreBreakdown:
        if snapshot is None:
            raise InvalidInput("an entity snapshot is required")
        if verdict is None:
            raise InvalidInput("a compliance verdict is required")

        name = snapshot.legal_name or "this entity"
        recommendations: List[str] = []

        compliance = self._score_compliance(verdict, snapshot, name, recommendations)
        documents = self._score_documents(snapshot, name, recommendations)
        payments = self._score_payments(overdue_invoice_count, recommendations)

        raw_total = compliance.score + documents.score + payments.score
        return HealthScoreBreakdown(
            total_score=max(0, min(100, raw_total)),
            compliance=compliance,
            documents=documents,
            payments=payments,
            recommendations=recommendations,
        )

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------
    def _score_compliance(
        self,
        verdict: ComplianceVerdict,
        snapshot: EntitySnapshot,
        name: str,
        recommendations: List[str],
    ) -> ComponentScore:
        part = ComponentScore(score=self.COMPLIANCE_MAX, max_score=self.COMPLIANCE_MAX)

        def _deduct(points: int, factor_name: str, severity: Severity, description: str) -> None:
            part.score -= points
            part.factors.append(Factor(factor_name, -points, severity, description))

        status = verdict.status
        if status is ComplianceStatus.REVOKED:
            fee = f"${verdict.reinstatement_fee:.2f}"
            if verdict.can_be_reinstated:
                years_left = REINSTATEMENT_WINDOW_YEARS - (verdict.years_revoked or 0)
                _deduct(
                    self.REVOKED_PENALTY,
                    "Administratively Dissolved",
                    Severity.CRITICAL,
                    f"Entity revoked on {_fmt_date(verdict.revocation_date, 'an unrecorded date')}. "
                    f"Can be reinstated within {years_left} years. Reinstatement fee: {fee}",
                )
                recommendations.append(
                    f"⚠️ URGENT: Reinstate {name} immediately. Reinstatement fee: {fee}. "
                    f"Entity can be reinstated up to {years_left} more years."
                )
            else:
                _deduct(
                    self.REVOKED_PENALTY,
                    "Administratively Dissolved (Cannot Reinstate)",
                    Severity.CRITICAL,
                    "Entity revoked more than 10 years ago. Must form new entity.",
                )
                recommendations.append(
                    f"❌ CRITICAL: {name} cannot be reinstated (revoked >10 years). "
                    "You must form a new entity."
                )
        elif status is ComplianceStatus.PENDING_REVOCATION:
            _deduct(
                self.PENDING_REVOCATION_PENALTY,
                "Imminent Revocation Risk",
                Severity.CRITICAL,
                f"Entity will be administratively dissolved in {verdict.days_until_revocation} days "
                f"if annual report not filed. Late fee: ${verdict.late_fee}",
            )
            recommendations.append(
                f"🚨 URGENT: File annual report for {name} within {verdict.days_until_revocation} days "
                f"to avoid administrative dissolution. Late fee: ${verdict.late_fee}"
            )
        elif status is ComplianceStatus.LATE:
            _deduct(
                self.LATE_PENALTY,
                "Annual Report Late",
                Severity.CRITICAL,
                f"Annual report overdue. Late fee: ${verdict.late_fee}. "
                "Must file by 3rd Friday of September to avoid revocation.",
            )
            recommendations.append(
                f"File annual report for {name} immediately. Late fee: ${verdict.late_fee}. "
                "Deadline to avoid revocation: 3rd Friday of September."
            )
        elif verdict.is_due_soon:
            _deduct(
                self.DUE_SOON_PENALTY,
                "Annual Report Due Soon",
                Severity.WARNING,
                f"Annual report due in {verdict.days_until_due} days "
                f"(by {_fmt_date(verdict.due_date)})",
            )
            recommendations.append(
                f"File your annual report for {name} before {_fmt_date(verdict.due_date)} "
                "to avoid $400 late fee"
            )
        elif status is ComplianceStatus.REINSTATED:
            part.score += self.REINSTATED_BONUS
            part.factors.append(Factor(
                "Recently Reinstated",
                self.REINSTATED_BONUS,
                Severity.GOOD,
                "Entity was recently reinstated and is now in good standing",
            ))

        if not snapshot.has_registered_agent:
            _deduct(
                self.NO_AGENT_PENALTY,
                "No Registered Agent",
                Severity.CRITICAL,
                "Florida law requires all businesses to have a registered agent",
            )
            recommendations.append(f"Add a registered agent for {name} - required by Florida law")

        if snapshot.operating_status in (OperatingStatus.INACTIVE, OperatingStatus.DISSOLVED):
            _deduct(
                self.INACTIVE_PENALTY,
                "Business Inactive",
                Severity.CRITICAL,
                f"Business status is {snapshot.operating_status.name}",
            )
            recommendations.append(f"Reactivate {name} or file dissolution paperwork")

        return part

    def _score_documents(
        self,
        snapshot: EntitySnapshot,
        name: str,
        recommendations: List[str],
    ) -> ComponentScore:
        part = ComponentScore(score=self.DOCUMENTS_MAX, max_score=self.DOCUMENTS_MAX)

        if not snapshot.tax_id_present:
            part.score -= self.MISSING_EIN_PENALTY
            part.factors.append(Factor(
                "Missing EIN",
                -self.MISSING_EIN_PENALTY,
                Severity.WARNING,
                "Federal Employer Identification Number not on file",
            ))
            recommendations.append(
                f"Apply for an EIN for {name} - needed for taxes, hiring, and banking"
            )

        if not (snapshot.purpose_text or "").strip():
            part.score -= self.MISSING_PURPOSE_PENALTY
            part.factors.append(Factor(
                "Missing Business Purpose",
                -self.MISSING_PURPOSE_PENALTY,
                Severity.WARNING,
                "Business purpose not documented (optional but recommended)",
            ))
            recommendations.append(
                f"Consider adding a business purpose for {name} "
                '(optional - 80% of customers use "Any legitimate business purpose")'
            )

        if snapshot.dba_name:
            part.factors.append(Factor(
                "DBA Registered",
                0,
                Severity.GOOD,
                f'Doing business as "{snapshot.dba_name}"',
            ))

        return part

    def _score_payments(self, overdue_invoice_count: int, recommendations: List[str]) -> ComponentScore:
        part = ComponentScore(score=self.PAYMENTS_MAX, max_score=self.PAYMENTS_MAX)

        # Flat penalty; the number of overdue invoices only shows in the text.
        if overdue_invoice_count > 0:
            part.score -= self.OVERDUE_INVOICE_PENALTY
            part.factors.append(Factor(
                "Overdue Invoices",
                -self.OVERDUE_INVOICE_PENALTY,
                Severity.CRITICAL,
                f"{overdue_invoice_count} invoice(s) overdue by more than 30 days",
            ))
            recommendations.append(
                f"Pay {overdue_invoice_count} overdue invoice(s) to maintain good standing"
            )

        return part


_default_calculator = HealthScoreCalculator()


def calculate(
    verdict: Optional[ComplianceVerdict],
    snapshot: Optional[EntitySnapshot],
    overdue_invoice_count: int = 0,
) -> HealthScoreBreakdown:
    """Module-level shortcut for :pymeth:`HealthScoreCalculator.calculate`."""
    return _default_calculator.calculate(verdict, snapshot, overdue_invoice_count)

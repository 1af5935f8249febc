"""
legalops.models
===============

Dataclasses and enums shared by the compliance evaluator, the health
score calculator and the repositories that feed them.

Everything here is a plain value object built fresh for each
evaluation; nothing holds a clock or a database handle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

# Years after revocation during which reinstatement is still possible.
REINSTATEMENT_WINDOW_YEARS = 10


class _NamedEnum(str, Enum):
    def __str__(self) -> str:        # nicer REPL display
        return self.name


class EntityType(_NamedEnum):
    """Florida entity types known to the platform."""
    LLC = "LLC"
    CORPORATION = "CORPORATION"
    NONPROFIT_CORPORATION = "NONPROFIT_CORPORATION"
    PARTNERSHIP = "PARTNERSHIP"
    SOLE_PROPRIETORSHIP = "SOLE_PROPRIETORSHIP"


class OperatingStatus(_NamedEnum):
    """Status recorded on the entity itself (not the annual-report verdict)."""
    PENDING = "PENDING"
    FILED = "FILED"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DISSOLVED = "DISSOLVED"


class FilingType(_NamedEnum):
    LLC_FORMATION = "LLC_FORMATION"
    CORP_FORMATION = "CORP_FORMATION"
    NONPROFIT_FORMATION = "NONPROFIT_FORMATION"
    ANNUAL_REPORT = "ANNUAL_REPORT"
    AMENDMENT = "AMENDMENT"
    DISSOLUTION = "DISSOLUTION"
    REINSTATEMENT = "REINSTATEMENT"
    NAME_CHANGE = "NAME_CHANGE"
    REGISTERED_AGENT_CHANGE = "REGISTERED_AGENT_CHANGE"
    ADDRESS_CHANGE = "ADDRESS_CHANGE"
    EIN_APPLICATION = "EIN_APPLICATION"
    FICTITIOUS_NAME = "FICTITIOUS_NAME"


class ComplianceStatus(_NamedEnum):
    """Annual-report standing for the calendar year being evaluated."""
    ACTIVE = "ACTIVE"
    LATE = "LATE"
    PENDING_REVOCATION = "PENDING_REVOCATION"
    REVOKED = "REVOKED"
    REINSTATED = "REINSTATED"


class Severity(_NamedEnum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class ScoreBand(_NamedEnum):
    """Dashboard bucket for a total health score."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_ATTENTION = "Needs Attention"
    CRITICAL = "Critical"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def for_score(cls, score: int) -> "ScoreBand":
        if score >= 90:
            return cls.EXCELLENT
        if score >= 75:
            return cls.GOOD
        if score >= 60:
            return cls.NEEDS_ATTENTION
        return cls.CRITICAL


# ---------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------
@dataclass
class EntitySnapshot:
    """
    The slice of a business entity the compliance core reads.

    Parameters
    ----------
    entity_type : EntityType
        Drives the reinstatement fee schedule.
    formation_date : datetime.date | None
        Date the entity was filed with the state.  ``None`` exempts the
        entity from deadline enforcement.
    operating_status : OperatingStatus
        Status stored on the entity record.
    has_registered_agent : bool
        Whether a registered agent is on file.
    tax_id_present : bool
        Whether an EIN / FEI number is on file.
    purpose_text : str
        Business purpose, possibly empty.
    dba_name : str | None
        Fictitious name, informational only.
    legal_name : str
        Used to personalise recommendation text.
    """
    entity_type: EntityType
    formation_date: Optional[date] = None
    operating_status: OperatingStatus = OperatingStatus.ACTIVE
    has_registered_agent: bool = True
    tax_id_present: bool = True
    purpose_text: str = ""
    dba_name: Optional[str] = None
    legal_name: str = ""


@dataclass
class FilingRecord:
    filing_type: FilingType
    filed_at: Union[date, datetime]


@dataclass
class EntityRecord:
    """One consistent per-entity snapshot handed over by a repository."""
    entity_id: str
    snapshot: EntitySnapshot
    filings: List[FilingRecord] = field(default_factory=list)
    overdue_invoice_count: int = 0


# ---------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------
@dataclass
class ComplianceVerdict:
    status: ComplianceStatus
    is_due_soon: bool = False
    days_until_due: Optional[int] = None
    days_until_revocation: Optional[int] = None
    due_date: Optional[date] = None
    revocation_date: Optional[date] = None
    late_fee: Decimal = Decimal("0")
    reinstatement_fee: Decimal = Decimal("0")
    years_revoked: Optional[int] = None
    can_be_reinstated: bool = False

    @property
    def is_late(self) -> bool:
        return self.status is ComplianceStatus.LATE

    @property
    def is_pending_revocation(self) -> bool:
        return self.status is ComplianceStatus.PENDING_REVOCATION

    @property
    def is_revoked(self) -> bool:
        return self.status is ComplianceStatus.REVOKED

    @property
    def is_overdue(self) -> bool:
        """True once May 1 has passed without an annual report."""
        return self.status in (
            ComplianceStatus.LATE,
            ComplianceStatus.PENDING_REVOCATION,
            ComplianceStatus.REVOKED,
        )


@dataclass
class Factor:
    """
    One explanatory line in a score component.

    ``impact_points`` is signed: negative for a deduction, positive for a
    bonus and zero for purely informational factors.
    """
    name: str
    impact_points: int
    severity: Severity
    description: str


@dataclass
class ComponentScore:
    score: int
    max_score: int
    factors: List[Factor] = field(default_factory=list)


@dataclass
class HealthScoreBreakdown:
    total_score: int
    compliance: ComponentScore
    documents: ComponentScore
    payments: ComponentScore
    recommendations: List[str] = field(default_factory=list)

    @property
    def band(self) -> ScoreBand:
        return ScoreBand.for_score(self.total_score)

"""
LegalOps
========

Florida annual-report compliance and business health scoring for the
entities a LegalOps customer manages.

Import structure
----------------
`import legalops` is intentionally cheap: the rule engine is pure
Python with no third‑party imports.  The SQLite store
(:pymod:`legalops.db`, SQLModel) and plotting (:pymod:`legalops.viz`,
matplotlib) are only imported when you access them explicitly.

Sub‑modules
~~~~~~~~~~~
- :pymod:`legalops.models`          – snapshots, verdicts, score breakdowns + enums
- :pymod:`legalops.calendar_rules`  – "Nth weekday of month" deadlines
- :pymod:`legalops.compliance`      – annual-report verdict and statutory fees
- :pymod:`legalops.health_score`    – 0–100 health score with factors
- :pymod:`legalops.batch`           – best-effort scoring across a repository
- :pymod:`legalops.ports`           – repository interface
- :pymod:`legalops.portfolio`       – in‑memory repository
- :pymod:`legalops.portfolio_db`    – SQLite repository
- :pymod:`legalops.viz`             – score band bar chart

Quick start
-----------
>>> from datetime import date
>>> from legalops.models import EntitySnapshot, EntityType
>>> from legalops.compliance import evaluate
>>> from legalops.health_score import calculate
>>> snap = EntitySnapshot(EntityType.LLC, date(2020, 1, 15), purpose_text="Consulting")
>>> verdict = evaluate(snap, [], date(2024, 6, 1))
>>> calculate(verdict, snap, 0).total_score
80

"""

__all__ = [
    "models",
    "calendar_rules",
    "compliance",
    "health_score",
    "batch",
    "ports",
    "portfolio",
    "portfolio_db",
    "viz",
]

__version__ = "0.1.0"

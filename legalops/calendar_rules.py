"""
legalops.calendar_rules
=======================

Statutory deadlines expressed as "Nth weekday of month" rules
(e.g. the 3rd Friday of September).

Months are 1–12 and weekdays follow :pymeth:`datetime.date.weekday`
(Monday=0 … Sunday=6), so :pydata:`calendar.FRIDAY` can be passed
directly.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from enum import Enum

from .errors import InvalidInput


class OccurrencePolicy(str, Enum):
    """
    What to do when the requested occurrence does not exist in the month.

    ``ROLLOVER`` keeps the historical behaviour: a 5th Friday in a
    four-Friday month silently lands in the following month, which keeps
    previously computed deadlines stable.  ``STRICT`` raises instead.
    """
    ROLLOVER = "rollover"
    STRICT = "strict"


def nth_weekday_of_month(
    year: int,
    month: int,
    weekday: int,
    occurrence: int,
    policy: OccurrencePolicy = OccurrencePolicy.ROLLOVER,
) -> date:
    """
    Return the date of the *occurrence*-th *weekday* in *month* of *year*.

    Examples
    --------
    >>> nth_weekday_of_month(2024, 9, calendar.FRIDAY, 3)
    datetime.date(2024, 9, 20)
    >>> nth_weekday_of_month(2024, 9, calendar.FRIDAY, 4)
    datetime.date(2024, 9, 27)
    """
    first = date(year, month, 1)
    offset = (weekday - first.weekday() + 7) % 7
    target = first + timedelta(days=offset + (occurrence - 1) * 7)

    if policy == OccurrencePolicy.STRICT:
        if not 0 <= weekday <= 6:
            raise InvalidInput(f"weekday must be 0 (Monday) to 6 (Sunday), got {weekday}")
        _, days_in_month = calendar.monthrange(year, month)
        if occurrence < 1 or target.month != month or target.year != year:
            raise InvalidInput(
                f"{calendar.month_name[month]} {year} has no occurrence "
                f"#{occurrence} of {calendar.day_name[weekday]} "
                f"({days_in_month} days)"
            )
    return target

"""Banking Days — weekend and US Federal Reserve holiday aware date arithmetic.

Invariants:
    - Saturdays, Sundays and Federal Reserve holidays are never banking days
    - A holiday falling on a Sunday closes the following Monday; one falling on a
      Saturday closes nothing extra (the Fed stays open that Friday)
    - add_banking_days(d, n) with n >= 1 always returns a banking day strictly after d
"""

from datetime import date, datetime, timedelta
from functools import lru_cache

import holidays


@lru_cache(maxsize=16)
def _fed_closures(year: int) -> frozenset[date]:
    actual = holidays.country_holidays("US", years=year, observed=False)
    closed = set(actual)
    closed.update(day + timedelta(days=1) for day in actual if day.weekday() == 6)
    return frozenset(closed)


def is_banking_day(day: date) -> bool:
    if day.weekday() >= 5:
        return False
    return day not in _fed_closures(day.year)


def add_banking_days(start: date | datetime, days: int) -> date:
    """Advance `days` banking days from `start` (calendar date of `start`)."""
    current = start.date() if isinstance(start, datetime) else start
    remaining = days
    while remaining > 0:
        current += timedelta(days=1)
        if is_banking_day(current):
            remaining -= 1
    return current

# pickbook/services/slots/dates.py
"""
Date policy helpers.

`today` is always passed in so callers (and tests) control the clock.
"""

import calendar
from datetime import date, timedelta


def is_past(target_date: date, today: date) -> bool:
    """True if target_date is strictly before today."""
    return target_date < today


def is_holiday(target_date: date, settings) -> bool:
    return target_date in settings.holiday_dates


def add_months(dt: date, months: int) -> date:
    """Calendar-month arithmetic, clamped to the last day of the target month."""
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(dt.day, last_day))


def horizon_end(today: date, months: int) -> date:
    """Last date that may still be booked."""
    return add_months(today, months)


def is_beyond_horizon(target_date: date, today: date, settings) -> bool:
    return target_date > horizon_end(today, settings.calendar_horizon_months)


def date_range(start: date, end: date) -> list[date]:
    """Dates in [start, end], swapped if given in reverse."""
    if start > end:
        start, end = end, start

    dates = []
    current = start
    while current <= end:
        dates.append(current)
        current += timedelta(days=1)
    return dates

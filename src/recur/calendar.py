"""Calendar date arithmetic used by the occurrence calculators.

Dates are plain ``datetime.date`` values. They are immutable, so every
helper returns a new date and a working cursor never aliases the date it
was derived from.
"""

from calendar import monthrange
from datetime import MAXYEAR, date, datetime, timedelta

from dateutil.relativedelta import relativedelta

CalendarDate = date


def to_date(value: date | datetime) -> date:
    """Return the calendar date of ``value``, dropping any time of day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def iso_weekday(d: date) -> int:
    """Monday=1 ... Sunday=7."""
    return d.isoweekday()


def days_in_month(d: date) -> int:
    return monthrange(d.year, d.month)[1]


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def end_of_month(d: date) -> date:
    return d.replace(day=days_in_month(d))


def clamp_day(d: date, day: int) -> date:
    """Move ``d`` to ``day`` within its month, clamped to the month's last day."""
    return d.replace(day=min(day, days_in_month(d)))


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def add_weeks(d: date, weeks: int) -> date:
    return d + timedelta(weeks=weeks)


def add_months(d: date, months: int) -> date:
    """Shift by whole months, clamping the day (Jan 31 + 1 month = Feb 28/29)."""
    if d.year + (d.month - 1 + months) // 12 > MAXYEAR:
        raise OverflowError("date value out of range")
    return d + relativedelta(months=months)


def add_years(d: date, years: int) -> date:
    """Shift by whole years, Feb 29 clamps to Feb 28 in common years."""
    if d.year + years > MAXYEAR:
        raise OverflowError("date value out of range")
    return d + relativedelta(years=years)


def month_day_in_year(year: int, month: int, day: int) -> date:
    """Build ``year-month-day``, clamping the day to the month's length."""
    if year > MAXYEAR:
        raise OverflowError("date value out of range")
    return date(year, month, min(day, monthrange(year, month)[1]))


def nth_weekday_of_month(
    year: int, month: int, ordinal: int, weekday: int
) -> date | None:
    """Resolve "the ordinal-th ISO weekday of month year".

    Returns None when the month has no such occurrence (e.g. a fifth
    Friday in a month with four).
    """
    first = date(year, month, 1)
    offset = (weekday - first.isoweekday()) % 7
    day = 1 + offset + 7 * (ordinal - 1)
    if day > monthrange(year, month)[1]:
        return None
    return first.replace(day=day)

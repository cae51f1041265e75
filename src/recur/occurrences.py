"""Occurrence calculators for recurring transactions.

Each calculator walks a single-period cadence (day, week, month, year)
forward from an anchor date. Every candidate gets an attempt number
starting at 0, and a candidate is emitted only when its attempt number is
a multiple of ``skip_mod`` and it clears the lower bound. ``skip_mod=2``
therefore means "every other period".

Lower-bound comparison differs per kind:

- daily: the candidate must be strictly after the lower bound
- weekly, monthly: the candidate must be on or after the lower bound
- ndom: the first day of the candidate's month must be on or after it
- yearly: the anchor itself must be on or after it (see yearly_occurrences)
"""

from contextlib import contextmanager
from datetime import date, datetime
from typing import Generator, NamedTuple

from recur.calendar import (
    add_days,
    add_months,
    add_weeks,
    clamp_day,
    end_of_month,
    iso_weekday,
    month_day_in_year,
    nth_weekday_of_month,
    start_of_month,
    to_date,
)
from recur.config import get_recur_config
from recur.logging import get_logger
from recur.validation import (
    InvalidParameterError,
    validate_count,
    validate_day_of_month,
    validate_iso_weekday,
    validate_month_day,
    validate_ordinal,
    validate_skip_mod,
)

_log = get_logger(__name__)


class NthWeekday(NamedTuple):
    """Moment for "the ordinal-th weekday of the month"."""

    ordinal: int  # 1-5
    weekday: int  # ISO, Monday=1


class MonthDay(NamedTuple):
    """Moment for yearly repetitions. No year: it comes from the anchor."""

    month: int
    day: int


class RecurrenceError(Exception):
    """Base class for faults raised while computing occurrences."""
    pass


class UnresolvableMomentError(RecurrenceError):
    """Raised when the requested Nth weekday does not exist in a month."""
    pass


class ComputationExceededError(RecurrenceError):
    """Raised when a calculation cannot produce the requested count."""
    pass


def _check_attempts(kind: str, attempts: int) -> None:
    limit = get_recur_config().max_iterations
    if attempts >= limit:
        raise ComputationExceededError(
            f"{kind} calculation gave up after {limit} attempts"
        )


@contextmanager
def _calendar_bounds(kind: str) -> Generator[None, None, None]:
    """Turn date overflow into ComputationExceededError."""
    try:
        yield
    except OverflowError as exc:
        raise ComputationExceededError(
            f"{kind} calculation ran past the last representable date"
        ) from exc


def daily_occurrences(
    anchor: date | datetime,
    lower_bound: date | datetime,
    count: int,
    skip_mod: int,
) -> list[date]:
    """Every day from ``anchor`` on, strictly after ``lower_bound``.

    The anchor day itself is a candidate; it is dropped when it equals the
    lower bound, since a day that has already passed is not a new occurrence.
    """
    validate_count(count)
    validate_skip_mod(skip_mod)
    cursor = to_date(anchor)
    lower_bound = to_date(lower_bound)

    occurrences: list[date] = []
    attempts = 0
    with _calendar_bounds("daily"):
        while len(occurrences) < count:
            _check_attempts("daily", attempts)
            if attempts % skip_mod == 0 and cursor > lower_bound:
                occurrences.append(cursor)
            attempts += 1
            if len(occurrences) < count:
                cursor = add_days(cursor, 1)

    _log.debug("occurrences_computed", kind="daily", count=count, attempts=attempts)
    return occurrences


def weekly_occurrences(
    anchor: date | datetime,
    lower_bound: date | datetime,
    count: int,
    skip_mod: int,
    weekday: int,
) -> list[date]:
    """Every ``weekday`` (ISO, Monday=1) after ``anchor``.

    The anchor day is treated as already passed, so an anchor that falls on
    ``weekday`` yields the following week first.
    """
    validate_count(count)
    validate_skip_mod(skip_mod)
    validate_iso_weekday(weekday)
    lower_bound = to_date(lower_bound)

    occurrences: list[date] = []
    attempts = 0
    with _calendar_bounds("weekly"):
        cursor = add_days(to_date(anchor), 1)
        # a weekday already passed this week lands in the next one
        cursor = add_days(cursor, (weekday - iso_weekday(cursor)) % 7)

        while len(occurrences) < count:
            _check_attempts("weekly", attempts)
            if attempts % skip_mod == 0 and cursor >= lower_bound:
                occurrences.append(cursor)
            attempts += 1
            if len(occurrences) < count:
                cursor = add_weeks(cursor, 1)

    _log.debug("occurrences_computed", kind="weekly", count=count, attempts=attempts)
    return occurrences


def monthly_occurrences(
    anchor: date | datetime,
    lower_bound: date | datetime,
    count: int,
    skip_mod: int,
    day_of_month: int,
) -> list[date]:
    """Day ``day_of_month`` of every month, starting with the anchor's month.

    Months shorter than ``day_of_month`` use their last day instead, so day
    31 becomes Feb 29 in 2024. When the anchor's day is already past
    ``day_of_month`` the first candidate is in the following month.
    """
    validate_count(count)
    validate_skip_mod(skip_mod)
    validate_day_of_month(day_of_month)
    cursor = to_date(anchor)
    lower_bound = to_date(lower_bound)

    occurrences: list[date] = []
    attempts = 0
    with _calendar_bounds("monthly"):
        if cursor.day > day_of_month:
            cursor = add_months(cursor, 1)

        while len(occurrences) < count:
            _check_attempts("monthly", attempts)
            cursor = clamp_day(cursor, day_of_month)
            if attempts % skip_mod == 0 and cursor >= lower_bound:
                occurrences.append(cursor)
            attempts += 1
            if len(occurrences) < count:
                cursor = add_days(end_of_month(cursor), 1)

    _log.debug("occurrences_computed", kind="monthly", count=count, attempts=attempts)
    return occurrences


def ndom_occurrences(
    anchor: date | datetime,
    lower_bound: date | datetime,
    count: int,
    skip_mod: int,
    ordinal: int,
    weekday: int,
) -> list[date]:
    """The ``ordinal``-th ``weekday`` of every month ("second Wednesday").

    Months are walked from the month of the day after ``anchor``. The lower
    bound is compared against the first day of each month, not against the
    resolved date.

    When a month that would be emitted has no such weekday (a fifth Friday
    in a four-Friday month) the configured ``ndom_overflow`` policy applies:
    "skip" spends the attempt on that month and emits nothing, "raise"
    raises UnresolvableMomentError. Months before the lower bound or
    passed over by ``skip_mod`` are never resolved.
    """
    validate_count(count)
    validate_skip_mod(skip_mod)
    validate_ordinal(ordinal)
    validate_iso_weekday(weekday)
    lower_bound = to_date(lower_bound)
    overflow = get_recur_config().ndom_overflow

    occurrences: list[date] = []
    attempts = 0
    with _calendar_bounds("ndom"):
        cursor = start_of_month(add_days(to_date(anchor), 1))

        while len(occurrences) < count:
            _check_attempts("ndom", attempts)
            if attempts % skip_mod == 0 and cursor >= lower_bound:
                resolved = nth_weekday_of_month(
                    cursor.year, cursor.month, ordinal, weekday
                )
                if resolved is not None:
                    occurrences.append(resolved)
                elif overflow == "raise":
                    raise UnresolvableMomentError(
                        f"{cursor:%B %Y} has no occurrence {ordinal} "
                        f"of ISO weekday {weekday}"
                    )
                else:
                    _log.debug(
                        "ndom_month_skipped",
                        month=cursor,
                        ordinal=ordinal,
                        weekday=weekday,
                    )
            attempts += 1
            if len(occurrences) < count:
                cursor = add_days(end_of_month(cursor), 1)

    _log.debug("occurrences_computed", kind="ndom", count=count, attempts=attempts)
    return occurrences


def yearly_occurrences(
    anchor: date | datetime,
    lower_bound: date | datetime,
    count: int,
    skip_mod: int,
    month_day: MonthDay | tuple[int, int] | date,
) -> list[date]:
    """The same month and day every year, from the anchor's year on.

    ``month_day`` may be a MonthDay, a ``(month, day)`` tuple or any date
    (its year is ignored). If that day has already passed in the anchor's
    year the series starts the year after. Feb 29 falls on Feb 28 in
    common years.

    Unlike the other kinds, the lower-bound test checks the anchor, not the
    candidate, so it holds for every candidate or for none. When it holds for
    none the series can never be produced and ComputationExceededError is
    raised straight away.
    """
    if isinstance(month_day, date):
        month, day = month_day.month, month_day.day
    else:
        try:
            month, day = month_day
        except (TypeError, ValueError) as exc:
            raise InvalidParameterError(
                f"month_day must be a (month, day) pair, got {month_day!r}"
            ) from exc
    validate_count(count)
    validate_skip_mod(skip_mod)
    validate_month_day(month, day)
    anchor = to_date(anchor)
    lower_bound = to_date(lower_bound)

    if not anchor >= lower_bound:
        _log.warning(
            "yearly_anchor_before_lower_bound",
            anchor=anchor,
            lower_bound=lower_bound,
        )
        raise ComputationExceededError(
            f"yearly calculation cannot emit anything: anchor {anchor} "
            f"is before lower bound {lower_bound}"
        )

    occurrences: list[date] = []
    attempts = 0
    with _calendar_bounds("yearly"):
        first_year = anchor.year
        if anchor > month_day_in_year(first_year, month, day):
            first_year += 1

        while len(occurrences) < count:
            _check_attempts("yearly", attempts)
            if attempts % skip_mod == 0:
                occurrences.append(month_day_in_year(first_year + attempts, month, day))
            attempts += 1

    _log.debug("occurrences_computed", kind="yearly", count=count, attempts=attempts)
    return occurrences

"""Repetition rules and their dispatch to the occurrence calculators."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Literal

from recur.calendar import add_days, iso_weekday, to_date
from recur.logging import get_logger
from recur.occurrences import (
    daily_occurrences,
    monthly_occurrences,
    ndom_occurrences,
    weekly_occurrences,
    yearly_occurrences,
)
from recur.validation import InvalidParameterError, validate_count

RepetitionType = Literal["daily", "weekly", "ndom", "monthly", "yearly"]
WeekendPolicy = Literal["ignore", "skip", "previous_friday", "next_monday"]

_log = get_logger(__name__)


@dataclass(frozen=True)
class Repetition:
    """One repetition of a recurring transaction.

    Attributes:
        type: Cadence of the repetition.
        moment: Kind-specific pin. Unused for "daily"; an ISO weekday for
            "weekly"; a day of month for "monthly"; an NthWeekday (or
            ``(ordinal, weekday)``) for "ndom"; a MonthDay, ``(month, day)``
            or date for "yearly".
        skip: Periods skipped between occurrences. 0 = every period,
            1 = every other period.
        weekend: How occurrences that fall on Saturday or Sunday are handled.
    """

    type: RepetitionType
    moment: Any = None
    skip: int = 0
    weekend: WeekendPolicy = "ignore"

    @property
    def skip_mod(self) -> int:
        return self.skip + 1


def apply_weekend_policy(dates: Iterable[date], policy: WeekendPolicy) -> list[date]:
    """Apply a weekend policy to a list of occurrences.

    "skip" drops weekend dates, "previous_friday" and "next_monday" move
    them. The result is sorted and free of duplicates, so it can be shorter
    than the input.
    """
    if policy not in ("ignore", "skip", "previous_friday", "next_monday"):
        raise InvalidParameterError(f"Unknown weekend policy: {policy}")
    if policy == "ignore":
        return list(dates)

    adjusted = set()
    for d in dates:
        weekday = iso_weekday(d)
        if weekday < 6:
            adjusted.add(d)
        elif policy == "skip":
            continue
        elif policy == "previous_friday":
            adjusted.add(add_days(d, 5 - weekday))
        else:
            adjusted.add(add_days(d, 8 - weekday))
    return sorted(adjusted)


def occurrences_since(
    repetition: Repetition,
    anchor: date | datetime,
    lower_bound: date | datetime,
    count: int,
) -> list[date]:
    """Compute the next ``count`` occurrences of a repetition.

    The weekend policy is applied afterwards, so with "skip" fewer than
    ``count`` dates may come back.
    """
    kind = repetition.type
    skip_mod = repetition.skip_mod
    moment = repetition.moment

    if kind == "daily":
        occurrences = daily_occurrences(anchor, lower_bound, count, skip_mod)
    elif kind == "weekly":
        occurrences = weekly_occurrences(anchor, lower_bound, count, skip_mod, moment)
    elif kind == "monthly":
        occurrences = monthly_occurrences(anchor, lower_bound, count, skip_mod, moment)
    elif kind == "ndom":
        try:
            ordinal, weekday = moment
        except (TypeError, ValueError) as exc:
            raise InvalidParameterError(
                f"ndom moment must be an (ordinal, weekday) pair, got {moment!r}"
            ) from exc
        occurrences = ndom_occurrences(
            anchor, lower_bound, count, skip_mod, ordinal, weekday
        )
    elif kind == "yearly":
        occurrences = yearly_occurrences(anchor, lower_bound, count, skip_mod, moment)
    else:
        raise InvalidParameterError(f"Unknown repetition type: {kind}")

    return apply_weekend_policy(occurrences, repetition.weekend)


@dataclass(frozen=True)
class Recurrence:
    """A recurring transaction: one or more repetitions sharing a date window.

    Attributes:
        repetitions: Repetitions whose occurrences are merged.
        first_date: No occurrence is projected from before this date.
        repeat_until: Last date an occurrence may fall on. None = open ended.
    """

    repetitions: tuple[Repetition, ...]
    first_date: date
    repeat_until: date | None = None

    def next_occurrences(self, after: date | datetime, count: int) -> list[date]:
        """Merge the next ``count`` occurrences of all repetitions.

        Each repetition is projected from the later of ``first_date`` and
        ``after`` with ``after`` as lower bound. Results are de-duplicated,
        sorted and cut at ``repeat_until``.
        """
        validate_count(count)
        after = to_date(after)
        anchor = max(to_date(self.first_date), after)

        merged: set[date] = set()
        for repetition in self.repetitions:
            merged.update(occurrences_since(repetition, anchor, after, count))

        occurrences = sorted(merged)
        if self.repeat_until is not None:
            until = to_date(self.repeat_until)
            occurrences = [d for d in occurrences if d <= until]

        _log.debug(
            "recurrence_occurrences_merged",
            repetitions=len(self.repetitions),
            merged=len(merged),
            returned=min(count, len(occurrences)),
        )
        return occurrences[:count]

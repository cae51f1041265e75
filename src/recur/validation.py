"""Parameter validation for occurrence calculators."""

from calendar import monthrange
from typing import Any

# 2000 is a leap year, so Feb 29 counts as a valid month-day.
_LEAP_YEAR = 2000


class InvalidParameterError(ValueError):
    """Raised when a calculator argument is out of range."""
    pass


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    return value


def _require_range(name: str, value: Any, low: int, high: int) -> int:
    value = _require_int(name, value)
    if not low <= value <= high:
        raise InvalidParameterError(
            f"{name} must be between {low} and {high}, got {value}"
        )
    return value


def validate_count(count: Any) -> int:
    """Number of occurrences to produce, at least 1."""
    count = _require_int("count", count)
    if count < 1:
        raise InvalidParameterError(f"count must be at least 1, got {count}")
    return count


def validate_skip_mod(skip_mod: Any) -> int:
    """Skip modulus, at least 1 (1 emits every candidate)."""
    skip_mod = _require_int("skip_mod", skip_mod)
    if skip_mod < 1:
        raise InvalidParameterError(f"skip_mod must be at least 1, got {skip_mod}")
    return skip_mod


def validate_iso_weekday(weekday: Any) -> int:
    """ISO weekday, Monday=1 through Sunday=7."""
    return _require_range("weekday", weekday, 1, 7)


def validate_ordinal(ordinal: Any) -> int:
    return _require_range("ordinal", ordinal, 1, 5)


def validate_day_of_month(day: Any) -> int:
    return _require_range("day_of_month", day, 1, 31)


def validate_month_day(month: Any, day: Any) -> tuple[int, int]:
    """Validate a yearly month/day pair.

    Days that never occur in the month (Feb 30, Apr 31) are rejected.
    Feb 29 is accepted.
    """
    month = _require_range("month", month, 1, 12)
    longest = monthrange(_LEAP_YEAR, month)[1]
    day = _require_range("day", day, 1, longest)
    return month, day

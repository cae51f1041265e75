"""Recur - Occurrence calculator for recurring transactions."""

from recur.calendar import CalendarDate
from recur.config import (
    RecurConfig,
    configure_recur,
    get_recur_config,
    reset_recur_config,
)
from recur.executor import async_batch_occurrences, batch_occurrences
from recur.logging import configure_logging, get_logger
from recur.occurrences import (
    ComputationExceededError,
    MonthDay,
    NthWeekday,
    RecurrenceError,
    UnresolvableMomentError,
    daily_occurrences,
    monthly_occurrences,
    ndom_occurrences,
    weekly_occurrences,
    yearly_occurrences,
)
from recur.rule import (
    Recurrence,
    Repetition,
    RepetitionType,
    WeekendPolicy,
    apply_weekend_policy,
    occurrences_since,
)
from recur.validation import InvalidParameterError

__all__ = [
    # Calculators
    "daily_occurrences",
    "weekly_occurrences",
    "monthly_occurrences",
    "ndom_occurrences",
    "yearly_occurrences",
    # Moments
    "CalendarDate",
    "MonthDay",
    "NthWeekday",
    # Rules
    "Recurrence",
    "Repetition",
    "RepetitionType",
    "WeekendPolicy",
    "apply_weekend_policy",
    "occurrences_since",
    # Errors
    "ComputationExceededError",
    "InvalidParameterError",
    "RecurrenceError",
    "UnresolvableMomentError",
    # Batching
    "batch_occurrences",
    "async_batch_occurrences",
    # Config
    "RecurConfig",
    "configure_recur",
    "get_recur_config",
    "reset_recur_config",
    # Logging
    "configure_logging",
    "get_logger",
]
__version__ = "0.1.0"

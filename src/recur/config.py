"""Module-level configuration for occurrence calculations."""

import threading
from dataclasses import dataclass
from typing import Literal

from recur.validation import InvalidParameterError

NdomOverflow = Literal["skip", "raise"]


@dataclass
class RecurConfig:
    """Configuration for occurrence calculators."""

    max_iterations: int = 100_000  # candidate attempts per call
    ndom_overflow: NdomOverflow = "skip"


# Module-level singleton
_recur_config: RecurConfig | None = None
_config_lock = threading.Lock()


def get_recur_config() -> RecurConfig:
    """Get the global recur configuration singleton."""
    global _recur_config
    if _recur_config is None:
        with _config_lock:
            if _recur_config is None:
                _recur_config = RecurConfig()
    return _recur_config


def configure_recur(
    max_iterations: int | None = None,
    ndom_overflow: NdomOverflow | None = None,
) -> None:
    """Configure default calculator settings.

    Args:
        max_iterations: Upper bound on candidate attempts in a single call.
            Reaching it raises ComputationExceededError instead of looping on.
        ndom_overflow: What to do when the requested "Nth weekday" does not
            exist in a month. "skip" moves on to the next month, "raise"
            raises UnresolvableMomentError.

    Example:
        from recur import configure_recur

        configure_recur(max_iterations=10_000, ndom_overflow="raise")
    """
    if max_iterations is not None and (
        isinstance(max_iterations, bool)
        or not isinstance(max_iterations, int)
        or max_iterations < 1
    ):
        raise InvalidParameterError(
            f"max_iterations must be a positive integer, got {max_iterations!r}"
        )
    if ndom_overflow is not None and ndom_overflow not in ("skip", "raise"):
        raise InvalidParameterError(
            f"ndom_overflow must be 'skip' or 'raise', got {ndom_overflow!r}"
        )

    config = get_recur_config()
    with _config_lock:
        if max_iterations is not None:
            config.max_iterations = max_iterations
        if ndom_overflow is not None:
            config.ndom_overflow = ndom_overflow


def reset_recur_config() -> None:
    """Reset configuration to defaults. Useful for testing."""
    global _recur_config
    with _config_lock:
        _recur_config = RecurConfig()

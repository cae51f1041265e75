"""Thread and asyncio batch execution of occurrence calculations."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from functools import partial
from typing import Hashable, Mapping, TypeVar

from recur.logging import get_logger, timed_block
from recur.rule import Repetition, occurrences_since
from recur.validation import validate_count

K = TypeVar("K", bound=Hashable)

_log = get_logger(__name__)


def batch_occurrences(
    repetitions: Mapping[K, Repetition],
    anchor: date | datetime,
    lower_bound: date | datetime,
    count: int,
    max_workers: int | None = None,
) -> dict[K, list[date]]:
    """Compute occurrences for many repetitions in parallel threads.

    Calculations share no state, so each repetition runs independently.
    The first failure is re-raised and no partial result is returned.

    Example:
        schedule = batch_occurrences(
            {"rent": Repetition("monthly", 1), "gym": Repetition("weekly", 1)},
            anchor=date(2024, 1, 1),
            lower_bound=date(2024, 1, 1),
            count=3,
        )
    """
    validate_count(count)
    if not repetitions:
        return {}

    with timed_block(_log, "batch_resolved", batch_size=len(repetitions)):
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [
                (key, pool.submit(occurrences_since, rep, anchor, lower_bound, count))
                for key, rep in repetitions.items()
            ]
            return {key: future.result() for key, future in futures}


async def async_batch_occurrences(
    repetitions: Mapping[K, Repetition],
    anchor: date | datetime,
    lower_bound: date | datetime,
    count: int,
) -> dict[K, list[date]]:
    """Compute occurrences for many repetitions using asyncio.

    Each calculation runs in the event loop's default executor.
    """
    validate_count(count)
    if not repetitions:
        return {}

    loop = asyncio.get_running_loop()
    keys = list(repetitions)
    with timed_block(_log, "async_batch_resolved", batch_size=len(keys)):
        results = await asyncio.gather(*[
            loop.run_in_executor(
                None,
                partial(occurrences_since, repetitions[key], anchor, lower_bound, count),
            )
            for key in keys
        ])
    return dict(zip(keys, results))

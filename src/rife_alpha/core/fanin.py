"""
Fan-out / fan-in of blocking work units.

Every pipeline stage launches a group of independent external invocations and
waits for all of them before the next stage starts. A failed unit does not stop
its siblings: all of them run to completion and every completion is collected,
then the first error (in completion order) is raised.
"""

from __future__ import annotations

import concurrent.futures as futures
from collections.abc import Callable, Sequence


def fan_in(units: Sequence[Callable[[], object]], max_workers: int | None = None) -> int:
    """Run all units concurrently and wait for every one of them.

    Args:
        units: Zero-argument callables; a unit fails by raising.
        max_workers: Upper bound on units running at once. None runs every unit
            on its own thread.

    Returns:
        Number of completions collected (always ``len(units)``).

    Raises:
        Exception: The first exception reported by any unit, after all units
            have finished.
    """
    if not units:
        return 0

    workers = len(units) if max_workers is None else max(1, min(max_workers, len(units)))
    first_error: BaseException | None = None
    collected = 0

    with futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fan-in") as pool:
        futs = [pool.submit(unit) for unit in units]
        for fut in futures.as_completed(futs):
            collected += 1
            err = fut.exception()
            # Keep only the first error, but drain every completion
            if err is not None and first_error is None:
                first_error = err

    if first_error is not None:
        raise first_error
    return collected

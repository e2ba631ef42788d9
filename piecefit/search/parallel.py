"""
Parallel evaluation of a contiguous index range.

map_range() splits [begin, end) into n_workers contiguous chunks and runs one
ThreadPoolExecutor task per chunk. Each task writes straight into its own
slice of a pre-sized result list, so results come back in index order with no
merge step. Only the shared progress counter is locked.

Typical worker:  lambda g: score(orch.build(g))
"""

from __future__ import annotations

import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional

ProgressFn = Callable[[int, int], None]


def default_workers() -> int:
    return os.cpu_count() or 4


def chunk_bounds(total: int, n_workers: int) -> List[tuple]:
    """Contiguous (start, stop) offsets covering [0, total), at most n_workers of them."""
    if total <= 0:
        return []
    n_workers = max(1, min(int(n_workers), total))
    chunk = (total + n_workers - 1) // n_workers
    bounds = []
    for t in range(n_workers):
        start = t * chunk
        stop = min(total, start + chunk)
        if start >= stop:
            break
        bounds.append((start, stop))
    return bounds


def map_range(
    begin: int,
    end: int,
    worker: Callable[[int], Any],
    n_workers: Optional[int] = None,
    on_progress: Optional[ProgressFn] = None,
) -> List[Any]:
    """
    Run `worker(g)` for every g in [begin, end) and return results in g order.

    on_progress(done, total) is called once per finished index. Calls may come
    from any worker thread; `done` never decreases between calls.

    An exception raised by `worker` is re-raised here once all chunks stop.
    """
    total = max(0, int(end) - int(begin))
    if total == 0:
        return []

    if n_workers is None or n_workers <= 0:
        n_workers = default_workers()

    results: List[Any] = [None] * total
    lock = threading.Lock()
    done = 0

    def _run_chunk(start: int, stop: int) -> None:
        nonlocal done
        for off in range(start, stop):
            results[off] = worker(begin + off)
            with lock:
                done += 1
                if on_progress is not None:
                    on_progress(done, total)

    bounds = chunk_bounds(total, n_workers)
    if len(bounds) == 1:
        _run_chunk(*bounds[0])
        return results

    with ThreadPoolExecutor(max_workers=len(bounds)) as executor:
        futures = [executor.submit(_run_chunk, start, stop) for start, stop in bounds]
        for future in futures:
            future.result()

    return results

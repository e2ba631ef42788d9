"""
Progress helpers for long search loops.

Two flavours, same as the rest of the research code:
- a tqdm bar for the parallel path (map_range reports done/total per index)
- plain one-line prints with a best-so-far summary for verbose sequential runs
"""

from __future__ import annotations

import math
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from tqdm import tqdm


@contextmanager
def tqdm_progress(total: int, desc: str = "Search", enabled: bool = True) -> Iterator:
    """
    Yield an on_progress(done, total) callback bound to a tqdm bar.

    Worker threads may report out of order; the bar only ever moves forward.
    With enabled=False the callback is a no-op and no bar is drawn.
    """
    if not enabled or total <= 0:
        yield lambda done, total_: None
        return

    lock = threading.Lock()
    shown = 0

    with tqdm(total=total, desc=desc, unit="combo") as pbar:

        def _on_progress(done: int, total_: int) -> None:
            nonlocal shown
            with lock:
                if done > shown:
                    pbar.update(done - shown)
                    shown = done

        yield _on_progress


def _score(row: Optional[Dict[str, Any]]) -> float:
    if row is None:
        return math.nan
    try:
        return float(row.get("score", math.nan))
    except (TypeError, ValueError):
        return math.nan


def update_best(
    best: Optional[Dict[str, Any]],
    candidate: Dict[str, Any],
    higher_is_better: bool = True,
) -> Optional[Dict[str, Any]]:
    """Keep the best-scoring row seen so far (NaN scores never win)."""
    s = _score(candidate)
    if math.isnan(s):
        return best
    b = _score(best)
    if best is None or math.isnan(b):
        return candidate
    better = s > b if higher_is_better else s < b
    return candidate if better else best


def progress_line(
    done: int,
    total: int,
    prefix: str,
    current: Dict[str, Any],
    best: Optional[Dict[str, Any]],
) -> str:
    left = max(0, int(total) - int(done))
    cur = f"g={current.get('global_index')} score={_score(current):.5g}"
    if best is None:
        return f"[{done}/{total}] left={left} {prefix} {cur} | BEST -"
    return f"[{done}/{total}] left={left} {prefix} {cur} | BEST g={best.get('global_index')} score={_score(best):.5g}"

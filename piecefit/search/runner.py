"""
Exhaustive search driver: build every combination, score it, rank it.

Parallel path (n_workers > 1):
    map_range(0, orch.size(), lambda g: score(orch.build(g)))
Sequential path (n_workers == 1):
    orch.reset(); snapshot() + next() until exhausted

Both paths give the same table; the sequential one follows the orchestrator's
enumeration strategy and can print a best-so-far line per combination.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from ..common.progress import progress_line, tqdm_progress, update_best
from .parallel import map_range

ScoreFn = Callable[[Any], float]


@dataclass
class SearchResult:
    best_index: Optional[int]
    best_score: float
    best_model: Any
    best_params: List[Tuple[str, List[Tuple[str, Any]]]] = field(default_factory=list)
    table: pd.DataFrame = field(default_factory=pd.DataFrame)
    n_total: int = 0
    n_failed: int = 0


def _safe_score(score: ScoreFn, model: Any) -> Tuple[float, Optional[str]]:
    # scoring a degenerate model (zero variance, division by zero) is a
    # per-combination failure, not a search failure
    try:
        return float(score(model)), None
    except (ValueError, ArithmeticError) as e:
        return math.nan, f"{type(e).__name__}: {e}"


def results_table(
    orch: Any,
    rows: List[Dict[str, Any]],
    higher_is_better: bool = True,
    top_k: Optional[int] = None,
) -> pd.DataFrame:
    """
    Rank scored rows best-first and expand parameters for the top_k rows.

    Rows without a finite score are dropped. Parameter columns are named
    "<segment>.<param>".
    """
    df = pd.DataFrame(rows, columns=["global_index", "score", "error"])
    df["score"] = df["score"].astype(float)
    df = df[np.isfinite(df["score"].to_numpy())]
    df = df.sort_values(["score", "global_index"], ascending=[not higher_is_better, True])
    if top_k is not None:
        df = df.head(int(top_k))
    df = df.reset_index(drop=True)

    param_rows = []
    for g in df["global_index"]:
        flat = {}
        for seg_name, params in orch.params_at(int(g)):
            for label, value in params:
                flat[f"{seg_name}.{label}"] = value
        param_rows.append(flat)
    if param_rows:
        df = pd.concat([df, pd.DataFrame(param_rows)], axis=1)
    return df


def run_search(
    orch: Any,
    score: ScoreFn,
    n_workers: Optional[int] = None,
    progress: bool = True,
    higher_is_better: bool = True,
    verbose: bool = False,
    top_k: Optional[int] = None,
) -> SearchResult:
    total = orch.size()
    if total == 0:
        print("[WARN] Search space is empty (a segment has no candidates); nothing to search.")
        return SearchResult(best_index=None, best_score=math.nan, best_model=None)

    rows: List[Dict[str, Any]] = []

    if n_workers == 1:
        best = None
        orch.reset()
        with tqdm_progress(total, desc="Search", enabled=progress and not verbose) as on_progress:
            done = 0
            while True:
                snap = orch.snapshot()
                pm = orch.next()
                if pm is None:
                    break
                s, err = _safe_score(score, pm)
                row = {"global_index": snap.global_index, "score": s, "error": err}
                rows.append(row)
                done += 1
                best = update_best(best, row, higher_is_better=higher_is_better)
                on_progress(done, total)
                if verbose:
                    print(progress_line(done, total, "search", row, best))
    else:
        with tqdm_progress(total, desc="Search", enabled=progress) as on_progress:
            scored = map_range(
                0,
                total,
                lambda g: _safe_score(score, orch.build(g)),
                n_workers=n_workers,
                on_progress=on_progress,
            )
        rows = [{"global_index": g, "score": s, "error": err} for g, (s, err) in enumerate(scored)]

    n_failed = sum(1 for r in rows if r["error"] is not None or not math.isfinite(r["score"]))
    if n_failed:
        print(f"[WARN] {n_failed}/{total} combinations could not be scored")

    table = results_table(orch, rows, higher_is_better=higher_is_better, top_k=top_k)
    if table.empty:
        print("[WARN] No combination produced a finite score.")
        return SearchResult(
            best_index=None, best_score=math.nan, best_model=None, table=table, n_total=total, n_failed=n_failed
        )

    best_index = int(table.loc[0, "global_index"])
    return SearchResult(
        best_index=best_index,
        best_score=float(table.loc[0, "score"]),
        best_model=orch.build(best_index),
        best_params=orch.params_at(best_index),
        table=table,
        n_total=total,
        n_failed=n_failed,
    )

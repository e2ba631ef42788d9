from __future__ import annotations

import threading

import pytest

from piecefit.search.parallel import chunk_bounds, map_range


def test_map_range_keeps_index_order_and_counts_progress() -> None:
    reported = []

    def on_progress(done: int, total: int) -> None:
        reported.append((done, total))

    results = map_range(10, 110, lambda g: g * 2, n_workers=8, on_progress=on_progress)

    assert len(results) == 100
    assert results[0] == 20
    assert results[99] == 218
    assert results == [g * 2 for g in range(10, 110)]

    assert len(reported) == 100
    assert reported[-1] == (100, 100)
    dones = [d for d, _ in reported]
    assert dones == sorted(dones)


def test_empty_range_returns_immediately() -> None:
    calls = []
    assert map_range(5, 5, lambda g: calls.append(g)) == []
    assert map_range(5, 3, lambda g: calls.append(g)) == []
    assert calls == []


def test_single_worker_runs_inline() -> None:
    threads = set()

    def worker(g: int) -> int:
        threads.add(threading.get_ident())
        return g

    assert map_range(0, 4, worker, n_workers=1) == [0, 1, 2, 3]
    assert threads == {threading.get_ident()}


def test_worker_exception_propagates() -> None:
    def worker(g: int) -> int:
        if g == 7:
            raise RuntimeError("boom")
        return g

    with pytest.raises(RuntimeError, match="boom"):
        map_range(0, 20, worker, n_workers=4)


def test_chunk_bounds_cover_range_contiguously() -> None:
    assert chunk_bounds(0, 4) == []
    assert chunk_bounds(10, 3) == [(0, 4), (4, 8), (8, 10)]
    assert chunk_bounds(3, 8) == [(0, 1), (1, 2), (2, 3)]
    bounds = chunk_bounds(100, 8)
    assert bounds[0][0] == 0
    assert bounds[-1][1] == 100
    assert all(a[1] == b[0] for a, b in zip(bounds, bounds[1:]))

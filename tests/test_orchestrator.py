from __future__ import annotations

from dataclasses import dataclass

import pytest

from piecefit.core.orchestrator import Orchestrator, Snapshot
from piecefit.errors import WiringError
from piecefit.model.domains import Interval, always
from piecefit.model.shapes import FitLineBetween, Line
from piecefit.params.grid import ParamGrid, UnitGrid
from piecefit.params.ranges import UniformRange, ValuesRange
from piecefit.search.parallel import map_range
from piecefit.search.strategy import ReverseEnumerationStrategy


@dataclass
class _Pick:
    """Returns its own slot value, so a built model tells which index it came from."""

    a: int = 0

    def evaluate(self, x: float) -> float:
        return float(self.a)


def _pick_grid(n: int) -> ParamGrid:
    grid = ParamGrid(_Pick, "a")
    grid.set(0, ValuesRange(list(range(n)), value_type=int))
    return grid


def _two_by_two(strategy=None) -> Orchestrator:
    orch = Orchestrator() if strategy is None else Orchestrator(strategy=strategy)
    orch.add(Interval(None, 0.0), _pick_grid(2), name="left")
    orch.add(Interval(0.0, None), _pick_grid(2), name="right")
    return orch


def _locals(pm) -> tuple:
    return tuple(m.a for m in pm.models())


def test_size_is_product_of_segment_sizes() -> None:
    orch = Orchestrator()
    orch.add(always, _pick_grid(3))
    orch.add(always, _pick_grid(4))
    orch.add(always, _pick_grid(5))
    assert orch.sizes() == [3, 4, 5]
    assert orch.size() == 60
    assert len(orch) == 60


def test_empty_orchestrator_has_nothing_to_search() -> None:
    orch = Orchestrator()
    assert orch.size() == 0
    orch.reset()
    assert orch.finished
    assert orch.next() is None


def test_empty_segment_empties_the_search() -> None:
    orch = Orchestrator()
    orch.add(always, _pick_grid(3))
    bad = ParamGrid(Line, "k", "m")
    bad.set_by_label("k", UniformRange(1.0, 0.0, 0.1))
    orch.add(always, bad)

    assert orch.size() == 0
    orch.reset()
    assert orch.finished
    assert orch.next() is None
    assert list(orch.iter_models()) == []


def test_sequential_order_is_segment_zero_fastest() -> None:
    orch = _two_by_two()
    orch.reset()
    seen = []
    while (pm := orch.next()) is not None:
        seen.append(_locals(pm))
    assert seen == [(0, 0), (1, 0), (0, 1), (1, 1)]
    assert orch.finished
    assert orch.next() is None


def test_reverse_strategy_reverses_sequential_order() -> None:
    orch = _two_by_two(strategy=ReverseEnumerationStrategy)
    assert [_locals(pm) for pm in orch.iter_models()] == [(1, 1), (0, 1), (1, 0), (0, 0)]


def test_next_without_reset_starts_from_the_beginning() -> None:
    orch = _two_by_two()
    assert _locals(orch.next()) == (0, 0)


def test_build_matches_sequential_order() -> None:
    orch = _two_by_two()
    sequential = [_locals(pm) for pm in orch.iter_models()]
    stateless = [_locals(orch.build(g)) for g in range(orch.size())]
    assert sequential == stateless
    assert orch.make_piecewise(3).models()[0].a == 1


def test_build_is_deterministic_under_concurrency() -> None:
    orch = Orchestrator()
    orch.add(Interval(None, 0.0), _pick_grid(3), name="a")
    orch.add(Interval(0.0, 5.0), _pick_grid(4), name="b")
    orch.add(Interval(5.0, None), _pick_grid(5), name="c")

    expected = [_locals(orch.build(g)) for g in range(orch.size())]
    first = map_range(0, orch.size(), lambda g: _locals(orch.build(g)), n_workers=8)
    second = map_range(0, orch.size(), lambda g: _locals(orch.build(g)), n_workers=3)
    assert first == expected
    assert second == expected
    assert len(set(expected)) == 60


def test_split_and_join_global_index() -> None:
    orch = Orchestrator()
    orch.add(always, _pick_grid(3))
    orch.add(always, _pick_grid(4))
    for g in range(orch.size()):
        assert orch.join_locals(orch.split_global(g)) == g
    assert orch.split_global(5) == [2, 1]


def test_snapshot_describes_the_next_combination() -> None:
    orch = _two_by_two()
    orch.reset()

    snap = orch.snapshot()
    assert snap == Snapshot(step=0, indices=((0,), (0,)), global_index=0)

    orch.next()
    snap = orch.snapshot()
    assert snap.step == 1
    assert snap.indices == ((1,), (0,))
    assert snap.global_index == 1

    for _ in range(3):
        orch.next()
    snap = orch.snapshot()
    assert orch.finished
    assert snap == Snapshot(step=4, indices=(None, None), global_index=None)


def test_snapshot_global_index_rebuilds_same_model() -> None:
    orch = _two_by_two(strategy=ReverseEnumerationStrategy)
    orch.reset()
    while True:
        snap = orch.snapshot()
        pm = orch.next()
        if pm is None:
            break
        assert _locals(orch.build(snap.global_index)) == _locals(pm)


def test_params_at_reports_segment_values() -> None:
    orch = _two_by_two()
    assert orch.params_at(2) == [("left", [("a", 0)]), ("right", [("a", 1)])]


def test_default_segment_name_is_model_type() -> None:
    orch = Orchestrator()
    seg = orch.add(always, _pick_grid(1))
    assert seg.name == "_Pick"


def test_constrained_segment_first_or_last_is_a_wiring_error() -> None:
    orch = Orchestrator()
    orch.add_constrained(always, UnitGrid(Line), -1.0, 1.0, FitLineBetween(-1.0, 1.0))
    orch.add(always, _pick_grid(2))

    with pytest.raises(WiringError):
        orch.reset()
    with pytest.raises(WiringError):
        orch.build(0)

    orch.clear()
    orch.add(always, _pick_grid(2))
    orch.add_constrained(always, UnitGrid(Line), -1.0, 1.0, FitLineBetween(-1.0, 1.0))
    with pytest.raises(WiringError):
        orch.next()


def test_adding_a_segment_invalidates_iteration() -> None:
    orch = Orchestrator()
    orch.add(always, _pick_grid(2))
    assert len(list(orch.iter_models())) == 2
    assert orch.finished

    orch.add(always, _pick_grid(3))
    assert not orch.finished
    assert len(list(orch.iter_models())) == 6


def test_segment_local_index_round_trip() -> None:
    orch = Orchestrator()
    grid = ParamGrid(Line, "k", "m")
    grid.set_by_label("k", ValuesRange([1.0, 2.0, 3.0]))
    grid.set_by_label("m", ValuesRange([0.0, 5.0]))
    seg = orch.add(always, grid)

    for local in range(seg.size()):
        assert seg.local_from_index(seg.decode(local)) == local
    assert seg.decode(4) == (1, 1)
    assert seg.params_at(4) == [("k", 2.0), ("m", 5.0)]


def test_wiring_error_repeats_on_every_next() -> None:
    orch = Orchestrator()
    orch.add(always, _pick_grid(2))
    orch.add_constrained(always, UnitGrid(Line), -1.0, 1.0, FitLineBetween(-1.0, 1.0))

    for _ in range(3):
        with pytest.raises(WiringError):
            orch.next()
    assert orch.step == 0
    assert not orch.finished

from __future__ import annotations

from dataclasses import dataclass

import pytest

from piecefit.errors import DuplicateParameterError, UnknownParameterError
from piecefit.model.shapes import Line, Parabola
from piecefit.params.control_param import ControlParam, control_param
from piecefit.params.grid import ParamGrid, ParamMeta, UnitGrid
from piecefit.params.ranges import UniformRange, ValuesRange, fixed


@dataclass
class _Mixed:
    """One named float slot, one plain int slot."""

    gain: ControlParam = control_param("gain")
    window: int = 3

    def evaluate(self, x: float) -> float:
        return self.gain.value * x + self.window


@dataclass
class _Twins:
    left: ControlParam = control_param("w")
    right: ControlParam = control_param("w")


def test_uniform_range_size_and_values() -> None:
    r = UniformRange(0.0, 2.0, 0.5)
    assert r.size() == 5
    assert len(r) == 5
    assert r.values() == [0.0, 0.5, 1.0, 1.5, 2.0]

    ints = UniformRange(1, 7, 2, value_type=int)
    assert ints.values() == [1, 3, 5, 7]
    assert isinstance(ints[0], int)


def test_ill_formed_ranges_are_empty_not_errors() -> None:
    assert UniformRange(0.0, 1.0, 0.0).size() == 0
    assert UniformRange(0.0, 1.0, -0.5).size() == 0
    assert UniformRange(2.0, 1.0, 0.5).size() == 0
    assert fixed(3.0).size() == 1
    assert fixed(3.0)[0] == 3.0
    assert ValuesRange([]).size() == 0


def test_grid_size_is_product_and_zero_iff_a_range_is_empty() -> None:
    grid = ParamGrid(Parabola, "a", "b", "c")
    # default ranges are single zero values
    assert grid.size() == 1

    grid.set(0, UniformRange(0.0, 1.0, 0.5))
    grid.set(1, ValuesRange([1.0, 2.0]))
    grid.set(2, fixed(-1.0))
    assert grid.bases() == (3, 2, 1)
    assert grid.size() == 6
    assert len(grid) == 6

    grid.set(1, UniformRange(1.0, 0.0, 0.5))
    assert grid.size() == 0


def test_make_model_sets_named_and_plain_slots() -> None:
    grid = ParamGrid(_Mixed, "gain", "window")
    grid.set(0, UniformRange(0.0, 1.0, 0.25))
    grid.set(1, ValuesRange([5, 10, 20], value_type=int))

    model = grid.make_model((2, 1))
    assert model.gain.value == 0.5
    assert model.window == 10
    assert model.evaluate(2.0) == 11.0

    assert grid.values_at((2, 1)) == [("gain", 0.5), ("window", 10)]


def test_make_model_returns_fresh_instances() -> None:
    grid = ParamGrid(Line, "k", "m")
    grid.set_by_label("k", ValuesRange([1.0, 2.0]))
    a = grid.make_model((0, 0))
    b = grid.make_model((1, 0))
    assert a is not b
    assert a.k is not b.k
    assert (a.k.value, b.k.value) == (1.0, 2.0)


def test_label_access_and_unknown_names() -> None:
    grid = ParamGrid(Line, "k", "m")
    r = UniformRange(-1.0, 1.0, 0.5)
    grid.set_by_label("m", r)
    assert grid.get_by_label("m") is r
    assert grid.get(1) is r

    with pytest.raises(UnknownParameterError):
        grid.get_by_label("slope")
    with pytest.raises(KeyError):
        grid.set_by_label("slope", r)


def test_find_by_name_checks_value_type() -> None:
    grid = ParamGrid(_Mixed, "gain", "window")
    r = grid.get(0)
    assert grid.find("gain") is r
    assert grid.find("gain", float) is r
    assert grid.find("gain", int) is None
    assert grid.find("nope") is None
    # plain slots carry no name
    assert grid.find("window") is None


def test_duplicate_names_fail_at_construction() -> None:
    with pytest.raises(DuplicateParameterError):
        ParamGrid(_Twins, "left", "right")


def test_unknown_attribute_fails_at_construction() -> None:
    with pytest.raises(AttributeError):
        ParamGrid(Line, "k", "slope")
    with pytest.raises(ValueError):
        ParamGrid(Line)


def test_for_each_param_visits_in_declaration_order() -> None:
    grid = ParamGrid(_Mixed, "gain", "window")
    seen = []
    grid.for_each_param(lambda meta, r: seen.append((meta, r.size())))
    assert seen == [
        (ParamMeta(label="gain", index=0, is_named=True), 1),
        (ParamMeta(label="", index=1, is_named=False), 1),
    ]
    assert [m.label for m, _ in grid.params()] == ["gain", ""]


def test_unit_grid() -> None:
    grid = UnitGrid(Line)
    assert grid.size() == 1
    assert grid.bases() == ()
    model = grid.make_model()
    assert isinstance(model, Line)
    assert model.evaluate(3.0) == 0.0
    assert grid.values_at(()) == []
    assert grid.find("k") is None

    visited = []
    grid.for_each_param(lambda meta, r: visited.append(meta))
    assert visited == []

    with pytest.raises(UnknownParameterError):
        grid.get_by_label("k")

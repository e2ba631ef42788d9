"""
Small analytic models used by the demo search and the tests.

All of them are default-constructible dataclasses with ControlParam slots,
so they plug straight into ParamGrid / UnitGrid.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..params.control_param import ControlParam, control_param


@dataclass
class Line:
    """y = k*x + m"""

    k: ControlParam = control_param("k")
    m: ControlParam = control_param("m")

    def evaluate(self, x: float) -> float:
        return self.k.value * x + self.m.value


@dataclass
class Parabola:
    """y = a*x^2 + b*x + c"""

    a: ControlParam = control_param("a")
    b: ControlParam = control_param("b")
    c: ControlParam = control_param("c")

    def evaluate(self, x: float) -> float:
        return self.a.value * x * x + self.b.value * x + self.c.value


@dataclass
class Hyperbola:
    """y = a/x + b  (only meaningful away from x = 0)"""

    a: ControlParam = control_param("a")
    b: ControlParam = control_param("b")

    def evaluate(self, x: float) -> float:
        return self.a.value / x + self.b.value


@dataclass(frozen=True)
class FitLineBetween:
    """Binder: make a Line pass through (x_left, y_left) and (x_right, y_right)."""

    x_left: float
    x_right: float

    def __call__(self, line: Line, y_left: float, y_right: float) -> None:
        k = (y_right - y_left) / (self.x_right - self.x_left)
        line.k.value = k
        line.m.value = y_left - k * self.x_left

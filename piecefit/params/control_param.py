"""
Named, tunable model parameter.

A model attribute holding a ControlParam is a *named* slot: the grid picks up
its name for lookup/introspection, and writes candidates into `.value`.
Plain attributes (float, int) are unnamed slots and are written directly.

Usage:
    @dataclass
    class Line:
        k: ControlParam = control_param("k")
        m: ControlParam = control_param("m")

        def evaluate(self, x):
            return self.k.value * x + self.m.value
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ControlParam:
    """Parameter value tagged with a name and a value type."""

    name: str
    value_type: type = float
    value: Any = None

    def __post_init__(self) -> None:
        if self.value is None:
            self.value = self.value_type()

    def set(self, v: Any) -> None:
        self.value = v

    def __float__(self) -> float:
        return float(self.value)

    def __int__(self) -> int:
        return int(self.value)


def control_param(name: str, value_type: type = float, default: Optional[Any] = None):
    """Dataclass field factory for a ControlParam attribute."""
    return field(default_factory=lambda: ControlParam(name=name, value_type=value_type, value=default))

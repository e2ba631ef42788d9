"""
Candidate-value ranges for grid parameters.

A range is anything indexable with a known length and value type:
- size()       -> number of candidates
- r[i]         -> candidate i (0 <= i < size())
- value_type   -> python type of the candidates

Ill-formed ranges (non-positive step, max below min) are NOT errors here:
they simply have size 0, which makes the whole grid empty.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class RangeLike(Protocol):
    """Minimal contract the grid relies on."""

    value_type: type

    def size(self) -> int: ...

    def __getitem__(self, i: int) -> Any: ...


@dataclass
class UniformRange:
    """
    Values min, min + step, min + 2*step, ... <= max.

    Size and values are computed through float, so this is meant for scalar
    numeric types (float, int). For anything else provide a custom range.
    """

    min: Any = 0.0
    max: Any = 0.0
    step: Any = 1.0
    value_type: type = float

    def size(self) -> int:
        try:
            dmin, dmax, dstep = float(self.min), float(self.max), float(self.step)
        except (TypeError, ValueError):
            return 0
        if not dstep > 0.0:
            return 0
        if dmax < dmin:
            return 0
        return int(math.floor((dmax - dmin) / dstep)) + 1

    def __len__(self) -> int:
        return self.size()

    def __getitem__(self, i: int) -> Any:
        return self.value_type(float(self.min) + float(i) * float(self.step))

    def values(self) -> list:
        return [self[i] for i in range(self.size())]


@dataclass
class ValuesRange:
    """Explicit list of candidates (e.g. a hand-picked set of window sizes)."""

    items: Sequence[Any] = field(default_factory=list)
    value_type: type = float

    def size(self) -> int:
        return len(self.items)

    def __len__(self) -> int:
        return self.size()

    def __getitem__(self, i: int) -> Any:
        return self.items[i]

    def values(self) -> list:
        return list(self.items)


def fixed(value: Any, value_type: type = float) -> UniformRange:
    """Single-value range (size 1)."""
    return UniformRange(min=value, max=value, step=1, value_type=value_type)


def range_size(r: Any) -> int:
    """Size of any RangeLike, clamped to a non-negative int."""
    return max(0, int(r.size()))

"""
Mixed-radix index space.

A discrete space with bases (b0, b1, ..., bn-1) has b0*b1*...*bn-1 points.
Every point has a linear index; dimension 0 changes fastest:

    idx[0] = linear % b0;  linear //= b0
    idx[1] = linear % b1;  linear //= b1
    ...

The same scheme is used at two levels: slots inside one grid, and segments
inside the orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple


@dataclass(frozen=True)
class IndexSpace:
    bases: Tuple[int, ...] = ()
    total: int = 1

    @classmethod
    def from_bases(cls, bases: Sequence[int]) -> "IndexSpace":
        bases = tuple(max(0, int(b)) for b in bases)
        total = 1
        for b in bases:
            if b == 0:
                total = 0
                break
            total *= b
        return cls(bases=bases, total=total)

    @property
    def ndim(self) -> int:
        return len(self.bases)

    @property
    def is_empty(self) -> bool:
        return self.total == 0


def make_index_space(grid: Any) -> IndexSpace:
    """Index space of a grid: one base per slot range."""
    return IndexSpace.from_bases(grid.bases())


def linear_to_multi_index(space: IndexSpace, linear: int) -> Tuple[int, ...]:
    """
    Decode `linear` into one index per dimension.

    Only meaningful for 0 <= linear < space.total. A zero base gives 0 at that
    position; callers should not decode into an empty space at all.
    """
    out = []
    for b in space.bases:
        if b == 0:
            out.append(0)
            linear = 0
            continue
        out.append(linear % b)
        linear //= b
    return tuple(out)


def multi_to_linear_index(space: IndexSpace, idx: Sequence[int]) -> Optional[int]:
    """
    Encode a multi-index back to its linear index.

    Returns None if the index does not belong to the space (wrong length,
    a zero base, or a component out of range).
    """
    if len(idx) != len(space.bases):
        return None
    local, mul = 0, 1
    for b, v in zip(space.bases, idx):
        if b == 0 or v < 0 or v >= b:
            return None
        local += v * mul
        mul *= b
    return local

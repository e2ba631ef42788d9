"""Domain predicates for scalar inputs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Interval:
    """
    Half-open interval lo <= x < hi.

    None on either side means unbounded, so a three-piece split of the real
    line at x1 < x2 is:
        Interval(None, x1), Interval(x1, x2), Interval(x2, None)
    """

    lo: Optional[float] = None
    hi: Optional[float] = None

    def __call__(self, x: float) -> bool:
        if self.lo is not None and x < self.lo:
            return False
        if self.hi is not None and x >= self.hi:
            return False
        return True

    def __str__(self) -> str:
        lo = "-inf" if self.lo is None else f"{self.lo:g}"
        hi = "+inf" if self.hi is None else f"{self.hi:g}"
        return f"[{lo}, {hi})"


def always(x) -> bool:
    return True


def split_points(*cuts: float) -> list:
    """Consecutive intervals covering the real line, cut at sorted `cuts`."""
    edges = [None, *sorted(cuts), None]
    return [Interval(lo, hi) for lo, hi in zip(edges[:-1], edges[1:])]

"""
Segment base class.

A segment is one piece of the future piecewise model:
- domain:   predicate deciding where the piece is active
- grid:     parameter grid of the piece's model
- strategy: stateful cursor used only by the sequential (reset/next) path

Two ways to get a model out of a segment:
- stateless: build_at(local, built, position), from a local index. Reads
  configuration only, so many threads may call it at once.
- stateful:  reset() / advance() / current_local(), driven by one caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..search.index_space import (
    IndexSpace,
    linear_to_multi_index,
    make_index_space,
    multi_to_linear_index,
)
from ..search.strategy import EnumerationStrategy

StrategyFactory = Callable[[], Any]


class Segment(ABC):
    is_constrained = False

    def __init__(
        self,
        domain: Callable[[Any], bool],
        grid: Any,
        strategy: StrategyFactory = EnumerationStrategy,
        name: Optional[str] = None,
    ):
        self.domain = domain
        self.grid = grid
        self.name = name or grid.model_type.__name__
        self.strategy = strategy()
        self.space = IndexSpace()
        self.current: Optional[Tuple[int, ...]] = None

    def size(self) -> int:
        return self.grid.size()

    # ------------------------------------------------------------------
    # stateful cursor
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Recompute the space from the grid and move to the first index."""
        self.space = make_index_space(self.grid)
        self.strategy.reset(self.space)
        self.current = self.strategy.next()

    def advance(self) -> bool:
        """Move to the next index. False once the cursor is exhausted."""
        if self.current is None:
            return False
        self.current = self.strategy.next()
        return self.current is not None

    def current_index(self) -> Optional[Tuple[int, ...]]:
        return self.current

    def current_local(self) -> Optional[int]:
        if self.current is None:
            return None
        return multi_to_linear_index(self.space, self.current)

    # ------------------------------------------------------------------
    # stateless helpers
    # ------------------------------------------------------------------

    def decode(self, local: int) -> Tuple[int, ...]:
        return linear_to_multi_index(make_index_space(self.grid), local)

    def local_from_index(self, idx: Sequence[int]) -> Optional[int]:
        return multi_to_linear_index(make_index_space(self.grid), idx)

    def params_at(self, local: int) -> List[Tuple[str, Any]]:
        """(label, value) of every grid slot at a local index."""
        if self.size() == 0:
            return []
        return self.grid.values_at(self.decode(local))

    @abstractmethod
    def build_at(self, local: int, built: Sequence[Any], position: int) -> Optional[Any]:
        """
        Model for local index `local`, or None if it cannot be built.

        `built` holds the models already built for this combination (None
        where a segment is not built yet), `position` is this segment's slot.
        """

    def __repr__(self) -> str:
        kind = "constrained" if self.is_constrained else "free"
        return f"<{kind} segment {self.name!r} size={self.size()}>"

"""
Constrained segment: the model is fitted to its neighbours' boundary values.

For a combination, the left neighbour is evaluated at `left_input` and the
right neighbour at `right_input`. A provisional model is built from this
segment's own grid (usually a UnitGrid), then the binder adjusts it:

    binder(model, left_output, right_output)

Binder-set attributes and grid-set attributes are independent. If both drive
the same attribute, the binder simply overwrites the grid value.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from ..errors import WiringError
from ..search.strategy import EnumerationStrategy
from .segment import Segment, StrategyFactory

Binder = Callable[[Any, Any, Any], None]


class ConstrainedSegment(Segment):
    is_constrained = True

    def __init__(
        self,
        domain: Callable[[Any], bool],
        grid: Any,
        left_input: Any,
        right_input: Any,
        binder: Binder,
        strategy: StrategyFactory = EnumerationStrategy,
        name: Optional[str] = None,
    ):
        super().__init__(domain, grid, strategy=strategy, name=name)
        self.left_input = left_input
        self.right_input = right_input
        self.binder = binder

    def build_at(self, local: int, built: Sequence[Any], position: int) -> Optional[Any]:
        if position <= 0 or position + 1 >= len(built):
            raise WiringError(
                f"constrained segment {self.name!r} at position {position} "
                f"must sit between two segments (have {len(built)})"
            )

        left_model = built[position - 1]
        right_model = built[position + 1]
        if left_model is None or right_model is None:
            return None

        left_output = left_model.evaluate(self.left_input)
        right_output = right_model.evaluate(self.right_input)

        if self.grid.size() == 0:
            return None
        model = self.grid.make_model(self.decode(local))
        self.binder(model, left_output, right_output)
        return model

"""Free segment: the model comes from the segment's own grid index only."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .segment import Segment


class FreeSegment(Segment):
    is_constrained = False

    def build_at(self, local: int, built: Sequence[Any] = (), position: int = 0) -> Optional[Any]:
        if self.grid.size() == 0:
            return None
        return self.grid.make_model(self.decode(local))

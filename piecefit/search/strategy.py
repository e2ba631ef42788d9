"""
Enumeration strategies: stateful cursors over an IndexSpace.

Protocol:
    strategy.reset(space)
    while (idx := strategy.next()) is not None:
        ...

EnumerationStrategy walks the space in linear order (dimension 0 fastest).
ReverseEnumerationStrategy walks the same points from the last one back to
the first. Anything with the same two methods can be plugged into the
orchestrator instead.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol, Tuple, runtime_checkable

from .index_space import IndexSpace, linear_to_multi_index


class CursorState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    EXHAUSTED = "exhausted"


@runtime_checkable
class IndexStrategy(Protocol):
    def reset(self, space: IndexSpace) -> None: ...

    def next(self) -> Optional[Tuple[int, ...]]: ...


class EnumerationStrategy:
    """Full lexicographic traversal, index 0 fastest."""

    def __init__(self) -> None:
        self.space: Optional[IndexSpace] = None
        self.state = CursorState.UNINITIALIZED
        self._current: list = []
        self._first = True

    def reset(self, space: IndexSpace) -> None:
        self.space = space
        self._current = [0] * space.ndim
        self._first = True
        self.state = CursorState.EXHAUSTED if space.total == 0 else CursorState.READY

    def next(self) -> Optional[Tuple[int, ...]]:
        if self.state is not CursorState.READY:
            return None

        if self._first:
            self._first = False
            return tuple(self._current)

        # odometer increment with carry
        for i, base in enumerate(self.space.bases):
            self._current[i] += 1
            if self._current[i] < base:
                return tuple(self._current)
            self._current[i] = 0

        self.state = CursorState.EXHAUSTED
        return None


class ReverseEnumerationStrategy:
    """Same points as EnumerationStrategy, visited from total-1 down to 0."""

    def __init__(self) -> None:
        self.space: Optional[IndexSpace] = None
        self.state = CursorState.UNINITIALIZED
        self._linear = 0

    def reset(self, space: IndexSpace) -> None:
        self.space = space
        if space.total == 0:
            self.state = CursorState.EXHAUSTED
            self._linear = 0
        else:
            self.state = CursorState.READY
            self._linear = space.total - 1

    def next(self) -> Optional[Tuple[int, ...]]:
        if self.state is not CursorState.READY:
            return None

        idx = linear_to_multi_index(self.space, self._linear)
        if self._linear == 0:
            self.state = CursorState.EXHAUSTED
        else:
            self._linear -= 1
        return idx

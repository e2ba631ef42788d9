"""
Orchestrator: one global index over all segments.

The global index is a mixed-radix number whose bases are the segment sizes,
segment 0 changing fastest (same scheme as inside a grid).

Two access modes that always agree with each other:

    build(global_index)     stateless, safe to call from many threads
    reset() / next()        stateful odometer over the segment cursors

Either way a combination is assembled in two passes: every free segment
first, then every constrained segment (which needs its neighbours' models).
Segments that fail to build for a combination are left out of its
PiecewiseModel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from ..errors import WiringError
from ..model.piecewise import PiecewiseModel
from ..search.index_space import IndexSpace, linear_to_multi_index, multi_to_linear_index
from ..search.strategy import EnumerationStrategy
from .constrained import Binder, ConstrainedSegment
from .free import FreeSegment
from .segment import Segment, StrategyFactory


@dataclass(frozen=True)
class Snapshot:
    """
    Point-in-time view of the sequential search.

    step          - models returned by next() since the last reset()
    indices       - per segment: current multi-index, or None once exhausted
    global_index  - those indices encoded as one global index (None if any
                    segment has no current index)

    Taken before next(), it describes the combination next() will build.
    """

    step: int
    indices: Tuple[Optional[Tuple[int, ...]], ...]
    global_index: Optional[int]


class Orchestrator:
    def __init__(self, out_type: type = float, strategy: StrategyFactory = EnumerationStrategy):
        self.out_type = out_type
        self.strategy = strategy
        self.segments: List[Segment] = []
        self._ready = False
        self._finished = False
        self._step = 0

    # ------------------------------------------------------------------
    # setup
    # ------------------------------------------------------------------

    def _invalidate(self) -> None:
        self._ready = False
        self._finished = False

    def add(self, domain: Callable[[Any], bool], grid: Any, name: Optional[str] = None) -> FreeSegment:
        segment = FreeSegment(domain, grid, strategy=self.strategy, name=name)
        self.segments.append(segment)
        self._invalidate()
        return segment

    def add_constrained(
        self,
        domain: Callable[[Any], bool],
        grid: Any,
        left_input: Any,
        right_input: Any,
        binder: Binder,
        name: Optional[str] = None,
    ) -> ConstrainedSegment:
        segment = ConstrainedSegment(
            domain, grid, left_input, right_input, binder, strategy=self.strategy, name=name
        )
        self.segments.append(segment)
        self._invalidate()
        return segment

    def clear(self) -> None:
        self.segments.clear()
        self._invalidate()
        self._step = 0

    def check_wiring(self) -> None:
        """Raise WiringError if a constrained segment is first or last."""
        last = len(self.segments) - 1
        for i, segment in enumerate(self.segments):
            if segment.is_constrained and (i == 0 or i == last):
                raise WiringError(
                    f"constrained segment {segment.name!r} at position {i} "
                    f"must sit between two segments (have {len(self.segments)})"
                )

    # ------------------------------------------------------------------
    # global index
    # ------------------------------------------------------------------

    def sizes(self) -> List[int]:
        return [s.size() for s in self.segments]

    def space(self) -> IndexSpace:
        if not self.segments:
            return IndexSpace.from_bases([0])
        return IndexSpace.from_bases(self.sizes())

    def size(self) -> int:
        return self.space().total

    def __len__(self) -> int:
        return self.size()

    def split_global(self, global_index: int) -> List[int]:
        """Per-segment local indices of a global index (segment 0 fastest)."""
        return list(linear_to_multi_index(IndexSpace.from_bases(self.sizes()), global_index))

    def join_locals(self, locals_: Sequence[int]) -> Optional[int]:
        return multi_to_linear_index(IndexSpace.from_bases(self.sizes()), locals_)

    # ------------------------------------------------------------------
    # assembly
    # ------------------------------------------------------------------

    def _assemble(self, locals_: Sequence[Optional[int]]) -> PiecewiseModel:
        built: List[Optional[Any]] = [None] * len(self.segments)

        # pass A: free segments only depend on their own index
        for i, segment in enumerate(self.segments):
            if segment.is_constrained or locals_[i] is None:
                continue
            built[i] = segment.build_at(locals_[i], built, i)

        # pass B: constrained segments read their neighbours' models; two
        # adjacent constrained segments never see each other and both drop out
        for i, segment in enumerate(self.segments):
            if not segment.is_constrained or locals_[i] is None:
                continue
            built[i] = segment.build_at(locals_[i], built, i)

        pm = PiecewiseModel(out_type=self.out_type)
        for segment, model in zip(self.segments, built):
            if model is not None:
                pm.add(segment.domain, model)
        return pm

    def build(self, global_index: int) -> PiecewiseModel:
        """
        Piecewise model for one global index (0 <= global_index < size()).

        Reads configuration only; safe for concurrent callers once segments
        and ranges are no longer being changed.
        """
        return self._assemble(self.split_global(global_index))

    make_piecewise = build

    def params_at(self, global_index: int) -> List[Tuple[str, List[Tuple[str, Any]]]]:
        """(segment name, [(label, value), ...]) for every segment."""
        out = []
        for segment, local in zip(self.segments, self.split_global(global_index)):
            out.append((segment.name, segment.params_at(local)))
        return out

    # ------------------------------------------------------------------
    # sequential iteration
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Rewind the sequential search; the next next() returns the first model."""
        # wiring first: a failed reset must leave the orchestrator not ready
        self._ready = False
        self.check_wiring()

        self._ready = True
        self._finished = False
        self._step = 0

        if not self.segments:
            self._finished = True
            return

        for segment in self.segments:
            segment.reset()

        if any(segment.size() == 0 for segment in self.segments):
            self._finished = True

    def next(self) -> Optional[PiecewiseModel]:
        """Next piecewise model in strategy order, or None when done."""
        if not self._ready:
            self.reset()
        if self._finished:
            return None

        pm = self._assemble([s.current_local() for s in self.segments])
        self._step += 1

        # odometer: segment 0 moves fastest
        last = len(self.segments) - 1
        for i, segment in enumerate(self.segments):
            if segment.advance():
                return pm
            segment.reset()
            if i == last:
                self._finished = True

        # the last combination is still delivered
        return pm

    def iter_models(self) -> Iterator[PiecewiseModel]:
        self.reset()
        while True:
            pm = self.next()
            if pm is None:
                return
            yield pm

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def step(self) -> int:
        return self._step

    def snapshot(self) -> Snapshot:
        if self._finished:
            # cursors were rewound by the final carry; nothing is current
            return Snapshot(step=self._step, indices=tuple(None for _ in self.segments), global_index=None)

        indices = tuple(s.current_index() for s in self.segments)
        locals_ = [s.current_local() for s in self.segments]
        global_index = None
        if self.segments and all(v is not None for v in locals_):
            global_index = self.join_locals(locals_)
        return Snapshot(step=self._step, indices=indices, global_index=global_index)

    def __repr__(self) -> str:
        parts = ", ".join(repr(s) for s in self.segments)
        return f"Orchestrator([{parts}], size={self.size()})"

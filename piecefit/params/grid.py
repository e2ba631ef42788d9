"""
Parameter grid: the Cartesian product of candidate ranges bound to a model.

ParamGrid ties a model type to an ordered list of tunable attributes (slots)
and one candidate range per slot:
- size()            -> number of combinations (0 if any range is empty)
- make_model(idx)   -> default model with slot i set to ranges[i][idx[i]]
- get / set         -> range access by position (setup time)
- get_by_label      -> range access by ControlParam name (fails fast)
- find              -> range lookup by name, None if absent / wrong type
- for_each_param    -> generic introspection (printing, reports)

Slots are fixed when the grid is constructed; ranges stay mutable until the
search starts and are treated as read-only while it runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from ..errors import DuplicateParameterError, UnknownParameterError
from .ranges import UniformRange, range_size
from .traits import SlotAccessor, resolve_accessor


@dataclass(frozen=True)
class ParamMeta:
    """Introspection record passed to for_each_param callbacks."""

    label: str  # "" for unnamed slots
    index: int
    is_named: bool


class ParamGrid:
    """
    Grid over the attributes `attrs` of `model_type`.

    Example:
        grid = ParamGrid(Parabola, "a", "b", "c")
        grid.set_by_label("a", UniformRange(0.75, 1.65, 0.05))
        grid.set(1, UniformRange(-0.2, 0.2, 0.1))
        grid.set(2, fixed(-0.3))
    """

    def __init__(self, model_type: type, *attrs: str, ranges: Optional[Sequence[Any]] = None):
        if not attrs:
            raise ValueError("ParamGrid: at least one parameter attribute is required (use UnitGrid)")

        self.model_type = model_type
        self.slots: List[SlotAccessor] = [resolve_accessor(model_type, a) for a in attrs]

        seen = set()
        for slot in self.slots:
            if not slot.is_named:
                continue
            if slot.label in seen:
                raise DuplicateParameterError(
                    f"{model_type.__name__}: parameter name '{slot.label}' is used by more than one slot"
                )
            seen.add(slot.label)

        if ranges is None:
            self.ranges: List[Any] = [UniformRange(value_type=s.value_type) for s in self.slots]
        else:
            if len(ranges) != len(self.slots):
                raise ValueError(f"ParamGrid: expected {len(self.slots)} ranges, got {len(ranges)}")
            self.ranges = list(ranges)

    # ------------------------------------------------------------------
    # shape
    # ------------------------------------------------------------------

    @property
    def n_params(self) -> int:
        return len(self.slots)

    def bases(self) -> Tuple[int, ...]:
        return tuple(range_size(r) for r in self.ranges)

    def size(self) -> int:
        total = 1
        for b in self.bases():
            total *= b
        return total

    def __len__(self) -> int:
        return self.size()

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    def make_model(self, idx: Sequence[int]) -> Any:
        # idx[i] < ranges[i].size() is the caller's contract, not checked here.
        model = self.model_type()
        for slot, r, i in zip(self.slots, self.ranges, idx):
            slot.set(model, r[i])
        return model

    def values_at(self, idx: Sequence[int]) -> List[Tuple[str, Any]]:
        """(label-or-attr, value) for each slot at a multi-index."""
        out = []
        for slot, r, i in zip(self.slots, self.ranges, idx):
            out.append((slot.label or slot.attr, r[i]))
        return out

    # ------------------------------------------------------------------
    # range access
    # ------------------------------------------------------------------

    def get(self, i: int) -> Any:
        return self.ranges[i]

    def set(self, i: int, r: Any) -> None:
        self.ranges[i] = r

    def _index_by_label(self, label: str) -> Optional[int]:
        for i, slot in enumerate(self.slots):
            if slot.is_named and slot.label == label:
                return i
        return None

    def get_by_label(self, label: str) -> Any:
        i = self._index_by_label(label)
        if i is None:
            raise UnknownParameterError(f"{self.model_type.__name__}: no named parameter '{label}'")
        return self.ranges[i]

    def set_by_label(self, label: str, r: Any) -> None:
        i = self._index_by_label(label)
        if i is None:
            raise UnknownParameterError(f"{self.model_type.__name__}: no named parameter '{label}'")
        self.ranges[i] = r

    def find(self, label: str, value_type: Optional[type] = None) -> Optional[Any]:
        """
        Range of the named slot `label`, or None.

        When `value_type` is given, the slot's declared type must match it
        exactly; a mismatch is reported as "not found".
        """
        i = self._index_by_label(label)
        if i is None:
            return None
        if value_type is not None and self.slots[i].value_type is not value_type:
            return None
        return self.ranges[i]

    # ------------------------------------------------------------------
    # introspection
    # ------------------------------------------------------------------

    def for_each_param(self, fn: Callable[[ParamMeta, Any], None]) -> None:
        for i, (slot, r) in enumerate(zip(self.slots, self.ranges)):
            fn(ParamMeta(label=slot.label, index=i, is_named=slot.is_named), r)

    def params(self) -> Iterable[Tuple[ParamMeta, Any]]:
        for i, (slot, r) in enumerate(zip(self.slots, self.ranges)):
            yield ParamMeta(label=slot.label, index=i, is_named=slot.is_named), r

    def __repr__(self) -> str:
        dims = "x".join(str(b) for b in self.bases())
        return f"ParamGrid({self.model_type.__name__}, {dims}={self.size()})"


class UnitGrid:
    """
    Grid with no parameters: exactly one combination, a default model.

    Typical use is a constrained segment whose model is fully determined by
    its binder (a connecting line given two boundary points).
    """

    def __init__(self, model_type: type):
        self.model_type = model_type
        self.slots: List[SlotAccessor] = []
        self.ranges: List[Any] = []

    @property
    def n_params(self) -> int:
        return 0

    def bases(self) -> Tuple[int, ...]:
        return ()

    def size(self) -> int:
        return 1

    def __len__(self) -> int:
        return 1

    def make_model(self, idx: Sequence[int] = ()) -> Any:
        return self.model_type()

    def values_at(self, idx: Sequence[int] = ()) -> List[Tuple[str, Any]]:
        return []

    def find(self, label: str, value_type: Optional[type] = None) -> Optional[Any]:
        return None

    def get_by_label(self, label: str) -> Any:
        raise UnknownParameterError(f"{self.model_type.__name__}: unit grid has no parameter '{label}'")

    def set_by_label(self, label: str, r: Any) -> None:
        raise UnknownParameterError(f"{self.model_type.__name__}: unit grid has no parameter '{label}'")

    def for_each_param(self, fn: Callable[[ParamMeta, Any], None]) -> None:
        return None

    def params(self) -> Iterable[Tuple[ParamMeta, Any]]:
        return iter(())

    def __repr__(self) -> str:
        return f"UnitGrid({self.model_type.__name__})"

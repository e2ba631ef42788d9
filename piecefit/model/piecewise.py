"""
Piecewise model: ordered (domain, model) pairs.

Evaluation picks the FIRST pair whose domain accepts the input, so with
overlapping domains the segment added first wins. With no match the result is
NaN for float outputs and out_type() otherwise.
"""

from __future__ import annotations

from typing import Any, Callable, List, Protocol, Tuple, runtime_checkable

import numpy as np

Domain = Callable[[Any], bool]


@runtime_checkable
class Model(Protocol):
    def evaluate(self, x: Any) -> Any: ...


def no_value(out_type: type) -> Any:
    """'No segment matched' value for an output type."""
    if issubclass(out_type, (float, np.floating)):
        return out_type(np.nan)
    return out_type()


class PiecewiseModel:
    def __init__(self, out_type: type = float):
        self.out_type = out_type
        self._entries: List[Tuple[Domain, Any]] = []

    def add(self, domain: Domain, model: Any) -> None:
        """Append a segment. Order matters: earlier segments win overlaps."""
        self._entries.append((domain, model))

    def evaluate(self, x: Any) -> Any:
        for domain, model in self._entries:
            if domain(x):
                return model.evaluate(x)
        return no_value(self.out_type)

    __call__ = evaluate

    @property
    def segments(self) -> List[Tuple[Domain, Any]]:
        return list(self._entries)

    def models(self) -> List[Any]:
        return [m for _, m in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        parts = ", ".join(type(m).__name__ for _, m in self._entries)
        return f"PiecewiseModel([{parts}])"

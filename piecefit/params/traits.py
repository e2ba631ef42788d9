"""
Uniform read/write access to model slots.

The grid never cares whether a slot is a plain attribute or a ControlParam:
it always goes through a SlotAccessor. Accessors are resolved once, when the
grid is constructed, by looking at a default-constructed model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .control_param import ControlParam


@dataclass(frozen=True)
class SlotAccessor:
    """
    How to reach one tunable attribute of a model.

    attr        - attribute name on the model
    value_type  - type of candidate values for this slot
    label       - ControlParam name, "" for plain attributes
    """

    attr: str
    value_type: type
    label: str = ""

    @property
    def is_named(self) -> bool:
        return bool(self.label)

    def get(self, model: Any) -> Any:
        field_value = getattr(model, self.attr)
        if self.is_named:
            return field_value.value
        return field_value

    def set(self, model: Any, v: Any) -> None:
        if self.is_named:
            getattr(model, self.attr).value = v
        else:
            setattr(model, self.attr, v)


def resolve_accessor(model_type: type, attr: str) -> SlotAccessor:
    """
    Build the accessor for `model_type.attr`.

    Raises AttributeError if a default model has no such attribute; that is a
    wiring mistake and should surface while the grid is being set up.
    """
    probe = model_type()
    if not hasattr(probe, attr):
        raise AttributeError(f"{model_type.__name__} has no parameter attribute '{attr}'")

    current = getattr(probe, attr)
    if isinstance(current, ControlParam):
        return SlotAccessor(attr=attr, value_type=current.value_type, label=current.name)

    value_type = type(current) if current is not None else float
    return SlotAccessor(attr=attr, value_type=value_type)

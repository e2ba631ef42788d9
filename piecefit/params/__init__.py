"""Model parameters: ranges, named slots and grids."""

from .control_param import ControlParam, control_param
from .grid import ParamGrid, ParamMeta, UnitGrid
from .ranges import RangeLike, UniformRange, ValuesRange, fixed
from .traits import SlotAccessor, resolve_accessor

__all__ = [
    "ControlParam",
    "control_param",
    "ParamGrid",
    "ParamMeta",
    "UnitGrid",
    "RangeLike",
    "UniformRange",
    "ValuesRange",
    "fixed",
    "SlotAccessor",
    "resolve_accessor",
]

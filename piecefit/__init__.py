"""
piecefit: exhaustive grid search over piecewise models.

Each segment of a piecewise model owns a grid of candidate parameters; the
orchestrator enumerates every combination across segments, builds the
piecewise model for it and leaves scoring to the caller.
"""

from .core import ConstrainedSegment, FreeSegment, Orchestrator, Segment, Snapshot
from .errors import DuplicateParameterError, PiecefitError, UnknownParameterError, WiringError
from .model import FitLineBetween, Hyperbola, Interval, Line, Parabola, PiecewiseModel, split_points
from .params import ControlParam, ParamGrid, ParamMeta, UniformRange, UnitGrid, ValuesRange, control_param, fixed
from .search import (
    EnumerationStrategy,
    IndexSpace,
    ReverseEnumerationStrategy,
    linear_to_multi_index,
    make_index_space,
    map_range,
    multi_to_linear_index,
)
from .search.runner import SearchResult, results_table, run_search

__version__ = "0.1.0"

__all__ = [
    "ConstrainedSegment",
    "FreeSegment",
    "Orchestrator",
    "Segment",
    "Snapshot",
    "DuplicateParameterError",
    "PiecefitError",
    "UnknownParameterError",
    "WiringError",
    "FitLineBetween",
    "Hyperbola",
    "Interval",
    "Line",
    "Parabola",
    "PiecewiseModel",
    "split_points",
    "ControlParam",
    "ParamGrid",
    "ParamMeta",
    "UniformRange",
    "UnitGrid",
    "ValuesRange",
    "control_param",
    "fixed",
    "EnumerationStrategy",
    "IndexSpace",
    "ReverseEnumerationStrategy",
    "linear_to_multi_index",
    "make_index_space",
    "map_range",
    "multi_to_linear_index",
    "SearchResult",
    "results_table",
    "run_search",
]

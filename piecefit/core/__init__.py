"""Segments and the orchestrator that combines them into one search space."""

from .constrained import Binder, ConstrainedSegment
from .free import FreeSegment
from .orchestrator import Orchestrator, Snapshot
from .segment import Segment

__all__ = [
    "Binder",
    "ConstrainedSegment",
    "FreeSegment",
    "Orchestrator",
    "Snapshot",
    "Segment",
]

"""Index spaces, enumeration strategies and search drivers."""

from .index_space import IndexSpace, linear_to_multi_index, make_index_space, multi_to_linear_index
from .parallel import chunk_bounds, default_workers, map_range
from .strategy import CursorState, EnumerationStrategy, IndexStrategy, ReverseEnumerationStrategy

__all__ = [
    "IndexSpace",
    "linear_to_multi_index",
    "make_index_space",
    "multi_to_linear_index",
    "chunk_bounds",
    "default_workers",
    "map_range",
    "CursorState",
    "EnumerationStrategy",
    "IndexStrategy",
    "ReverseEnumerationStrategy",
]

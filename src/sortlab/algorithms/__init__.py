"""
Algorithms package public API.

Each algorithm body has the signature `(buffer: list, precedes) -> None` and
sorts `buffer` in place; callers normally go through `sortlab.dispatch.sort`.
"""

from .base import AlgorithmKind, Precedes, SortConfig, less_than, swap
from .heap_sort import build_max_heap, heap_sort, is_max_heap, sift_down
from .insertion_sort import insertion_sort
from .merge_sort import merge, merge_sort
from .quick_sort import lomuto_partition, quick_sort_in_place, quick_sort_simple
from .selection_sort import selection_sort

__all__ = [
    "AlgorithmKind",
    "Precedes",
    "SortConfig",
    "less_than",
    "swap",
    "build_max_heap",
    "heap_sort",
    "is_max_heap",
    "sift_down",
    "insertion_sort",
    "merge",
    "merge_sort",
    "lomuto_partition",
    "quick_sort_in_place",
    "quick_sort_simple",
    "selection_sort",
]

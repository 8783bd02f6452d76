"""
sortlab: comparison sorts over any element type, ordered by a caller-supplied
"precedes" predicate.

    from sortlab import AlgorithmKind, sort
    sort(AlgorithmKind.HEAP, [5, -3, 0, 5, 2])             # [-3, 0, 2, 5, 5]
    sort("merge", people, lambda a, b: a.age < b.age)      # stable
    sort("quick", xs, config={"use_in_place_quick_sort": False})
"""

from .algorithms import AlgorithmKind, SortConfig, is_max_heap, less_than
from .dispatch import sort, sort_in_place

__version__ = "0.1.0"

__all__ = ["AlgorithmKind", "SortConfig", "is_max_heap", "less_than", "sort", "sort_in_place"]

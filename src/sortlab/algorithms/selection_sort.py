from __future__ import annotations

from typing import List

from .base import Precedes, T, swap

__all__ = ["selection_sort"]


def selection_sort(buffer: List[T], precedes: Precedes[T]) -> None:
    """Swap the minimum of each unplaced suffix into place. Not stable."""
    n = len(buffer)
    for i in range(n - 1):
        k = i
        for j in range(i + 1, n):
            if precedes(buffer[j], buffer[k]):
                k = j
        swap(buffer, i, k)

from __future__ import annotations

from typing import List

from .base import Precedes, T

__all__ = ["insertion_sort"]


def insertion_sort(buffer: List[T], precedes: Precedes[T]) -> None:
    """
    Classic insertion sort: shift the sorted prefix right while the key
    strictly precedes it, then drop the key into the gap.

    Stable, O(n^2) worst case, O(n) on already sorted input.
    """
    for i in range(1, len(buffer)):
        key = buffer[i]
        j = i - 1
        while j >= 0 and precedes(key, buffer[j]):
            buffer[j + 1] = buffer[j]
            j -= 1
        buffer[j + 1] = key

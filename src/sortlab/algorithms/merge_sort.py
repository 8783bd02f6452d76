"""
Bottom-up merge sort.

Every element starts as a singleton run; each pass merges run i with run i+1
(even i) and carries an unpaired last run over untouched, until one run is
left. Stable: on ties the left run's front is taken first.

O(n log n) time, O(n) auxiliary space.
"""

from __future__ import annotations

from typing import List

from .base import Precedes, T

__all__ = ["merge", "merge_pairs", "merge_sort"]


def merge(left: List[T], right: List[T], precedes: Precedes[T]) -> List[T]:
    """Merge two runs that are each already ordered by `precedes`."""
    merged: List[T] = []
    i = j = 0
    while i < len(left) and j < len(right):
        # right wins only when it strictly precedes; ties keep left first
        if precedes(right[j], left[i]):
            merged.append(right[j])
            j += 1
        else:
            merged.append(left[i])
            i += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def merge_pairs(runs: List[List[T]], precedes: Precedes[T]) -> List[List[T]]:
    """One pass: merge adjacent run pairs, carry an odd trailing run forward."""
    result: List[List[T]] = []
    for i in range(0, len(runs) - 1, 2):
        result.append(merge(runs[i], runs[i + 1], precedes))
    if len(runs) % 2 == 1:
        result.append(runs[-1])
    return result


def merge_sort(buffer: List[T], precedes: Precedes[T]) -> None:
    if len(buffer) <= 1:
        return
    runs = [[x] for x in buffer]
    while len(runs) > 1:
        runs = merge_pairs(runs, precedes)
    buffer[:] = runs[0]

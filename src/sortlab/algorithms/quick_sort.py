"""
Quick sort, two variants behind the same `quick` selector.

- quick_sort_in_place: Lomuto partitioning on index bounds of one buffer.
  Pivot is the element at the high bound. Pending ranges live on an explicit
  stack and the smaller side is always handled first, so the stack stays
  O(log n) even for sorted or reverse-sorted input (time is still O(n^2)
  there, because the pivot is always the last element).

- quick_sort_simple: the illustrative variant. Each step allocates a
  `preceding` and a `following` list around the last element and the result
  is preceding + [pivot] + following. It only ever recurses into itself; the
  recursion is unrolled onto a work list so deep inputs cannot overflow
  Python's call stack. O(n) extra space per level.

Neither variant is stable.
"""

from __future__ import annotations

from typing import Any, List, NamedTuple, Tuple, Union

from .base import Precedes, T, swap

__all__ = ["lomuto_partition", "quick_sort_in_place", "quick_sort_simple", "simple_quick_sorted"]


def lomuto_partition(buffer: List[T], low: int, high: int, precedes: Precedes[T]) -> int:
    """
    Partition buffer[low..high] (inclusive) around buffer[high].

    Returns the pivot's final index p: everything in [low, p) precedes the
    pivot, nothing in (p, high] does.
    """
    pivot = buffer[high]
    boundary = low
    for i in range(low, high):
        if precedes(buffer[i], pivot):
            swap(buffer, i, boundary)
            boundary += 1
    swap(buffer, boundary, high)
    return boundary


def quick_sort_in_place(buffer: List[T], precedes: Precedes[T]) -> None:
    pending: List[Tuple[int, int]] = [(0, len(buffer) - 1)]
    while pending:
        low, high = pending.pop()
        if low >= high:
            continue
        p = lomuto_partition(buffer, low, high, precedes)
        left, right = (low, p - 1), (p + 1, high)
        # push the larger side first so the smaller one is popped next
        if p - low < high - p:
            pending.append(right)
            pending.append(left)
        else:
            pending.append(left)
            pending.append(right)


class _Pivot(NamedTuple):
    value: Any


def simple_quick_sorted(items: List[T], precedes: Precedes[T]) -> List[T]:
    """Return a new sorted list; `items` is left untouched."""
    if len(items) < 2:
        return list(items)

    output: List[T] = []
    # LIFO: the preceding bucket is pushed last so it is emitted first
    work: List[Union[List[T], _Pivot]] = [items]
    while work:
        entry = work.pop()
        if isinstance(entry, _Pivot):
            output.append(entry.value)
            continue
        if len(entry) < 2:
            output.extend(entry)
            continue

        pivot = entry[-1]
        preceding: List[T] = []
        following: List[T] = []
        for i in range(len(entry) - 1):
            x = entry[i]
            if precedes(x, pivot):
                preceding.append(x)
            else:
                following.append(x)

        work.append(following)
        work.append(_Pivot(pivot))
        work.append(preceding)
    return output


def quick_sort_simple(buffer: List[T], precedes: Precedes[T]) -> None:
    buffer[:] = simple_quick_sorted(buffer, precedes)

"""
Heap sort over an array-backed max-heap.

"Max" is defined by the precedes predicate: a parent must never precede
either of its children. Children of index i live at 2*i + 1 and 2*i + 2.

Public API (stable):
    build_max_heap(buffer, precedes) -> None
    sift_down(buffer, index, heap_size, precedes) -> None
    heap_sort(buffer, precedes) -> None
    is_max_heap(buffer, heap_size, precedes) -> bool   # diagnostic / tests

O(n log n) time, O(1) auxiliary space, not stable.
"""

from __future__ import annotations

from typing import List, Sequence

from .base import Precedes, T, swap

__all__ = ["build_max_heap", "sift_down", "heap_sort", "is_max_heap"]


def sift_down(buffer: List[T], index: int, heap_size: int, precedes: Precedes[T]) -> None:
    """
    Restore the max-heap property for the subtree rooted at `index`,
    assuming both child subtrees already satisfy it. Only positions
    < heap_size are considered part of the heap.
    """
    while True:
        largest = index
        left = 2 * index + 1
        right = left + 1
        if left < heap_size and precedes(buffer[largest], buffer[left]):
            largest = left
        if right < heap_size and precedes(buffer[largest], buffer[right]):
            largest = right
        if largest == index:
            return
        swap(buffer, index, largest)
        index = largest


def build_max_heap(buffer: List[T], precedes: Precedes[T]) -> None:
    n = len(buffer)
    for index in range(n // 2 - 1, -1, -1):
        sift_down(buffer, index, n, precedes)


def heap_sort(buffer: List[T], precedes: Precedes[T]) -> None:
    build_max_heap(buffer, precedes)
    for index in range(len(buffer) - 1, 0, -1):
        # root holds the maximum of buffer[:index + 1]
        swap(buffer, 0, index)
        sift_down(buffer, 0, index, precedes)


def is_max_heap(buffer: Sequence[T], heap_size: int, precedes: Precedes[T]) -> bool:
    """
    True iff no parent among the first `heap_size` elements precedes one of
    its children. Not used on the sorting path.
    """
    if heap_size < 0 or heap_size > len(buffer):
        raise ValueError(f"heap_size must be in [0, {len(buffer)}]; got {heap_size}")
    for i in range(1, heap_size):
        if precedes(buffer[(i - 1) // 2], buffer[i]):
            return False
    return True

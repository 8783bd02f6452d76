"""
Property helpers for validating sorting results.

All order checks take the same precedes predicate the algorithms use
(default: the element type's "<").

Public API (stable):
    is_ordered(xs, precedes=None) -> bool
    first_order_violation_index(xs, precedes=None) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    is_stable(out, precedes, tag) -> bool
    assert_no_mutation(before, after) -> None

Notes
-----
- is_permutation / permutation_counter_diff count elements with a Counter,
  so elements must be hashable.
- Stability cannot be seen from values alone. is_stable expects every
  element to carry a tie-breaker tag (e.g. pairs (key, original_index)) and
  checks that equal-key neighbours keep increasing tags.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, Hashable, Optional, Sequence

from sortlab.algorithms.base import Precedes, less_than

__all__ = [
    "is_ordered",
    "first_order_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "is_stable",
    "assert_no_mutation",
]


def first_order_violation_index(xs: Sequence[Any], precedes: Optional[Precedes[Any]] = None) -> int | None:
    """
    Return the first index i where xs[i + 1] precedes xs[i], or None.

        i = first_order_violation_index(out)
        assert i is None, f"out of order at i={i}: {out[i]} then {out[i+1]}"
    """
    if precedes is None:
        precedes = less_than
    for i in range(len(xs) - 1):
        if precedes(xs[i + 1], xs[i]):
            return i
    return None


def is_ordered(xs: Sequence[Any], precedes: Optional[Precedes[Any]] = None) -> bool:
    """True iff no adjacent pair (x, y) of xs has precedes(y, x)."""
    return first_order_violation_index(xs, precedes) is None


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """True iff `a` and `b` hold the same multiset of elements."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Hashable], b: Sequence[Hashable]) -> Dict[Hashable, int]:
    """
    Element -> (count in a) - (count in b), only for nonzero differences.
    An empty dict means `a` is a permutation of `b`.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {k: d for k, d in diff.items() if d != 0}


def is_stable(out: Sequence[Any], precedes: Precedes[Any], tag: Callable[[Any], Any]) -> bool:
    """
    True iff every adjacent pair that `precedes` considers equal appears in
    increasing `tag` order. `out` must already be ordered, so equal elements
    are contiguous and checking neighbours suffices.
    """
    for x, y in zip(out, out[1:]):
        if not precedes(x, y) and not precedes(y, x) and not tag(x) < tag(y):
            return False
    return True


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Raise AssertionError naming the first difference if `after` is not an
    element-wise copy of `before`.
    """
    if len(before) != len(after):
        raise AssertionError(f"Input mutated: length changed from {len(before)} to {len(after)}")
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x!r}, after={y!r}")

"""
Reference sort ("oracle") for correctness checks.

Python's built-in `sorted()` is the ground truth. A precedes predicate is
turned into a three-way comparison with `functools.cmp_to_key`, so the oracle
orders by exactly the same relation the algorithms use. `sorted` is stable,
which makes it the expected output for merge and insertion sort even with
distinguishable equal-key elements.

Public API (stable):
    ORACLE_NAME
    oracle_sort(a, precedes=None) -> list
    equals_oracle(a, out, precedes=None) -> bool
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, List, Optional, Sequence

from sortlab.algorithms.base import Precedes

ORACLE_NAME: str = "reference"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle", "precedes_to_cmp"]


def precedes_to_cmp(precedes: Precedes[Any]) -> Callable[[Any, Any], int]:
    def cmp(a: Any, b: Any) -> int:
        if precedes(a, b):
            return -1
        if precedes(b, a):
            return 1
        return 0

    return cmp


def oracle_sort(a: Sequence[Any], precedes: Optional[Precedes[Any]] = None) -> List[Any]:
    """
    Return a new list with the elements of `a` in reference order.

    With `precedes=None` this is plain `sorted(a)`. `a` is never mutated.
    """
    if precedes is None:
        return sorted(a)
    return sorted(a, key=cmp_to_key(precedes_to_cmp(precedes)))


def equals_oracle(a: Sequence[Any], out: Sequence[Any], precedes: Optional[Precedes[Any]] = None) -> bool:
    """True iff `out` equals oracle_sort(a) element-wise."""
    return list(out) == oracle_sort(a, precedes)

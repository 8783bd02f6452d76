"""
Shared building blocks for the sorting algorithms.

Public API (stable):
    Precedes                      # Callable[[T, T], bool]
    less_than(a, b) -> bool       # default predicate, intrinsic "<"
    swap(buffer, i, j) -> None
    AlgorithmKind                 # closed enumeration of algorithm selectors
    SortConfig                    # dispatcher configuration

Conventions:
- A precedes predicate answers "should `a` come strictly before `b`".
  It must be a strict weak ordering for results to be well defined; nothing
  here validates that.
- Algorithm bodies take a mutable `list` they own and sort it in place.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, TypeVar

T = TypeVar("T")

Precedes = Callable[[T, T], bool]

less_than: Precedes[Any] = operator.lt

__all__ = ["T", "Precedes", "less_than", "swap", "AlgorithmKind", "SortConfig"]


def swap(buffer: List[Any], i: int, j: int) -> None:
    """Exchange buffer[i] and buffer[j]; no-op when i == j."""
    if i != j:
        buffer[i], buffer[j] = buffer[j], buffer[i]


class AlgorithmKind(str, Enum):
    MERGE = "merge"
    QUICK = "quick"
    HEAP = "heap"
    INSERTION = "insertion"
    SELECTION = "selection"

    @classmethod
    def parse(cls, value: Any) -> "AlgorithmKind":
        """
        Accept a member or its string value (as read from YAML configs).

        Raises
        ------
        ValueError
            If `value` does not name one of the supported algorithms.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unsupported algorithm: {value!r}. Supported: {[k.value for k in cls]}"
            ) from None


@dataclass(frozen=True)
class SortConfig:
    """
    Dispatcher configuration.

    use_in_place_quick_sort : bool
        True (default) backs AlgorithmKind.QUICK with the in-place partition
        variant; False selects the simple allocating variant.
    """

    use_in_place_quick_sort: bool = True

    @classmethod
    def from_mapping(cls, config: Optional[Mapping[str, Any]]) -> "SortConfig":
        if config is None:
            return cls()
        if not isinstance(config, Mapping):
            raise ValueError(f"config must be a mapping; got {type(config).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ValueError(f"Unknown sort config keys: {unknown}. Supported: {sorted(known)}")

        flag = config.get("use_in_place_quick_sort", True)
        if not isinstance(flag, bool):
            raise ValueError(f"use_in_place_quick_sort must be a bool; got {flag!r}")
        return cls(use_in_place_quick_sort=flag)

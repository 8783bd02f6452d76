"""
Single entry point over all sorting algorithms.

Public API (stable):
    sort(kind, sequence, precedes=None, *, config=None) -> list
    sort_in_place(kind, buffer, precedes=None, *, config=None) -> None

Conventions:
- `kind` is an AlgorithmKind or its string value ("merge", "quick", ...).
- `precedes=None` means the element type's own "<".
- `config` is a SortConfig, a plain dict (as loaded from YAML) or None.
- `sort` never mutates its input and always returns a new list.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, MutableSequence, Optional, Sequence, Union

from .algorithms.base import AlgorithmKind, Precedes, SortConfig, T, less_than
from .algorithms.heap_sort import heap_sort
from .algorithms.insertion_sort import insertion_sort
from .algorithms.merge_sort import merge_sort
from .algorithms.quick_sort import quick_sort_in_place, quick_sort_simple
from .algorithms.selection_sort import selection_sort

ConfigLike = Union[SortConfig, Mapping[str, Any], None]

__all__ = ["ConfigLike", "resolve_config", "sort", "sort_in_place"]

_ALGORITHMS: Dict[AlgorithmKind, Callable[[List[Any], Precedes[Any]], None]] = {
    AlgorithmKind.MERGE: merge_sort,
    AlgorithmKind.HEAP: heap_sort,
    AlgorithmKind.INSERTION: insertion_sort,
    AlgorithmKind.SELECTION: selection_sort,
}


def resolve_config(config: ConfigLike) -> SortConfig:
    if isinstance(config, SortConfig):
        return config
    return SortConfig.from_mapping(config)


def _implementation(kind: AlgorithmKind, config: SortConfig) -> Callable[[List[Any], Precedes[Any]], None]:
    if kind is AlgorithmKind.QUICK:
        return quick_sort_in_place if config.use_in_place_quick_sort else quick_sort_simple
    return _ALGORITHMS[kind]


def sort(
    kind: Union[AlgorithmKind, str],
    sequence: Sequence[T],
    precedes: Optional[Precedes[T]] = None,
    *,
    config: ConfigLike = None,
) -> List[T]:
    """
    Return a new list with the elements of `sequence` ordered by `precedes`.

    Parameters
    ----------
    kind : AlgorithmKind | str
        Which algorithm to run.
    sequence : Sequence[T]
        Input elements. Not mutated.
    precedes : Callable[[T, T], bool] | None
        Strict weak ordering; "a should come before b". Defaults to `<`.
    config : SortConfig | dict | None
        {"use_in_place_quick_sort": bool}; only affects AlgorithmKind.QUICK.

    Returns
    -------
    list[T]
        A permutation of `sequence`. Merge and insertion sort keep equal
        elements in input order; the others may not.

    Raises
    ------
    ValueError
        If `kind` or `config` is not recognized.
    """
    algorithm = AlgorithmKind.parse(kind)
    resolved = resolve_config(config)

    out = list(sequence)
    if len(out) <= 1:
        return out

    _implementation(algorithm, resolved)(out, less_than if precedes is None else precedes)
    return out


def sort_in_place(
    kind: Union[AlgorithmKind, str],
    buffer: MutableSequence[T],
    precedes: Optional[Precedes[T]] = None,
    *,
    config: ConfigLike = None,
) -> None:
    """Like `sort`, but writes the result back into `buffer`."""
    buffer[:] = sort(kind, buffer, precedes, config=config)

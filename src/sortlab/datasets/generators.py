"""
Integer dataset generators for the benchmark harness.

Supported distributions:
- "random":        uniform integers from an inclusive range,
                   default [-10000, 10000].
- "sorted":        [0, 1, ..., n-1].
- "reversed":      [n-1, ..., 0]; worst case for last-element pivots.
- "nearly_sorted": [0..n-1] degraded by ceil(swap_frac * n) random swaps.
- "few_uniques":   n draws from at most k distinct values; stresses ties.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- Ranges are inclusive on both ends.
- "sorted" and "reversed" never touch `rng`.
- Returns plain Python ints; the algorithms know nothing about NumPy.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

DEFAULT_RANGE: Tuple[int, int] = (-10_000, 10_000)

SUPPORTED_DISTS = {
    "random",
    "sorted",
    "reversed",
    "nearly_sorted",
    "few_uniques",
}
__all__ = ["DEFAULT_RANGE", "SUPPORTED_DISTS", "make_dataset"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate `n` integers following `spec`.

    Parameters
    ----------
    n : int
        Number of elements, >= 0.
    spec : dict
        {"dist": <name>, "params": {...}}. Params per dist:
            random:        {"range": [lo, hi]}          # optional
            nearly_sorted: {"swap_frac": 0.05}          # in [0.0, 1.0]
            few_uniques:   {"k": 10, "range": [lo, hi]} # range optional
            sorted / reversed: ignored
    rng : numpy.random.Generator
        Seeded by the caller.

    Raises
    ------
    ValueError
        On a bad `n`, an unknown dist or malformed params.
    """
    if not isinstance(n, int) or n < 0:
        raise ValueError(f"n must be a nonnegative int; got {n!r}")
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist")
    if dist not in SUPPORTED_DISTS:
        raise ValueError(f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}")
    params = spec.get("params") or {}

    if dist == "sorted":
        return list(range(n))

    if dist == "reversed":
        return list(range(n - 1, -1, -1))

    if dist == "random":
        lo, hi = _parse_range(params)
        if n == 0:
            return []
        # integers() is half-open, hence hi + 1
        return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(n))
        num_swaps = int(np.ceil(swap_frac * n))
        if n == 0 or num_swaps == 0:
            return arr
        idxs = rng.integers(0, n, size=(num_swaps, 2))
        for i, j in idxs.tolist():
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    # few_uniques
    k = params.get("k")
    if not isinstance(k, int) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    lo, hi = _parse_range(params)
    if n == 0:
        return []
    span = hi - lo + 1
    values = lo + rng.choice(span, size=min(k, n, span), replace=False)
    return values[rng.integers(0, len(values), size=n)].tolist()


# ------------------------- helpers ------------------------- #


def _parse_range(params: Dict[str, Any]) -> Tuple[int, int]:
    if "range" not in params:
        return DEFAULT_RANGE
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo, hi = spec
    if not isinstance(lo, (int, np.integer)) or not isinstance(hi, (int, np.integer)):
        raise ValueError("params.range values must be integers")
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return int(lo), int(hi)


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(f"nearly_sorted.params.swap_frac must be a float; got {val!r}") from e
    if not 0.0 <= x <= 1.0:
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x

"""
Timing harness for one sort callable.

Each sample times exactly one call `sort_fn(a)` with `time.perf_counter_ns`.
Copying the input, GC and warmup stay outside the timed block.

Public API (stable):
    time_sort_call(...) -> dict

Returned dict schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # one entry per completed sample
        "mean_ns": int | None,              # mean of samples_ns
        "output": list | None,              # result of the last completed call
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # set when status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index
    }
"""

from __future__ import annotations

import gc
import logging
import time
from typing import Any, Callable, Dict, List, Sequence

logger = logging.getLogger(__name__)

__all__ = ["time_sort_call"]


def time_sort_call(
    *,
    algo_name: str,
    sort_fn: Callable[[List[Any]], Sequence[Any]],
    a: Sequence[Any],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    defensive_copy: bool = True,
) -> Dict[str, Any]:
    """
    Time `repeats` calls of `sort_fn` on `a`.

    Parameters
    ----------
    algo_name : str
        Label used in records and log lines.
    sort_fn : Callable[[list], Sequence]
        Takes the input list, returns the sorted result.
    a : Sequence
        Input data.
    repeats : int
        Number of timed samples.
    warmup : bool
        Make one untimed call first.
    disable_gc : bool
        Collect, then disable GC for the timed loop; restored afterwards.
    timeout_seconds : float
        If a single sample takes longer, status becomes "timeout" and
        sampling stops (the slow sample is still recorded).
    defensive_copy : bool
        Pass a fresh list(a) to every call so in-place sorts cannot leak
        state between samples.

    Raises
    ------
    ValueError
        On negative repeats or a non-positive timeout.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],
        "mean_ns": None,
        "output": None,
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    if warmup and repeats > 0:
        try:
            sort_fn(list(a) if defensive_copy else a)
        except Exception as e:
            logger.debug("warmup of %s failed", algo_name, exc_info=True)
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(a) if defensive_copy else a
            try:
                t0 = time.perf_counter_ns()
                out = sort_fn(arg)
                t1 = time.perf_counter_ns()
            except Exception as e:
                logger.debug("%s failed at repeat %d", algo_name, r, exc_info=True)
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            result["samples_ns"].append(elapsed)
            result["output"] = out
            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        # leave GC disabled if the caller had it disabled
        if disable_gc and prev_gc_enabled:
            gc.enable()

    if result["samples_ns"]:
        result["mean_ns"] = sum(result["samples_ns"]) // len(result["samples_ns"])
    logger.debug("%s: %d samples, status=%s", algo_name, len(result["samples_ns"]), result["status"])
    return result

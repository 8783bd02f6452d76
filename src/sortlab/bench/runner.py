"""
Experiment runner: times every configured algorithm against the reference
sort on shared datasets, checks outputs, and writes a run directory.

Usage (from repo root):
    python -m sortlab.bench.runner experiments/configs/01_random_small.yaml
    sortlab-bench experiments/configs/02_reversed_quick.yaml --log-level DEBUG

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per timing sample / status event
    - summary.csv             # mean, median and IQR per (algo, n)
    - (console) rich summary table, tqdm progress

Design notes:
- For each size n, ONE dataset is generated and every algorithm (and the
  reference sort) gets its own copy of it.
- Each algorithm's output is compared with the reference output; a
  difference is a "mismatch" line in results.jsonl and a warning on console.
- On timeout/error an algorithm is skipped for the larger sizes.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import functools
import json
import logging
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

import sortlab
from sortlab.algorithms.base import AlgorithmKind
from sortlab.bench.measure import time_sort_call
from sortlab.datasets import make_dataset
from sortlab.dispatch import resolve_config, sort
from sortlab.validate import ORACLE_NAME, oracle_sort

logger = logging.getLogger(__name__)
_console = Console()

REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
]
SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "mean_ns", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: Callable[[List[Any]], Sequence[Any]]
    config: Dict[str, Any]


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Experiment config must be a YAML mapping: {path}")
    return cfg


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    suffix = 1
    while run_dir.exists():
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
        suffix += 1
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "sortlab": sortlab.__version__,
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    """
    Turn config entries {name, label?, config?} into bound sort callables.

    `name` is an AlgorithmKind value; `label` (default: name) must be unique
    so the same algorithm can appear twice with different configs.
    """
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        if not isinstance(entry, dict):
            raise ValueError(f"Each algorithm entry must be a mapping; got {entry!r}")
        kind = AlgorithmKind.parse(entry.get("name"))
        label = entry.get("label") or kind.value
        if not isinstance(label, str):
            raise ValueError(f"Algorithm '{kind.value}': 'label' must be a string")
        if label == ORACLE_NAME:
            raise ValueError(f"Algorithm label {label!r} is reserved for the reference sort")
        if label in seen:
            raise ValueError(f"Duplicate algorithm label in config: {label}")
        seen.add(label)

        config = entry.get("config") or {}
        resolved = resolve_config(config)
        specs.append(AlgoSpec(name=label, sort_fn=functools.partial(sort, kind, config=resolved), config=config))
    return specs


def _reference_spec() -> AlgoSpec:
    return AlgoSpec(name=ORACLE_NAME, sort_fn=oracle_sort, config={})


def _first_difference(out: Sequence[Any], expected: Sequence[Any]) -> Optional[int]:
    for i, (x, y) in enumerate(zip(out, expected)):
        if x != y:
            return i
    if len(out) != len(expected):
        return min(len(out), len(expected))
    return None


# ------------------------- aggregation & console ------------------------- #

def _q1(s: pd.Series) -> float:
    return s.quantile(0.25)


def _q3(s: pd.Series) -> float:
    return s.quantile(0.75)


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    # status lines carry no time_ns
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    out = df.groupby(["algo", "n"], as_index=False).agg(
        samples_ok=("time_ns", "count"),
        mean_ns=("time_ns", "mean"),
        median_ns=("time_ns", "median"),
        q1_ns=("time_ns", _q1),
        q3_ns=("time_ns", _q3),
        min_ns=("time_ns", "min"),
        max_ns=("time_ns", "max"),
    )
    out["iqr_ns"] = out["q3_ns"] - out["q1_ns"]
    out = out.drop(columns=["q1_ns", "q3_ns"])
    int_cols = ["n", "samples_ok", "mean_ns", "median_ns", "iqr_ns", "min_ns", "max_ns"]
    out[int_cols] = out[int_cols].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _format_cell(row: pd.Series) -> str:
    # ns -> ms
    return f"{row['mean_ns'] / 1e6:.3f} / {row['median_ns'] / 1e6:.3f} ± {row['iqr_ns'] / 1e6:.3f}"


def _print_summary(summary: pd.DataFrame, sizes: List[int], mismatches: Dict[str, int]) -> None:
    table = Table(title="Benchmark Summary (mean / median ± IQR in ms)")
    table.add_column("Algorithm", style="bold")
    picks = sorted({sizes[0], sizes[len(sizes) // 2], sizes[-1]})
    for n in picks:
        table.add_column(f"n={n}", justify="right")
    table.add_column("Mismatches", justify="right")

    for algo in summary["algo"].unique():
        row = [f"[bold]{algo}[/]"]
        for n in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == n)]
            row.append("—" if s.empty else _format_cell(s.iloc[0]))
        count = mismatches.get(algo, 0)
        row.append(f"[red]{count}[/]" if count else "0")
        table.add_row(*row)

    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def _validate_sizes(raw: Any) -> List[int]:
    if not isinstance(raw, list) or not raw:
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
    sizes = []
    for n in raw:
        if not isinstance(n, int) or n < 0:
            raise ValueError(f"Config 'sizes' entries must be nonnegative integers; got {n!r}")
        sizes.append(n)
    return sizes


def run_experiment(config_path: Path) -> Path:
    cfg = _load_yaml(config_path)

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes = _validate_sizes(cfg["sizes"])
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    check_reference = bool(cfg.get("check_reference", True))
    include_reference = bool(cfg.get("include_reference", True))

    # validate everything before touching the filesystem so a bad config leaves nothing behind
    if repeats < 0:
        raise ValueError(f"Config 'repeats' must be nonnegative; got {repeats}")
    if timeout_seconds <= 0:
        raise ValueError(f"Config 'timeout_seconds' must be positive; got {timeout_seconds}")
    # n=0 parses every param without drawing from the run's rng
    make_dataset(0, dataset_spec, np.random.default_rng(0))
    algos = _resolve_algorithms(list(cfg["algorithms"]))
    if include_reference:
        algos.append(_reference_spec())

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    per_algo_skip = {a.name: False for a in algos}
    mismatches = {a.name: 0 for a in algos}

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")
    _console.print()

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(n, dataset_spec, rng)
        expected = oracle_sort(base_a)

        for a_spec in algos:
            if per_algo_skip[a_spec.name]:
                continue

            res = time_sort_call(
                algo_name=a_spec.name,
                sort_fn=a_spec.sort_fn,
                a=base_a,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": n,
                        "dataset": dataset_spec,
                        "trial": trial_idx,
                        "time_ns": int(t_ns),
                        "config": a_spec.config,
                    },
                    results_path,
                )

            out = res["output"]
            if check_reference and out is not None:
                idx = _first_difference(out, expected)
                if idx is not None:
                    mismatches[a_spec.name] += 1
                    logger.warning(
                        "%s disagrees with the reference at n=%d, index %d (got %r, expected %r)",
                        a_spec.name,
                        n,
                        idx,
                        out[idx] if idx < len(out) else None,
                        expected[idx] if idx < len(expected) else None,
                    )
                    _append_jsonl(
                        {
                            "algo": a_spec.name,
                            "n": n,
                            "status": "mismatch",
                            "first_mismatch_index": idx,
                            "input": base_a,
                            "config": a_spec.config,
                        },
                        results_path,
                    )

            status = res["status"]
            if status in ("timeout", "error"):
                per_algo_skip[a_spec.name] = True
                logger.warning("%s: %s at n=%d; skipping larger sizes", a_spec.name, status, n)
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": n,
                        "status": status,
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                        "error": res["error"],
                        "config": a_spec.config,
                    },
                    results_path,
                )

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    _print_summary(summary_df, sizes, mismatches)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for path in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {path}")
    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a sorting benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_console, rich_tracebacks=True)],
    )
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()

"""
Timing harness and end-to-end runner tests (tiny sizes, temp output dirs).
"""

from __future__ import annotations

import gc
import json
from pathlib import Path

import pandas as pd
import pytest
import yaml

from sortlab.bench import runner
from sortlab.bench.measure import time_sort_call
from sortlab.dispatch import sort


def _time(sort_fn, a, **kw):
    opts = dict(algo_name="x", sort_fn=sort_fn, a=a, repeats=3, warmup=True, disable_gc=True, timeout_seconds=5.0)
    opts.update(kw)
    return time_sort_call(**opts)


# ------------------------- measure ------------------------- #

def test_time_sort_call_ok() -> None:
    a = [3, 1, 2]
    res = _time(lambda xs: sort("heap", xs), a)
    assert res["status"] == "ok"
    assert len(res["samples_ns"]) == 3
    assert res["output"] == [1, 2, 3]
    assert res["mean_ns"] is not None
    assert a == [3, 1, 2]


def test_time_sort_call_defensive_copy_protects_input() -> None:
    a = [3, 1, 2]

    def mutating(xs):
        xs.sort()
        return xs

    _time(mutating, a)
    assert a == [3, 1, 2]


def test_time_sort_call_restores_gc() -> None:
    assert gc.isenabled()
    _time(sorted, [2, 1])
    assert gc.isenabled()


def test_time_sort_call_error() -> None:
    calls = []

    def flaky(xs):
        calls.append(1)
        if len(calls) > 1:
            raise RuntimeError("boom")
        return xs

    res = _time(flaky, [1])
    assert res["status"] == "error"
    assert "repeat 0" in res["error"]
    assert res["samples_ns"] == []


def test_time_sort_call_warmup_error() -> None:
    def broken(xs):
        raise RuntimeError("boom")

    res = _time(broken, [1])
    assert res["status"] == "error"
    assert res["error"].startswith("warmup failed")


def test_time_sort_call_timeout() -> None:
    res = _time(sorted, list(range(1000)), timeout_seconds=1e-12, warmup=False)
    assert res["status"] == "timeout"
    assert res["timed_out_on_repeat"] == 0
    assert len(res["samples_ns"]) == 1


@pytest.mark.parametrize("kw", [{"repeats": -1}, {"timeout_seconds": 0}])
def test_time_sort_call_rejects_bad_args(kw) -> None:
    with pytest.raises(ValueError):
        _time(sorted, [1], **kw)


# ------------------------- runner ------------------------- #

def _write_config(tmp_path: Path, **overrides) -> Path:
    cfg = {
        "experiment_name": "tiny",
        "output_dir": str(tmp_path / "runs"),
        "seed": 1,
        "repeats": 2,
        "warmup": False,
        "disable_gc": False,
        "timeout_seconds": 30.0,
        "dataset": {"dist": "random", "params": {"range": [-50, 50]}},
        "sizes": [0, 5, 20],
        "algorithms": [
            {"name": "merge"},
            {"name": "quick"},
            {"name": "quick", "label": "quick_simple", "config": {"use_in_place_quick_sort": False}},
            {"name": "heap"},
            {"name": "insertion"},
            {"name": "selection"},
        ],
    }
    cfg.update(overrides)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(cfg, sort_keys=False), encoding="utf-8")
    return path


def _read_jsonl(path: Path) -> list:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_run_experiment_writes_outputs(tmp_path: Path) -> None:
    run_dir = runner.run_experiment(_write_config(tmp_path))

    for name in ("config_resolved.yaml", "meta.json", "results.jsonl", "summary.csv"):
        assert (run_dir / name).exists(), name

    lines = _read_jsonl(run_dir / "results.jsonl")
    assert all("time_ns" in line for line in lines), "no mismatches / errors expected"

    summary = pd.read_csv(run_dir / "summary.csv")
    expected_algos = {"merge", "quick", "quick_simple", "heap", "insertion", "selection", "reference"}
    assert set(summary["algo"]) == expected_algos
    assert set(summary["n"]) == {0, 5, 20}
    assert (summary["samples_ok"] == 2).all()


def test_run_experiment_without_reference(tmp_path: Path) -> None:
    run_dir = runner.run_experiment(_write_config(tmp_path, include_reference=False, sizes=[3]))
    summary = pd.read_csv(run_dir / "summary.csv")
    assert "reference" not in set(summary["algo"])


def test_run_experiment_records_mismatch(tmp_path: Path, monkeypatch) -> None:
    def wrong(kind, xs, precedes=None, *, config=None):
        return list(reversed(sorted(xs)))

    monkeypatch.setattr(runner, "sort", wrong)
    config = _write_config(tmp_path, sizes=[4], algorithms=[{"name": "merge"}], include_reference=False)
    run_dir = runner.run_experiment(config)

    statuses = [line for line in _read_jsonl(run_dir / "results.jsonl") if "status" in line]
    assert len(statuses) == 1
    assert statuses[0]["status"] == "mismatch"
    assert statuses[0]["first_mismatch_index"] == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"algorithms": [{"name": "bogo"}]},
        {"algorithms": [{"name": "merge"}, {"name": "merge"}]},
        {"algorithms": [{"name": "quick", "config": {"nope": 1}}]},
        {"sizes": []},
        {"sizes": [-1]},
        {"repeats": -1},
        {"timeout_seconds": 0},
        {"dataset": {"dist": "bogus"}},
        {"dataset": {"dist": "few_uniques", "params": {"k": 0}}},
    ],
)
def test_run_experiment_rejects_bad_config(tmp_path: Path, overrides) -> None:
    with pytest.raises(ValueError):
        runner.run_experiment(_write_config(tmp_path, **overrides))
    runs = tmp_path / "runs"
    assert not runs.exists() or not any(runs.iterdir()), "bad config must not leave a run directory"


def test_reference_label_is_reserved(tmp_path: Path) -> None:
    config = _write_config(tmp_path, include_reference=False, algorithms=[{"name": "merge", "label": "reference"}])
    with pytest.raises(ValueError, match="reserved for the reference sort"):
        runner.run_experiment(config)


@pytest.mark.parametrize("failure", ["error", "timeout"])
def test_failing_algorithm_is_skipped_for_larger_sizes(tmp_path: Path, monkeypatch, failure: str) -> None:
    if failure == "error":
        def broken(kind, xs, precedes=None, *, config=None):
            raise RuntimeError("boom")

        monkeypatch.setattr(runner, "sort", broken)
        overrides = {}
    else:
        overrides = {"timeout_seconds": 1e-12}

    config = _write_config(
        tmp_path, sizes=[3, 5], algorithms=[{"name": "merge"}], include_reference=False, **overrides
    )
    run_dir = runner.run_experiment(config)
    lines = _read_jsonl(run_dir / "results.jsonl")

    statuses = [line for line in lines if "status" in line]
    assert len(statuses) == 1
    assert statuses[0]["status"] == failure
    assert statuses[0]["n"] == 3
    assert not [line for line in lines if line["n"] == 5], "skipped algorithm must not run at n=5"


def test_run_experiment_missing_keys(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"experiment_name": "x"}), encoding="utf-8")
    with pytest.raises(ValueError, match="Missing required config keys"):
        runner.run_experiment(path)


def test_main_runs_config(tmp_path: Path) -> None:
    runner.main([str(_write_config(tmp_path, sizes=[3])), "--log-level", "WARNING"])
    assert len(list((tmp_path / "runs").iterdir())) == 1

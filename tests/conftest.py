"""
Shared pytest setup.

Inserts the project `src/` onto sys.path so tests run without installing the package.
"""

from __future__ import annotations

import pathlib
import sys

import pytest

_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from sortlab.algorithms.base import AlgorithmKind  # noqa: E402

ALL_KINDS = list(AlgorithmKind)
STABLE_KINDS = [AlgorithmKind.MERGE, AlgorithmKind.INSERTION]

# every concrete implementation: each kind once, plus quick with the simple variant
ALL_VARIANTS = [(kind, None) for kind in ALL_KINDS] + [
    (AlgorithmKind.QUICK, {"use_in_place_quick_sort": False}),
]


@pytest.fixture(params=ALL_VARIANTS, ids=lambda v: v[0].value + ("_simple" if v[1] else ""))
def variant(request):
    """(kind, config) for every implementation behind the dispatcher."""
    return request.param

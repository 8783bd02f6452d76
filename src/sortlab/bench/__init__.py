"""
Benchmark harness: timing (`measure`) and YAML-driven experiments (`runner`).
"""

from .measure import time_sort_call

__all__ = ["time_sort_call"]

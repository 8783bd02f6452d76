"""
Datasets package public API.

    from sortlab.datasets import make_dataset, SUPPORTED_DISTS
"""

from .generators import DEFAULT_RANGE, SUPPORTED_DISTS, make_dataset

__all__ = ["DEFAULT_RANGE", "SUPPORTED_DISTS", "make_dataset"]

"""Algorithms backing the eager stream stages."""

from lazystream.algorithms.sorting import stable_sort, build_sort_key

__all__ = [
    "stable_sort",
    "build_sort_key",
]

"""
lazystream: lazy, composable, re-traversable streams.

A Stream wraps a factory that builds a fresh iterator per traversal, so a
pipeline can be consumed any number of times. Only sorting and reversal
realize their input; they watch process memory pressure while doing so.
"""

from lazystream.config import StreamConfig
from lazystream.algorithms import stable_sort
from lazystream.streams import Stream, MISSING, empty, from_iterable, int_range
from lazystream.memory import MemoryMonitor, MemoryPressureLevel

__version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = [
    "StreamConfig",
    "stable_sort",
    "Stream",
    "MISSING",
    "empty",
    "from_iterable",
    "int_range",
    "MemoryMonitor",
    "MemoryPressureLevel",
]

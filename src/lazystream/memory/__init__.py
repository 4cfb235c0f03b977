"""Memory monitoring and pressure handling for eager stream stages."""

from lazystream.memory.monitor import (
    MemoryMonitor,
    MemoryPressureLevel,
    MemoryInfo,
    MemoryPressureHandler,
    classify_pressure,
    monitor,
)
from lazystream.memory.handlers import LoggingHandler

monitor.add_handler(LoggingHandler())

__all__ = [
    "MemoryMonitor",
    "MemoryPressureLevel",
    "MemoryInfo",
    "MemoryPressureHandler",
    "LoggingHandler",
    "classify_pressure",
    "monitor",
]

"""Memory monitoring and pressure detection."""

import time
import logging
import psutil
from enum import Enum
from typing import List, Optional
from dataclasses import dataclass
from abc import ABC, abstractmethod

from lazystream.config import config

logger = logging.getLogger(__name__)


class MemoryPressureLevel(Enum):
    """Memory pressure levels."""
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    def __gt__(self, other):
        if not isinstance(other, MemoryPressureLevel):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, MemoryPressureLevel):
            return NotImplemented
        return self.value >= other.value


@dataclass
class MemoryInfo:
    """Memory usage information."""
    total: int
    available: int
    used: int
    percent: float
    pressure_level: MemoryPressureLevel
    timestamp: float

    def __str__(self) -> str:
        return (f"Memory: {self.percent:.1f}% used "
                f"({config.format_bytes(self.used)}/{config.format_bytes(self.total)}), "
                f"Pressure: {self.pressure_level.name}")


def classify_pressure(percent: float) -> MemoryPressureLevel:
    """Map a usage percentage onto a pressure level."""
    if percent >= 95:
        return MemoryPressureLevel.CRITICAL
    elif percent >= 85:
        return MemoryPressureLevel.HIGH
    elif percent >= 70:
        return MemoryPressureLevel.MEDIUM
    elif percent >= 50:
        return MemoryPressureLevel.LOW
    return MemoryPressureLevel.NONE


class MemoryPressureHandler(ABC):
    """Abstract base class for memory pressure handlers."""

    @abstractmethod
    def can_handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> bool:
        """Check if this handler should handle the given pressure level."""
        pass

    @abstractmethod
    def handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> None:
        """Handle memory pressure."""
        pass


class MemoryMonitor:
    """Monitor process memory while streams are being materialized."""

    def __init__(self, memory_limit: Optional[int] = None):
        """
        Initialize memory monitor.

        Args:
            memory_limit: Custom memory limit in bytes (None to follow config)
        """
        self._memory_limit = memory_limit
        self.handlers: List[MemoryPressureHandler] = []
        self._history: List[MemoryInfo] = []
        self._max_history = 100

    @property
    def memory_limit(self) -> int:
        return self._memory_limit or config.memory_limit

    def add_handler(self, handler: MemoryPressureHandler) -> None:
        """Add a memory pressure handler."""
        self.handlers.append(handler)

    def remove_handler(self, handler: MemoryPressureHandler) -> None:
        """Remove a memory pressure handler."""
        if handler in self.handlers:
            self.handlers.remove(handler)

    def get_memory_info(self) -> MemoryInfo:
        """Get this process's memory use measured against the memory limit."""
        mem = psutil.virtual_memory()

        # Use configured limit if lower than system memory
        total = min(mem.total, self.memory_limit)
        used = psutil.Process().memory_info().rss
        available = max(0, total - used)
        percent = (used / total) * 100 if total else 100.0

        return MemoryInfo(
            total=total,
            available=available,
            used=used,
            percent=percent,
            pressure_level=classify_pressure(percent),
            timestamp=time.time()
        )

    def check_memory_pressure(self) -> MemoryPressureLevel:
        """Check current memory pressure and notify handlers."""
        info = self.get_memory_info()

        self._history.append(info)
        if len(self._history) > self._max_history:
            self._history.pop(0)

        for handler in self.handlers:
            if handler.can_handle(info.pressure_level, info):
                try:
                    handler.handle(info.pressure_level, info)
                except Exception:
                    # A broken handler must not abort the traversal
                    logger.exception("Memory pressure handler %r failed", handler)

        return info.pressure_level

    @property
    def history(self) -> List[MemoryInfo]:
        return list(self._history)


# Global monitor instance
monitor = MemoryMonitor()

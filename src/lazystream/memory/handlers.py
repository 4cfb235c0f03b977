"""Memory pressure handlers."""

import time
import logging
from typing import Dict, Optional

from lazystream.memory.monitor import (
    MemoryPressureHandler,
    MemoryPressureLevel,
    MemoryInfo
)


class LoggingHandler(MemoryPressureHandler):
    """Log memory pressure seen while materializing a stream."""

    def __init__(self,
                 logger: Optional[logging.Logger] = None,
                 min_level: MemoryPressureLevel = MemoryPressureLevel.MEDIUM,
                 interval: float = 60.0):
        self.logger = logger or logging.getLogger(__name__)
        self.min_level = min_level
        self.interval = interval
        self._last_log: Dict[MemoryPressureLevel, float] = {}

    def can_handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> bool:
        return level >= self.min_level

    def handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> None:
        # Only log once per level per interval
        last_time = self._last_log.get(level)
        now = time.time()
        if last_time is not None and now - last_time < self.interval:
            return

        self._last_log[level] = now

        if level == MemoryPressureLevel.CRITICAL:
            self.logger.critical("CRITICAL memory pressure during materialization: %s", info)
        elif level == MemoryPressureLevel.HIGH:
            self.logger.error("HIGH memory pressure during materialization: %s", info)
        elif level == MemoryPressureLevel.MEDIUM:
            self.logger.warning("MEDIUM memory pressure during materialization: %s", info)
        else:
            self.logger.info("Memory pressure: %s", info)

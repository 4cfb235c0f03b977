"""
Configuration management for lazy stream operations.
"""

from typing import Any, ClassVar, Optional
from dataclasses import dataclass, field
import psutil


@dataclass
class StreamConfig:
    """Global configuration for stream materialization."""

    # Process memory budget for eager stages
    memory_limit: int = field(default_factory=lambda: int(psutil.virtual_memory().total * 0.8))

    # Eager stages check memory pressure every N materialized items
    pressure_check_interval: int = 10_000

    _instance: ClassVar[Optional['StreamConfig']] = None

    @classmethod
    def get_instance(cls) -> 'StreamConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_defaults(cls, **kwargs: Any) -> None:
        """Set default configuration values."""
        instance = cls.get_instance()
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

    def format_bytes(self, num_bytes: float) -> str:
        """Format bytes as human-readable string."""
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if num_bytes < 1024.0:
                return f"{num_bytes:.2f} {unit}"
            num_bytes /= 1024.0
        return f"{num_bytes:.2f} PB"


# Global configuration instance
config = StreamConfig.get_instance()

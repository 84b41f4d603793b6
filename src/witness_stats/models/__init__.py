"""Pydantic models for configuration and statistics snapshots."""

from .config import DatabaseConfig
from .dialect import Dialect
from .statistics import UNKNOWN_STORAGE_SIZE, ResponseCodeCount, StatisticsSnapshot

__all__ = [
    "DatabaseConfig",
    "Dialect",
    "ResponseCodeCount",
    "StatisticsSnapshot",
    "UNKNOWN_STORAGE_SIZE",
]

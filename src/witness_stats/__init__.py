"""
witness_stats - Cross-dialect statistics for screenshot results databases

Computes storage size, row counts and the response code distribution of a
results database on SQLite, MySQL or PostgreSQL.
"""

__version__ = "1.0.0"

from .models.config import DatabaseConfig
from .models.dialect import Dialect
from .models.statistics import UNKNOWN_STORAGE_SIZE, ResponseCodeCount, StatisticsSnapshot
from .adapters import resolve_dialect
from .core import DatabaseConnection, StatisticsQueryError, compute_statistics

__all__ = [
    "DatabaseConfig",
    "DatabaseConnection",
    "Dialect",
    "ResponseCodeCount",
    "StatisticsQueryError",
    "StatisticsSnapshot",
    "UNKNOWN_STORAGE_SIZE",
    "compute_statistics",
    "resolve_dialect",
]

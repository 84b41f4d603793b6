"""Core statistics collection layer."""

from .collector import (
    COUNTED_COLLECTIONS,
    assemble_snapshot,
    compute_statistics,
    count_collections,
    measure_storage_size,
    response_code_distribution,
)
from .connection import DatabaseConnection
from .errors import StatisticsQueryError

__all__ = [
    "COUNTED_COLLECTIONS",
    "DatabaseConnection",
    "StatisticsQueryError",
    "assemble_snapshot",
    "compute_statistics",
    "count_collections",
    "measure_storage_size",
    "response_code_distribution",
]

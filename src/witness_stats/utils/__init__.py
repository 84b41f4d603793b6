"""Utility modules for the statistics server."""

from witness_stats.utils.serialization import dumps, snapshot_to_json

__all__ = [
    "dumps",
    "snapshot_to_json",
]

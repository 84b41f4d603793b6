"""JSON serialization of statistics snapshots using orjson."""

from typing import Any

import orjson

from witness_stats.models.statistics import StatisticsSnapshot


def dumps(obj: Any, indent: bool = False) -> str:
    """
    Serialize object to JSON string using orjson.

    Args:
        obj: Object to serialize
        indent: Pretty-print with two-space indentation

    Returns:
        JSON string
    """
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(obj, option=option).decode("utf-8")


def snapshot_to_json(snapshot: StatisticsSnapshot, indent: bool = False) -> str:
    """
    Encode a snapshot with its wire field names (dbsize, results, ...).

    Args:
        snapshot: Statistics snapshot
        indent: Pretty-print the output

    Returns:
        JSON string
    """
    return dumps(snapshot.model_dump(by_alias=True), indent=indent)

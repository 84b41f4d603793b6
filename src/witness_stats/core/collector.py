"""Statistics collection across database dialects.

Queries fall into two tiers. The storage size query is best-effort: any
failure is logged and reported as ``UNKNOWN_STORAGE_SIZE``. Collection counts
and the response code distribution are essential: the first failure aborts
the whole collection with ``StatisticsQueryError`` and no snapshot is built.
"""

import logging
from contextlib import AsyncExitStack
from typing import Any, Optional, Protocol

from sqlalchemy import column, func, select, table

from witness_stats.adapters import create_adapter, resolve_dialect
from witness_stats.adapters.base import ConnectionType
from witness_stats.core.errors import StatisticsQueryError
from witness_stats.models.dialect import Dialect
from witness_stats.models.statistics import (
    UNKNOWN_STORAGE_SIZE,
    ResponseCodeCount,
    StatisticsSnapshot,
)

logger = logging.getLogger(__name__)

# Counted collections, in query order
COUNTED_COLLECTIONS = ("results", "headers", "network_logs", "console_logs")

RESULTS_TABLE = "results"
RESPONSE_CODE_COLUMN = "response_code"
DISTRIBUTION_QUERY = "distribution"


class StoreHandle(Protocol):
    """Anything that hands out connections like DatabaseConnection."""

    def get_connection(self) -> Any: ...


async def measure_storage_size(
    connection: StoreHandle, dialect: Dialect
) -> Optional[int]:
    """
    Estimate the storage used by the results database.

    Runs on its own connection so a failed catalog query cannot abort the
    transaction the essential queries run in.

    Args:
        connection: Store handle
        dialect: Resolved dialect of the store

    Returns:
        Size in bytes, or None if the dialect is unsupported or the query failed
    """
    adapter = create_adapter(dialect)
    if adapter is None:
        logger.warning("Unsupported database type for storage statistics")
        return None

    try:
        async with connection.get_connection() as conn:
            return await adapter.get_storage_size(conn)
    except Exception as e:
        logger.error(
            f"Failed getting {dialect.value} database size: {e}", exc_info=True
        )
        return None


async def count_collections(conn: ConnectionType) -> dict[str, int]:
    """
    Count the rows of every counted collection.

    Args:
        conn: Open database connection

    Returns:
        Row count per collection name, in COUNTED_COLLECTIONS order

    Raises:
        StatisticsQueryError: On the first failing count
    """
    counts: dict[str, int] = {}

    for name in COUNTED_COLLECTIONS:
        query = select(func.count()).select_from(table(name))
        try:
            result = await conn.execute(query)
            counts[name] = int(result.scalar_one())
        except Exception as e:
            logger.error(f"Failed counting {name}: {e}")
            raise StatisticsQueryError(name, e) from e

    return counts


async def response_code_distribution(
    conn: ConnectionType,
) -> tuple[ResponseCodeCount, ...]:
    """
    Group results by response code and count each group.

    Results without a response code are not part of any group.

    Args:
        conn: Open database connection

    Returns:
        One entry per distinct response code, in backend order

    Raises:
        StatisticsQueryError: If the grouped query fails
    """
    code = column(RESPONSE_CODE_COLUMN)
    query = (
        select(code.label("code"), func.count().label("count"))
        .select_from(table(RESULTS_TABLE))
        .where(code.is_not(None))
        .group_by(code)
    )

    try:
        result = await conn.execute(query)
        rows = result.fetchall()
    except Exception as e:
        logger.error(f"Failed counting response codes: {e}")
        raise StatisticsQueryError(DISTRIBUTION_QUERY, e) from e

    return tuple(ResponseCodeCount(code=int(row[0]), count=int(row[1])) for row in rows)


def assemble_snapshot(
    storage_bytes: Optional[int],
    counts: dict[str, int],
    distribution: tuple[ResponseCodeCount, ...],
) -> StatisticsSnapshot:
    """
    Compose query results into a snapshot.

    Args:
        storage_bytes: Measured size, None if unknown
        counts: Row count per collection name
        distribution: Response code distribution

    Returns:
        Immutable statistics snapshot
    """
    return StatisticsSnapshot(
        storage_bytes=UNKNOWN_STORAGE_SIZE if storage_bytes is None else storage_bytes,
        result_count=counts["results"],
        header_count=counts["headers"],
        network_log_count=counts["network_logs"],
        console_log_count=counts["console_logs"],
        response_code_distribution=distribution,
    )


async def compute_statistics(
    connection: StoreHandle, descriptor: str
) -> StatisticsSnapshot:
    """
    Compute a fresh statistics snapshot of the results database.

    Args:
        connection: Store handle (e.g., DatabaseConnection)
        descriptor: Connection string the store was opened with; only used
            to pick the dialect

    Returns:
        Fully populated snapshot

    Raises:
        StatisticsQueryError: If a count or the distribution query fails, or
            no connection could be opened for them
    """
    dialect = resolve_dialect(descriptor)
    storage_bytes = await measure_storage_size(connection, dialect)

    async with AsyncExitStack() as stack:
        try:
            conn = await stack.enter_async_context(connection.get_connection())
        except Exception as e:
            logger.error(f"Failed opening connection for statistics: {e}")
            raise StatisticsQueryError("connection", e) from e

        counts = await count_collections(conn)
        distribution = await response_code_distribution(conn)

    return assemble_snapshot(storage_bytes, counts, distribution)

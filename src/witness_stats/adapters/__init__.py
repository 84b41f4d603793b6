"""Database adapters for specific database implementations."""

from typing import Optional

from witness_stats.models.dialect import Dialect

from .base import BaseAdapter
from .mysql import MySQLAdapter
from .postgresql import PostgresAdapter
from .sqlite import SQLiteAdapter

__all__ = [
    "ADAPTERS",
    "BaseAdapter",
    "MySQLAdapter",
    "PostgresAdapter",
    "SCHEME_DIALECTS",
    "SQLiteAdapter",
    "create_adapter",
    "resolve_dialect",
]

# Descriptor schemes (before "://" and any "+driver" suffix) per dialect
SCHEME_DIALECTS = {
    "sqlite": Dialect.SQLITE,
    "sqlite3": Dialect.SQLITE,
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MYSQL,  # MariaDB is MySQL-compatible
    "postgres": Dialect.POSTGRESQL,
    "postgresql": Dialect.POSTGRESQL,
}

ADAPTERS: dict[Dialect, type[BaseAdapter]] = {
    Dialect.SQLITE: SQLiteAdapter,
    Dialect.MYSQL: MySQLAdapter,
    Dialect.POSTGRESQL: PostgresAdapter,
}


def resolve_dialect(descriptor: str) -> Dialect:
    """
    Classify a connection descriptor into a dialect family.

    Args:
        descriptor: Connection string/URI (e.g., sqlite://gowitness.sqlite3)

    Returns:
        Matching dialect, or Dialect.UNSUPPORTED for unknown or malformed
        descriptors
    """
    if not isinstance(descriptor, str) or "://" not in descriptor:
        return Dialect.UNSUPPORTED

    scheme = descriptor.strip().split("://", 1)[0]
    # Drop the driver suffix (e.g., "postgresql" from "postgresql+asyncpg")
    scheme = scheme.split("+", 1)[0].lower()

    return SCHEME_DIALECTS.get(scheme, Dialect.UNSUPPORTED)


def create_adapter(dialect: Dialect) -> Optional[BaseAdapter]:
    """
    Factory function to create the adapter for a dialect.

    Args:
        dialect: Resolved dialect

    Returns:
        Database adapter instance, or None for unsupported dialects
    """
    if not dialect.is_supported:
        return None

    return ADAPTERS[dialect]()

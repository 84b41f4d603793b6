"""SQLite adapter for file-backed results databases."""

from typing import Optional

from witness_stats.adapters.base import BaseAdapter
from witness_stats.models.dialect import Dialect


class SQLiteAdapter(BaseAdapter):
    """SQLite adapter using page accounting for storage size."""

    @property
    def dialect(self) -> Dialect:
        return Dialect.SQLITE

    @property
    def size_query(self) -> str:
        """Pages in the main database file times the page size."""
        return (
            "SELECT page_count * page_size AS size "
            "FROM pragma_page_count(), pragma_page_size()"
        )

    @property
    def sync_only(self) -> bool:
        # stdlib sqlite3 driver, run through a thread pool
        return True

    @property
    def version_query(self) -> str:
        return "SELECT sqlite_version()"

    @property
    def readonly_statement(self) -> Optional[str]:
        return "PRAGMA query_only = ON"

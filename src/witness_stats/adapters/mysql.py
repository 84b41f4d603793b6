"""MySQL adapter (MariaDB is handled by the same queries)."""

from typing import Optional

from witness_stats.adapters.base import BaseAdapter
from witness_stats.models.dialect import Dialect


class MySQLAdapter(BaseAdapter):
    """MySQL adapter summing table and index sizes from information_schema."""

    @property
    def dialect(self) -> Dialect:
        return Dialect.MYSQL

    @property
    def size_query(self) -> str:
        """Data plus index length of every table in the active database."""
        return """
            SELECT SUM(data_length + index_length) AS size
            FROM information_schema.tables
            WHERE table_schema = DATABASE()
        """

    @property
    def version_query(self) -> str:
        return "SELECT VERSION()"

    @property
    def readonly_statement(self) -> Optional[str]:
        return "SET SESSION TRANSACTION READ ONLY"

    def timeout_statement(self, timeout: int) -> Optional[str]:
        # max_execution_time is in milliseconds
        return f"SET SESSION max_execution_time = {timeout * 1000}"

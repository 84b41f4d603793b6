"""PostgreSQL adapter."""

from typing import Optional

from witness_stats.adapters.base import BaseAdapter
from witness_stats.models.dialect import Dialect


class PostgresAdapter(BaseAdapter):
    """PostgreSQL adapter summing relation sizes from the catalog."""

    @property
    def dialect(self) -> Dialect:
        return Dialect.POSTGRESQL

    @property
    def size_query(self) -> str:
        """
        Total relation size (heap, indexes, TOAST) of every table in the
        active schema.
        """
        return """
            SELECT SUM(
                pg_total_relation_size(
                    quote_ident(schemaname) || '.' || quote_ident(tablename)
                )
            ) AS size
            FROM pg_tables
            WHERE schemaname = current_schema()
        """

    @property
    def readonly_statement(self) -> Optional[str]:
        return "SET SESSION CHARACTERISTICS AS TRANSACTION READ ONLY"

    def timeout_statement(self, timeout: int) -> Optional[str]:
        return f"SET statement_timeout = {timeout * 1000}"

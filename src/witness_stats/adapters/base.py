"""Base adapter abstract class for database-specific implementations."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Union

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection

from witness_stats.models.dialect import Dialect

if TYPE_CHECKING:
    from witness_stats.core.connection import AsyncConnectionWrapper

# Type alias for connection types
ConnectionType = Union[AsyncConnection, "AsyncConnectionWrapper"]


class BaseAdapter(ABC):
    """Base adapter defining database-specific interface."""

    @property
    @abstractmethod
    def dialect(self) -> Dialect:
        """Dialect family handled by this adapter."""
        ...

    @property
    @abstractmethod
    def size_query(self) -> str:
        """
        Scalar query estimating the storage used by the results database.

        Returns:
            SQL returning a single row with a single byte count (or NULL)
        """
        ...

    @property
    def sync_only(self) -> bool:
        """Whether the dialect runs on a sync driver wrapped for async use."""
        return False

    @property
    def version_query(self) -> str:
        return "SELECT version()"

    @property
    def readonly_statement(self) -> Optional[str]:
        """Statement switching a session to read-only mode, if the dialect has one."""
        return None

    def timeout_statement(self, timeout: int) -> Optional[str]:
        """
        Statement applying a per-session statement timeout.

        Args:
            timeout: Timeout in seconds

        Returns:
            SQL statement, or None if the dialect has no session timeout
        """
        return None

    async def get_storage_size(self, conn: ConnectionType) -> int:
        """
        Run the size query and return the byte count.

        Args:
            conn: Database connection

        Returns:
            Storage size in bytes (0 when the catalog reports nothing)

        Raises:
            Any driver error raised by the query
        """
        result = await conn.execute(text(self.size_query))
        row = result.fetchone()

        if row is None or row[0] is None:
            return 0

        # MySQL and PostgreSQL return SUM() as Decimal
        return int(row[0])

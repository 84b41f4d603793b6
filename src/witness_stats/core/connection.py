"""Database connection management with SQLAlchemy."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional, Union

from sqlalchemy import Connection, Engine, create_engine, text
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from witness_stats.adapters import BaseAdapter, create_adapter
from witness_stats.models.config import DatabaseConfig
from witness_stats.models.dialect import Dialect


class AsyncConnectionWrapper:
    """Wrapper to make sync connections work in async context."""

    def __init__(self, sync_conn: Connection):
        """Initialize with a sync connection."""
        self.sync_conn = sync_conn
        self._executor = None

    async def execute(self, statement):
        """Execute statement in thread pool."""
        # Wrap string statements in text() for proper execution
        if isinstance(statement, str):
            statement = text(statement)

        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            self._executor, self.sync_conn.execute, statement
        )

    def close(self):
        """Close the sync connection."""
        self.sync_conn.close()


class DatabaseConnection:
    """Manages the SQLAlchemy engine and connection pool for the results database."""

    def __init__(self, config: DatabaseConfig):
        """
        Initialize database connection.

        Args:
            config: Database configuration with connection descriptor and pool settings
        """
        self.config = config
        self.engine: Optional[AsyncEngine] = None
        self.sync_engine: Optional[Engine] = None
        self._dialect = config.dialect
        self._driver = config.driver
        self._url = config.sqlalchemy_url
        # Guaranteed non-None: DatabaseConfig rejects unsupported descriptors
        self.adapter: BaseAdapter = create_adapter(self._dialect)  # type: ignore[assignment]
        self._is_sync_only = self.adapter.sync_only

    async def initialize(self) -> None:
        """Initialize the async or sync engine based on driver requirements."""
        if self.engine is not None or self.sync_engine is not None:
            return  # Already initialized

        if self._is_sync_only:
            # Statements execute on pool threads, not the connecting thread
            self.sync_engine = create_engine(
                self._url,
                connect_args={"check_same_thread": False},
                echo=self.config.echo_sql,
            )
            return

        # Extract SSL configuration from URL for asyncpg
        connect_args = {}
        if self._dialect == Dialect.POSTGRESQL and self._driver == "asyncpg":
            url_obj = make_url(self._url)

            if url_obj.query:
                # asyncpg expects 'ssl' parameter in connect_args, not in URL
                if "sslmode" in url_obj.query:
                    sslmode = url_obj.query["sslmode"]
                    if sslmode in ["require", "prefer", "allow"]:
                        connect_args["ssl"] = sslmode
                    elif sslmode == "disable":
                        connect_args["ssl"] = False
                    # Remove sslmode from URL query to avoid "unexpected keyword" error
                    url_obj = url_obj.difference_update_query(["sslmode"])
                    self._url = url_obj.render_as_string(hide_password=False)

        self.engine = create_async_engine(
            self._url,
            pool_size=self.config.pool_size,
            max_overflow=self.config.max_overflow,
            pool_timeout=self.config.pool_timeout,
            pool_pre_ping=True,  # Verify connections before using
            echo=self.config.echo_sql,
            connect_args=connect_args,
        )

    async def dispose(self) -> None:
        """Dispose of the connection pool and cleanup resources."""
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
        if self.sync_engine is not None:
            self.sync_engine.dispose()
            self.sync_engine = None

    @asynccontextmanager
    async def get_connection(
        self,
    ) -> AsyncGenerator[Union[AsyncConnection, AsyncConnectionWrapper], None]:
        """
        Get a connection from the pool as an async context manager.

        Yields:
            AsyncConnection or AsyncConnectionWrapper for executing queries

        Raises:
            RuntimeError: If engine not initialized
        """
        if self._is_sync_only:
            if self.sync_engine is None:
                raise RuntimeError(
                    "DatabaseConnection not initialized. Call initialize() first."
                )

            wrapper = AsyncConnectionWrapper(self.sync_engine.connect())

            try:
                await self._prepare_session(wrapper)
                yield wrapper
            finally:
                wrapper.close()
        else:
            if self.engine is None:
                raise RuntimeError(
                    "DatabaseConnection not initialized. Call initialize() first."
                )

            async with self.engine.connect() as conn:
                await self._prepare_session(conn)
                yield conn

    async def _prepare_session(
        self, conn: Union[AsyncConnection, AsyncConnectionWrapper]
    ) -> None:
        """Apply read-only mode and statement timeout if configured."""
        if self.config.read_only and self.adapter.readonly_statement:
            await conn.execute(text(self.adapter.readonly_statement))

        if self.config.statement_timeout:
            statement = self.adapter.timeout_statement(self.config.statement_timeout)
            if statement:
                await conn.execute(text(statement))

    @property
    def dialect(self) -> Dialect:
        """Get database dialect."""
        return self._dialect

    @property
    def driver(self) -> str:
        """Get database driver name."""
        return self._driver

    @property
    def is_initialized(self) -> bool:
        """Check if engine is initialized."""
        return self.engine is not None or self.sync_engine is not None

    async def test_connection(self) -> bool:
        """
        Test database connectivity.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            async with self.get_connection() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            return False

    async def get_version(self) -> str:
        """
        Get database version string.

        Returns:
            Database version string
        """
        async with self.get_connection() as conn:
            result = await conn.execute(text(self.adapter.version_query))
            row = result.fetchone()
            return str(row[0]) if row else "Unknown"

    async def __aenter__(self) -> "DatabaseConnection":
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.dispose()

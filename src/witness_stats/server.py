"""Results database statistics MCP server

A Model Context Protocol (MCP) server exposing storage and content statistics
of a screenshot results database on SQLite, MySQL or PostgreSQL.
"""

import asyncio
import logging
import os
from typing import Any

from dotenv import load_dotenv
from mcp.server import Server
from mcp.types import TextContent, Tool

from witness_stats.core import (
    DatabaseConnection,
    StatisticsQueryError,
    compute_statistics,
)
from witness_stats.models.config import DatabaseConfig
from witness_stats.utils import snapshot_to_json

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class StatisticsMCPServer:
    """MCP server answering statistics requests for one results database."""

    def __init__(self, config: DatabaseConfig):
        """
        Initialize statistics MCP server.

        Args:
            config: Database configuration
        """
        self.config = config
        self.connection = DatabaseConnection(config)
        self.server = Server("witness-stats")

    async def initialize(self) -> None:
        """Initialize the connection pool and register tool handlers."""
        await self.connection.initialize()
        self._register_tools()

        logger.info(f"Initialized {self.config.dialect.value} statistics server")

    def _register_tools(self) -> None:
        """Register MCP list/call handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            return [self._create_get_statistics_tool()]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            return await self.dispatch(name, arguments)

    async def dispatch(self, name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Route a tool call to its handler."""
        handlers = {
            "get_statistics": self.handle_get_statistics,
        }

        handler = handlers.get(name)
        if handler is None:
            raise ValueError(f"Unknown tool: {name}")

        return await handler(arguments)

    def _create_get_statistics_tool(self) -> Tool:
        """Create get_statistics tool."""
        return Tool(
            name="get_statistics",
            description=(
                "Get database statistics: storage size, result/header/network log/"
                "console log counts and the response code distribution"
            ),
            inputSchema={
                "type": "object",
                "properties": {},
                "required": [],
            },
        )

    async def handle_get_statistics(
        self, arguments: dict[str, Any]
    ) -> list[TextContent]:
        """Handle get_statistics request."""
        try:
            snapshot = await compute_statistics(self.connection, self.config.url)
        except StatisticsQueryError as e:
            logger.error(f"Statistics unavailable, '{e.query}' query failed")
            raise

        logger.info(
            f"Collected statistics: {snapshot.result_count} results, "
            f"storage {snapshot.storage_human or 'unknown'}"
        )
        return [TextContent(type="text", text=snapshot_to_json(snapshot, indent=True))]

    async def cleanup(self) -> None:
        """Cleanup resources."""
        await self.connection.dispose()
        logger.info("Statistics MCP server cleaned up")


async def main() -> None:
    """Main entry point for the MCP server."""
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise ValueError("DATABASE_URL environment variable must be set")

    config = DatabaseConfig(url=database_url)
    mcp_server = StatisticsMCPServer(config)

    try:
        await mcp_server.initialize()

        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            await mcp_server.server.run(
                read_stream,
                write_stream,
                mcp_server.server.create_initialization_options(),
            )

    finally:
        await mcp_server.cleanup()


def cli_entry() -> None:
    """
    Synchronous entry point for console script.

    This function is called by the 'witness-stats' console script.
    """
    # Windows-specific event loop policy
    if os.name == "nt":
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())  # type: ignore[attr-defined]

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    cli_entry()

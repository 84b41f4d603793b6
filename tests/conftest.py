"""Pytest configuration and shared fixtures for statistics tests"""

from pathlib import Path
from typing import AsyncGenerator, Callable, Iterable, Optional

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine

from witness_stats.core import DatabaseConnection
from witness_stats.models.config import DatabaseConfig


# ==================== Results Database Helpers ====================


def build_metadata(
    skip_tables: Iterable[str] = (), with_response_code: bool = True
) -> MetaData:
    """Results database schema as the screenshot tool creates it."""
    metadata = MetaData()
    skip = set(skip_tables)

    if "results" not in skip:
        columns = [
            Column("id", Integer, primary_key=True),
            Column("url", String),
        ]
        if with_response_code:
            columns.append(Column("response_code", Integer))
        Table("results", metadata, *columns)

    if "headers" not in skip:
        Table(
            "headers",
            metadata,
            Column("id", Integer, primary_key=True),
            Column("result_id", Integer),
            Column("key", String),
            Column("value", String),
        )

    if "network_logs" not in skip:
        Table(
            "network_logs",
            metadata,
            Column("id", Integer, primary_key=True),
            Column("result_id", Integer),
            Column("url", String),
            Column("status_code", Integer),
        )

    if "console_logs" not in skip:
        Table(
            "console_logs",
            metadata,
            Column("id", Integer, primary_key=True),
            Column("result_id", Integer),
            Column("type", String),
            Column("value", String),
        )

    return metadata


def seed_results_db(
    path: Path,
    response_codes: Iterable[Optional[int]] = (200, 200, 404),
    headers: int = 5,
    network_logs: int = 0,
    console_logs: int = 2,
    skip_tables: Iterable[str] = (),
    with_response_code: bool = True,
) -> Path:
    """Create and populate a SQLite results database file."""
    metadata = build_metadata(skip_tables, with_response_code)
    engine = create_engine(f"sqlite:///{path}")
    metadata.create_all(engine)

    tables = metadata.tables
    with engine.begin() as conn:
        if "results" in tables:
            rows = []
            for i, code in enumerate(response_codes, start=1):
                row = {"id": i, "url": f"https://host{i}.example"}
                if with_response_code:
                    row["response_code"] = code
                rows.append(row)
            if rows:
                conn.execute(tables["results"].insert(), rows)
        if "headers" in tables and headers:
            conn.execute(
                tables["headers"].insert(),
                [
                    {"result_id": 1, "key": f"X-Header-{i}", "value": "v"}
                    for i in range(headers)
                ],
            )
        if "network_logs" in tables and network_logs:
            conn.execute(
                tables["network_logs"].insert(),
                [
                    {"result_id": 1, "url": f"https://cdn.example/{i}.js", "status_code": 200}
                    for i in range(network_logs)
                ],
            )
        if "console_logs" in tables and console_logs:
            conn.execute(
                tables["console_logs"].insert(),
                [
                    {"result_id": 1, "type": "console.log", "value": f"message {i}"}
                    for i in range(console_logs)
                ],
            )

    engine.dispose()
    return path


# ==================== SQLite Fixtures ====================


@pytest.fixture
def results_db_path(tmp_path: Path) -> Path:
    """Results database with 3 results (200, 200, 404), 5 headers, 0 network logs, 2 console logs"""
    return seed_results_db(tmp_path / "gowitness.sqlite3")


@pytest.fixture
def make_results_db(tmp_path: Path) -> Callable[..., Path]:
    """Factory seeding a named results database under tmp_path"""

    def _make(name: str, **kwargs) -> Path:
        return seed_results_db(tmp_path / name, **kwargs)

    return _make


@pytest.fixture
def sqlite_config(results_db_path: Path) -> DatabaseConfig:
    """SQLite database configuration"""
    return DatabaseConfig(url=f"sqlite://{results_db_path}")


@pytest.fixture
async def sqlite_connection(
    sqlite_config: DatabaseConfig,
) -> AsyncGenerator[DatabaseConnection, None]:
    """SQLite database connection with proper cleanup"""
    connection = DatabaseConnection(sqlite_config)
    await connection.initialize()
    try:
        yield connection
    finally:
        await connection.dispose()


# ==================== Pytest Configuration ====================


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "sqlite: Tests against a real SQLite database")
    config.addinivalue_line("markers", "integration: Tests exercising the MCP server")

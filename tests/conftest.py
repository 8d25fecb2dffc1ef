"""Pytest configuration and shared fixtures."""

from typing import Any, Optional, Sequence
from unittest.mock import Mock

import pytest


def make_cursor(
    columns: Optional[Sequence[str]] = None,
    rows: Optional[Sequence[tuple]] = None,
    rowcount: int = -1,
) -> Mock:
    """Build a DB-API cursor double that serves the given rows."""
    rows = list(rows or [])
    cursor = Mock()
    cursor.description = [(name,) for name in columns] if columns else None
    cursor.rowcount = rowcount
    remaining = iter(rows)
    cursor.fetchone.side_effect = lambda: next(remaining, None)
    cursor.fetchall.side_effect = lambda: list(remaining)
    return cursor


def make_connection(*cursors: Mock) -> Mock:
    """Build a connection double handing out the given cursors in order."""
    connection = Mock()
    connection.cursor.side_effect = list(cursors)
    return connection


@pytest.fixture
def cursor_factory():
    """Factory for cursor doubles: cursor_factory(columns, rows, rowcount)."""
    return make_cursor


@pytest.fixture
def connection_factory():
    """Factory for connection doubles: connection_factory(*cursors)."""
    return make_connection


@pytest.fixture
def users_cursor() -> Mock:
    """Cursor over two rows of a users table."""
    return make_cursor(
        columns=["id", "name", "email"],
        rows=[(1, "jv", "jv@example.com"), (2, "ann", "ann@example.com")],
        rowcount=2,
    )


@pytest.fixture
def empty_cursor() -> Mock:
    """Cursor over a result with columns but no rows."""
    return make_cursor(columns=["id", "name"], rows=[], rowcount=0)


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary connections.toml for testing."""
    config_content = """
[default]
host = "localhost"
port = 5432
dbname = "app"
user = "app_user"

[dev]
host = "dev-db.internal"
port = 6543
dbname = "app_dev"
user = "dev_user"
password = "dev-secret"
sslmode = "require"

[prod]
host = "prod-db.internal"
dbname = "app"
user = "prod_user"
password_env = "PGFLUENT_TEST_PROD_PASSWORD"
"""
    config_path = tmp_path / "connections.toml"
    config_path.write_text(config_content)
    return config_path


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: tests that need a live PostgreSQL database")

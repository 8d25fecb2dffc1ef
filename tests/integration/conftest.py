"""Pytest configuration and shared fixtures for integration tests."""

import sys
import uuid
from typing import Any, Dict, Iterator

# Use tomllib for Python 3.11+, fallback to tomli for older versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import pytest

from pgfluent.config import CONF_DIR
from pgfluent.context import PostgresContext


def _load_test_config() -> Dict[str, Any]:
    """Load the [test] section of CONF_DIR/test_config.toml, or {} if absent."""
    test_config_path = CONF_DIR / "test_config.toml"
    if not test_config_path.exists():
        return {}
    with open(test_config_path, "rb") as f:
        return tomllib.load(f).get("test", {})


_TEST_CONFIG = _load_test_config()


def pytest_collection_modifyitems(config, items):
    if _TEST_CONFIG.get("profile"):
        return
    skip = pytest.mark.skip(
        reason=f"No [test] profile configured in {CONF_DIR / 'test_config.toml'}"
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def test_profile() -> str:
    """Profile to use for integration tests."""
    return _TEST_CONFIG["profile"]


@pytest.fixture(scope="class")
def ctx(test_profile) -> Iterator[PostgresContext]:
    """One connection shared by every test in a class."""
    context = PostgresContext(profile=test_profile)
    yield context
    context.close()


@pytest.fixture
def users_table(ctx) -> Iterator[str]:
    """A scratch users table, dropped afterwards."""
    name = f"pgfluent_users_{uuid.uuid4().hex[:8]}"
    with ctx.cursor() as cur:
        cur.execute(
            f"CREATE TABLE {name} ("
            "id serial PRIMARY KEY, name text NOT NULL, email text, "
            "team text, settings jsonb)"
        )
    yield name
    with ctx.cursor() as cur:
        cur.execute(f"DROP TABLE IF EXISTS {name}")

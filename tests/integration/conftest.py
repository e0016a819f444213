import os
import uuid
from collections.abc import Generator

import psycopg
import pytest

from resumind.config.settings import Settings
from resumind.storage.connection import (
    close_pool,
    conninfo,
    ensure_schema,
    get_connection,
    init_pool,
)


def _test_settings() -> Settings:
    return Settings(db_database=os.environ.get("DB_DATABASE", "resumind_test"))


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        psycopg.connect(conninfo(test_settings), connect_timeout=3).close()
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    init_pool(test_settings)
    try:
        ensure_schema()
        yield
    finally:
        close_pool()


@pytest.fixture
def key_prefix(integration_pool: None) -> Generator[str, None, None]:
    """A unique prefix per test; every key starting with its stem is removed afterwards."""
    prefix = f"test-{uuid.uuid4().hex[:8]}:"
    yield prefix
    with get_connection() as conn:
        conn.execute("DELETE FROM kv_records WHERE key LIKE %s", (f"{prefix[:-1]}%",))
        conn.commit()

import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from legalscan.config.settings import Settings
from legalscan.database.connection import build_conninfo, close_pool, get_connection, init_pool

_CREATE_LEGAL_DOCUMENTS = """
CREATE TABLE IF NOT EXISTS legal_documents (
    id SERIAL PRIMARY KEY,
    original_name TEXT,
    text TEXT NOT NULL,
    structured_data JSONB NOT NULL,
    format VARCHAR(8) NOT NULL DEFAULT 'JSON',
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "legalscan_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        with psycopg.connect(build_conninfo(test_settings), connect_timeout=3) as conn:
            conn.execute(_CREATE_LEGAL_DOCUMENTS)
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at one")
    init_pool(test_settings)
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    cleanup: list[int] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for record_id in cleanup:
                cur.execute("DELETE FROM legal_documents WHERE id = %s", (record_id,))
        conn.commit()

import logging
import os

import filelock
import psycopg
import pytest

from stwindow.db_handler.postgres import PostgresDBHandler

logger = logging.getLogger("STWindow")

TEST_TABLE = "stwindow_test_points"


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: tests that need a running PostgreSQL/PostGIS server")


def _conn_params() -> dict:
    return {
        "host": os.getenv("PG_HOST", "localhost"),
        "port": int(os.getenv("PG_PORT", "5432")),
        "user": os.getenv("PG_USER", "integration_user"),
        "password": os.getenv("PG_PASSWORD", "test_password"),
        "dbname": os.getenv("PG_DBNAME", "stwindow_integration"),
    }


@pytest.fixture(scope="session")
def db_connection(tmp_path_factory):
    """
    Session-scoped database connection fixture.
    Enables PostGIS once; a file lock keeps parallel pytest-xdist workers from racing.
    """
    conn_params = _conn_params()
    lock_path = tmp_path_factory.getbasetemp().parent / "db_setup.lock"

    with filelock.FileLock(str(lock_path)):
        try:
            with psycopg.connect(**conn_params, connect_timeout=10, autocommit=True) as conn_setup:
                with conn_setup.cursor() as cur:
                    cur.execute("CREATE EXTENSION IF NOT EXISTS postgis;")
                    cur.execute("CREATE EXTENSION IF NOT EXISTS btree_gist;")
        except Exception as e:
            pytest.skip(f"PostGIS database not available: {e}")

    conn = psycopg.connect(**conn_params, connect_timeout=10, autocommit=True)
    yield conn
    conn.close()


@pytest.fixture
def pg_handler(db_connection, worker_table):
    """PostgresDBHandler on an empty point table, dropped again after the test."""
    params = _conn_params()
    handler = PostgresDBHandler(
        host=params["host"],
        port=params["port"],
        user=params["user"],
        password=params["password"],
        dbname=params["dbname"],
        table=worker_table,
    )
    handler.create_point_table(replace=True)
    try:
        yield handler
    finally:
        try:
            with db_connection.cursor() as cur:
                cur.execute(f"DROP TABLE IF EXISTS {worker_table} CASCADE;")
        except Exception as e:
            logger.warning(f"Failed to drop {worker_table}: {e}")
        handler.close()


@pytest.fixture
def worker_table(request):
    """Table name unique per xdist worker."""
    worker = getattr(request.config, "workerinput", {}).get("workerid", "main")
    return f"{TEST_TABLE}_{worker}"

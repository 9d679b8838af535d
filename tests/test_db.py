import sqlite3

import pytest

from wellbeing_api.app.core.db import (
    ConnectionPool,
    get_database_path,
    init_db,
    translate_store_error,
)
from wellbeing_api.app.core.exceptions import ConflictError, StoreError


@pytest.fixture
def pool(tmp_path):
    p = ConnectionPool(str(tmp_path / "pool.db"), max_size=2)
    yield p
    p.close()


def test_database_path_accepts_sqlite_urls(tmp_path):
    target = tmp_path / "x.db"
    assert get_database_path(f"sqlite:///{target}?ssl-mode=REQUIRED") == str(target)
    assert get_database_path(str(target)) == str(target)
    assert get_database_path(":memory:") == ":memory:"


def test_unique_violation_translates_to_conflict():
    assert isinstance(
        translate_store_error(sqlite3.IntegrityError("UNIQUE constraint failed: users.email")),
        ConflictError,
    )


def test_other_errors_translate_to_store_error():
    err = translate_store_error(sqlite3.OperationalError("no such table: nope"))
    assert isinstance(err, StoreError)
    assert err.detail == "no such table: nope"
    assert err.status_code == 500


def test_block_is_rolled_back_on_error(pool):
    init_db(pool)
    with pytest.raises(RuntimeError):
        with pool.connection() as conn:
            conn.execute(
                "INSERT INTO users (role, name, email, password_hash) VALUES ('student', 'A', 'a@x', 'h')"
            )
            raise RuntimeError("boom")
    with pool.connection() as conn:
        assert conn.execute("SELECT COUNT(*) AS n FROM users").fetchone()["n"] == 0


def test_duplicate_insert_raises_conflict(pool):
    init_db(pool)
    insert = "INSERT INTO users (role, name, email, password_hash) VALUES ('student', 'A', 'a@x', 'h')"
    with pool.connection() as conn:
        conn.execute(insert)
    with pytest.raises(ConflictError):
        with pool.connection() as conn:
            conn.execute(insert)


def test_connections_are_reused(pool):
    with pool.connection() as first:
        pass
    with pool.connection() as second:
        pass
    assert first is second


def test_init_db_is_idempotent(pool):
    init_db(pool)
    init_db(pool)
    with pool.connection() as conn:
        versions = [r["version"] for r in conn.execute("SELECT version FROM migrations ORDER BY version")]
    assert versions == [1, 2]

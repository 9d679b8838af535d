"""
SQLite store integration, connection pool and migration system.

This module provides the ``ConnectionPool`` used by every service, the
translation of native ``sqlite3`` errors into the API's exception
types, ``init_db`` which applies schema migrations, and the
``get_pool`` dependency for FastAPI routes.

The pool is created by ``create_app`` and lives on ``app.state``; it is
never a module-level singleton, so tests and embedding code can run
several apps against different databases in the same process.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import queue
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request

from .exceptions import ConflictError, StoreError, WellbeingAPIException

logger = logging.getLogger(__name__)

SQLITE_URL_PREFIX = "sqlite:///"


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Accepts a plain path or a ``sqlite:///`` URL.  Query parameters
    (hosted providers like to append ``ssl-mode=REQUIRED``) are
    dropped.  Relative paths are resolved against the current working
    directory; ``:memory:`` is returned unchanged.
    """
    db_url = database_url
    if db_url.startswith(SQLITE_URL_PREFIX):
        db_url = db_url[len(SQLITE_URL_PREFIX):]
    db_url = db_url.split("?", 1)[0]
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    return str((Path.cwd() / db_url).resolve())


def translate_store_error(exc: sqlite3.Error) -> WellbeingAPIException:
    """Map a native store error to the API's exception taxonomy.

    Uniqueness violations become ``ConflictError``; everything else
    (foreign key violations included) becomes ``StoreError`` carrying
    the store's own message.
    """
    if isinstance(exc, sqlite3.IntegrityError) and "UNIQUE constraint failed" in str(exc):
        return ConflictError()
    return StoreError(str(exc))


class ConnectionPool:
    """A small bounded pool of SQLite connections.

    At most ``max_size`` connections are handed out at once; further
    callers block in ``connection()`` until one is returned.
    Connections are opened lazily and reused.
    """

    def __init__(self, database_path: str, max_size: int = 5):
        if max_size < 1:
            raise ValueError("Pool size must be at least 1")
        self.database_path = database_path
        self.max_size = max_size
        self._idle: "queue.LifoQueue[sqlite3.Connection]" = queue.LifoQueue()
        self._slots = threading.BoundedSemaphore(max_size)
        self._all: list[sqlite3.Connection] = []
        self._lock = threading.Lock()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path, check_same_thread=False)
        # Return rows as dict-like objects keyed by column name
        conn.row_factory = sqlite3.Row
        # Foreign key support is off by default in SQLite and must be
        # enabled per connection.
        conn.execute("PRAGMA foreign_keys = ON")
        with self._lock:
            self._all.append(conn)
        return conn

    def _checkout(self) -> sqlite3.Connection:
        try:
            return self._idle.get_nowait()
        except queue.Empty:
            return self._connect()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Borrow a connection for one unit of work.

        Everything executed inside the ``with`` block is a single
        transaction: it is committed when the block exits normally and
        rolled back when it raises.  Native store errors are re-raised
        as ``ConflictError`` or ``StoreError``.
        """
        self._slots.acquire()
        try:
            try:
                conn = self._checkout()
            except sqlite3.Error as exc:
                raise translate_store_error(exc) from exc
            try:
                yield conn
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                raise translate_store_error(exc) from exc
            except BaseException:
                conn.rollback()
                raise
            finally:
                self._idle.put(conn)
        finally:
            self._slots.release()

    def close(self) -> None:
        """Close every connection the pool has opened."""
        with self._lock:
            conns, self._all = self._all, []
        while True:
            try:
                self._idle.get_nowait()
            except queue.Empty:
                break
        for conn in conns:
            conn.close()


def placeholders(count: int) -> str:
    """Return ``?, ?, ...`` for an ``IN (...)`` clause with ``count`` items."""
    return ", ".join("?" for _ in range(count))


def get_pool(request: Request) -> ConnectionPool:
    """FastAPI dependency returning the application's connection pool."""
    return request.app.state.pool


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            role TEXT NOT NULL CHECK (role IN ('tutor', 'student')),
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS "groups" (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            code TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            tutor_id INTEGER NOT NULL,
            term TEXT NOT NULL DEFAULT '2024',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(tutor_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS group_members (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            group_id INTEGER NOT NULL,
            student_id INTEGER NOT NULL,
            term TEXT NOT NULL DEFAULT '2024',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(group_id, student_id, term),
            FOREIGN KEY(group_id) REFERENCES "groups"(id),
            FOREIGN KEY(student_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS mood_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            student_id INTEGER NOT NULL,
            logged_date TEXT NOT NULL,
            mood TEXT NOT NULL,
            note TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(student_id, logged_date),
            FOREIGN KEY(student_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS weekly_perceptions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            student_id INTEGER NOT NULL,
            subject TEXT NOT NULL,
            week_start TEXT NOT NULL,
            emotion TEXT NOT NULL,
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(student_id, subject, week_start),
            FOREIGN KEY(student_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS justifications (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            student_id INTEGER NOT NULL,
            group_id INTEGER NOT NULL,
            type TEXT NOT NULL,
            evidence_url TEXT,
            status TEXT NOT NULL DEFAULT 'pending',
            reviewer_id INTEGER,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            resolved_at TIMESTAMP,
            FOREIGN KEY(student_id) REFERENCES users(id),
            FOREIGN KEY(group_id) REFERENCES "groups"(id),
            FOREIGN KEY(reviewer_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS alerts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            student_id INTEGER NOT NULL,
            type TEXT NOT NULL,
            severity TEXT NOT NULL,
            message TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(student_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS messages (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            from_user_id INTEGER NOT NULL,
            to_user_id INTEGER,
            group_id INTEGER,
            body TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(from_user_id) REFERENCES users(id),
            FOREIGN KEY(to_user_id) REFERENCES users(id),
            FOREIGN KEY(group_id) REFERENCES "groups"(id)
        );
        """,
    ),
    # Migration 2: lookup indices for the per-student and per-tutor listings
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_groups_tutor_id ON "groups"(tutor_id);
        CREATE INDEX IF NOT EXISTS idx_group_members_student_id ON group_members(student_id);
        CREATE INDEX IF NOT EXISTS idx_justifications_student_id ON justifications(student_id);
        CREATE INDEX IF NOT EXISTS idx_alerts_student_id ON alerts(student_id);
        CREATE INDEX IF NOT EXISTS idx_messages_group_id ON messages(group_id);
        CREATE INDEX IF NOT EXISTS idx_messages_pair ON messages(from_user_id, to_user_id);
        """,
    ),
]


def init_db(pool: ConnectionPool) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number.
    """
    with pool.connection() as conn:
        conn.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                conn.executescript(sql)
                conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                logger.info("Applied migration %s", version)
                current_version = version

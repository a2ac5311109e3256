"""
Async database access helpers (raw SQL) using aiosqlite.

This module owns the SQLite connection. FastAPI opens it on startup and
closes it on shutdown (see `api/main.py`); handlers receive it through the
`get_store` dependency instead of reaching for a module global.

SQL parameter style:
- sqlite uses positional placeholders: ?, ?, ?, ...
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Sequence
from urllib.parse import quote

import aiosqlite
from fastapi import Request

DEFAULT_DATABASE_PATH = Path(__file__).resolve().parents[2] / "db" / "stpaul_crime.sqlite3"

logger = logging.getLogger(__name__)


# Raised when a query is attempted while no connection is open.
class StoreUnavailableError(RuntimeError):
    pass


def database_path() -> str:
    return os.environ.get("DATABASE_PATH", "").strip() or str(DEFAULT_DATABASE_PATH)


def _read_write_uri(path: str) -> str:
    # mode=rw refuses to create a missing file.
    return f"file:{quote(Path(path).as_posix())}?mode=rw"


class Store:
    """
    Thin wrapper around one aiosqlite connection.

    A Store whose connection failed to open stays usable as an object; every
    query on it raises StoreUnavailableError.
    """

    def __init__(self, conn: aiosqlite.Connection | None = None) -> None:
        self._conn = conn

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StoreUnavailableError("Database is not open.")
        return self._conn

    async def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with self._connection().execute(sql, tuple(params)) as cursor:
            row = await cursor.fetchone()
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self._connection().execute(sql, tuple(params)) as cursor:
            rows = await cursor.fetchall()
        return [dict(r) for r in rows]

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """
        Run a statement (INSERT/DELETE) and commit it. Returns the affected row count.
        """
        conn = self._connection()
        async with conn.execute(sql, tuple(params)) as cursor:
            affected = cursor.rowcount
        await conn.commit()
        return affected

    async def close(self) -> None:
        if self._conn is None:
            return None
        await self._conn.close()
        self._conn = None


async def open_store(path: str | None = None) -> Store:
    """
    Open the database file in read-write mode.

    A failure is logged and yields a closed Store so the process can still start.
    """
    path = path or database_path()
    try:
        conn = await aiosqlite.connect(_read_write_uri(path), uri=True)
    except aiosqlite.Error:
        logger.exception("database_open_failed path=%s", path)
        return Store()

    conn.row_factory = aiosqlite.Row
    logger.info("database_connected file=%s", Path(path).name)
    return Store(conn)


def get_store(request: Request) -> Store:
    store = getattr(request.app.state, "store", None)
    if store is None:
        return Store()
    return store

"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Multi-statement writes run inside `transaction()`; the helpers below accept
the yielded connection through `conn=` so the same SQL works in and out of a
transaction.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .config import env_float, env_int, env_str

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = env_str("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=env_int("DB_POOL_MIN_SIZE", 1),
        max_size=env_int("DB_POOL_MAX_SIZE", 5),
        command_timeout=env_float("DB_COMMAND_TIMEOUT_S", 30.0),
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _executor(conn: asyncpg.Connection | None) -> asyncpg.Pool | asyncpg.Connection:
    return conn if conn is not None else pool()


@asynccontextmanager
async def transaction() -> AsyncIterator[asyncpg.Connection]:
    async with pool().acquire() as conn:
        async with conn.transaction():
            yield conn


async def fetch_one(sql: str, *args: Any, conn: asyncpg.Connection | None = None) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await _executor(conn).fetchrow(sql, *args)
    return dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any, conn: asyncpg.Connection | None = None) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await _executor(conn).fetch(sql, *args)
    return [dict(r) for r in rows]


async def fetch_value(sql: str, *args: Any, conn: asyncpg.Connection | None = None) -> Any:
    return await _executor(conn).fetchval(sql, *args)


async def execute(sql: str, *args: Any, conn: asyncpg.Connection | None = None) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). Returns the asyncpg status tag
    (e.g. "DELETE 1").
    """
    return await _executor(conn).execute(sql, *args)


def affected_rows(status_tag: str) -> int:
    try:
        return int((status_tag or "").rsplit(" ", 1)[-1])
    except ValueError:
        return 0

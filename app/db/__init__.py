# app/db/__init__.py
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional
from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

import psycopg
from psycopg_pool import AsyncConnectionPool

from services.resources.errors import StoreError

from . import resources as resources_db


logger = logging.getLogger(__name__)


def _sanitize_conninfo(dsn: str, sslmode: Optional[str] = None) -> str:
    """
    Strip URI params libpq does not accept (pgbouncer/prepare_threshold) and
    default sslmode. Key/value DSNs are passed through untouched.
    """
    u = urlparse(dsn)
    if u.scheme not in ("postgres", "postgresql"):
        return dsn
    qs = dict(parse_qsl(u.query, keep_blank_values=True))
    qs.pop("pgbouncer", None)
    qs.pop("prepare_threshold", None)
    if sslmode:
        qs.setdefault("sslmode", sslmode)
    new_q = urlencode(qs)
    return urlunparse((u.scheme, u.netloc, u.path, u.params, new_q, u.fragment))


class Store:
    """
    Process-wide persistence handle.

    Built once at startup and closed at shutdown. Wraps a psycopg async pool
    that defaults to a single shared connection; every statement autocommits,
    so there is no transaction spanning multiple writes.

    If the database is unreachable at startup the store stays closed and the
    next request that needs a connection tries to open it again.
    """

    def __init__(self, conninfo: str, *, max_size: int = 1) -> None:
        self._conninfo = conninfo
        self._max_size = max(1, max_size)
        self._pool = self._new_pool()
        self._open = False
        self._open_lock = asyncio.Lock()

    def _new_pool(self) -> AsyncConnectionPool:
        return AsyncConnectionPool(
            conninfo=self._conninfo,
            min_size=1,
            max_size=self._max_size,
            open=False,
            kwargs={
                "autocommit": True,
                "prepare_threshold": 0,
            },
        )

    @classmethod
    def from_settings(cls, settings) -> "Store":
        return cls(
            _sanitize_conninfo(settings.DATABASE_URL, settings.DB_SSLMODE),
            max_size=settings.DB_POOL_MAX,
        )

    @property
    def is_open(self) -> bool:
        return self._open

    async def open(self) -> None:
        async with self._open_lock:
            if self._open:
                return
            try:
                await self._pool.open(wait=True)
            except psycopg.Error as exc:
                # a pool that failed to open is closed for good
                self._pool = self._new_pool()
                raise StoreError(f"store unreachable: {exc}") from exc
            self._open = True
        logger.info("[DB] store opened")

    async def close(self) -> None:
        if not self._open:
            return
        await self._pool.close()
        self._open = False
        logger.info("[DB] store closed")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[psycopg.AsyncConnection]:
        if not self._open:
            await self.open()
        try:
            async with self._pool.connection() as conn:
                yield conn
        except psycopg.Error as exc:
            raise StoreError(str(exc) or exc.__class__.__name__) from exc

    async def ping(self) -> bool:
        try:
            async with self.connection() as conn:
                await conn.execute("select 1;")
            return True
        except StoreError as exc:
            logger.warning("[DB] ping failed: %s", exc)
            return False

    async def select(self, table: str, column: str, value: Any) -> List[Dict[str, Any]]:
        async with self.connection() as conn:
            return await resources_db.fetch_rows(conn, table, column, value)

    async def insert_location(self, record: Dict[str, Any]) -> int:
        async with self.connection() as conn:
            return await resources_db.insert_location(conn, record)

    async def insert_records(self, table: str, location_id: int, records: Iterable[Dict[str, Any]]) -> int:
        async with self.connection() as conn:
            return await resources_db.insert_records(conn, table, location_id, records)

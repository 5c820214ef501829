"""SQLite connection handling for the storage adapters."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite


class AsyncConnectionManager:
    """Opens aiosqlite connections to one database and creates its schema.

    A probe run touches the database at most twice, so file databases get a
    fresh connection per operation. ":memory:" databases live only as long as
    their connection, so that one connection is kept until close().
    """

    def __init__(self, db_path: str, schema: str) -> None:
        self._db_path = db_path
        self._schema = schema
        self._schema_ready = False
        self._memory_conn: aiosqlite.Connection | None = None

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def _is_memory(self) -> bool:
        return self._db_path == ":memory:"

    async def _open(self) -> aiosqlite.Connection:
        if self._is_memory:
            if self._memory_conn is None:
                self._memory_conn = await aiosqlite.connect(":memory:")
                await self._memory_conn.executescript(self._schema)
            return self._memory_conn

        db = await aiosqlite.connect(self._db_path)
        if not self._schema_ready:
            try:
                await db.executescript(self._schema)
            except BaseException:
                await db.close()
                raise
            self._schema_ready = True
        return db

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a connection with the schema in place.

        File connections are closed on exit; the :memory: connection is kept.
        """
        db = await self._open()
        try:
            yield db
        finally:
            if not self._is_memory:
                await db.close()

    async def close(self) -> None:
        """Drop the :memory: database, if one was opened."""
        if self._memory_conn is not None:
            await self._memory_conn.close()
            self._memory_conn = None

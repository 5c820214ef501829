"""SQLite storage adapter for the watermark."""

import sqlite3
from collections.abc import Callable
from datetime import datetime

from healthprobe.adapters.storage.sqlite_base import AsyncConnectionManager
from healthprobe.adapters.storage.watermark import default_watermark, parse_watermark
from healthprobe.core.errors import StorageError
from healthprobe.logging import get_logger

logger = get_logger(__name__)

_SETTINGS_SCHEMA = """
CREATE TABLE IF NOT EXISTS settings (
    name TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

_SELECT_SETTING = """
SELECT value FROM settings WHERE name = ?
"""

_UPSERT_SETTING = """
INSERT INTO settings (name, value) VALUES (?, ?)
ON CONFLICT(name) DO UPDATE SET value = excluded.value
"""

DEFAULT_KEY = "LastDate"


class SQLiteWatermarkStorage:
    """SQLite implementation of WatermarkStoragePort.

    The watermark is one named row in a ``settings`` key/value table, stored
    as an ISO 8601 string. The file survives between probe runs.

    Args:
        db_path: Path of the SQLite file, or ":memory:".
        key: Name of the setting holding the watermark.
        clock: Source of the current time for the default watermark.
    """

    def __init__(
        self,
        db_path: str,
        key: str = DEFAULT_KEY,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._manager = AsyncConnectionManager(db_path, _SETTINGS_SCHEMA)
        self._key = key
        self._clock = clock

    async def load(self) -> datetime:
        """Return the stored watermark, or now minus 10 days if none is stored.

        A database that cannot be opened or read counts as holding no
        watermark.
        """
        try:
            async with self._manager.connection() as db:
                async with db.execute(_SELECT_SETTING, (self._key,)) as cursor:
                    row = await cursor.fetchone()
        except sqlite3.Error as exc:
            logger.warning(
                "Cannot read watermark database: %s",
                exc,
                extra={"db_path": self._manager.db_path, "key": self._key},
            )
            return default_watermark(self._clock)
        if row is None:
            return default_watermark(self._clock)
        stored = parse_watermark(row[0])
        if stored is None:
            logger.warning(
                "Ignoring unreadable watermark %r",
                row[0],
                extra={"db_path": self._manager.db_path, "key": self._key},
            )
            return default_watermark(self._clock)
        return stored

    async def save(self, timestamp: datetime) -> None:
        """Replace the stored watermark.

        Raises:
            StorageError: If the database cannot be written.
        """
        try:
            async with self._manager.connection() as db:
                await db.execute(_UPSERT_SETTING, (self._key, timestamp.isoformat()))
                await db.commit()
        except sqlite3.Error as exc:
            raise StorageError(
                f"cannot write watermark to {self._manager.db_path}: {exc}"
            ) from exc

    async def close(self) -> None:
        """Close persistent connection (for :memory: databases)."""
        await self._manager.close()

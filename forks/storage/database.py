"""SQLite database — async connection, schema migrations, key-value blobs."""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

import aiosqlite
from loguru import logger

from forks.config.constants import DB_SCHEMA_VERSION


SCHEMA_SQL = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at REAL NOT NULL
);

CREATE TABLE IF NOT EXISTS blobs (
    key         TEXT    PRIMARY KEY,
    value       TEXT    NOT NULL,
    updated_at  REAL    NOT NULL
);
"""


class Database:
    """Async SQLite database manager with schema migrations."""

    def __init__(self, db_path: Path) -> None:
        self._path = db_path
        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """Open connection and run migrations."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(self._path)
        self._conn.row_factory = aiosqlite.Row
        await self._run_migrations()
        logger.debug(f"Database connected: {self._path}")

    async def close(self) -> None:
        if self._conn:
            await self._conn.close()
            self._conn = None
            logger.debug("Database connection closed")

    async def _run_migrations(self) -> None:
        async with self._lock:
            await self._conn.executescript(SCHEMA_SQL)
            await self._conn.commit()

            cursor = await self._conn.execute(
                "SELECT MAX(version) FROM schema_version"
            )
            row = await cursor.fetchone()
            current = row[0] if row and row[0] else 0

            if current < DB_SCHEMA_VERSION:
                await self._conn.execute(
                    "INSERT OR REPLACE INTO schema_version (version, applied_at) VALUES (?, ?)",
                    (DB_SCHEMA_VERSION, time.time()),
                )
                await self._conn.commit()
                logger.info(f"Schema migrated to version {DB_SCHEMA_VERSION}")

    @property
    def conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._conn

    # ── Key-value blobs ───────────────────────────────────────────

    async def put_blob(self, key: str, value: str) -> None:
        async with self._lock:
            await self.conn.execute(
                "INSERT OR REPLACE INTO blobs (key, value, updated_at) VALUES (?, ?, ?)",
                (key, value, time.time()),
            )
            await self.conn.commit()

    async def get_blob(self, key: str) -> str | None:
        cursor = await self.conn.execute("SELECT value FROM blobs WHERE key=?", (key,))
        row = await cursor.fetchone()
        return row["value"] if row else None

    async def delete_blob(self, key: str) -> bool:
        async with self._lock:
            cursor = await self.conn.execute("DELETE FROM blobs WHERE key=?", (key,))
            await self.conn.commit()
            return cursor.rowcount > 0

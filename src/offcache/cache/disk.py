"""Persistent region store backed by SQLite."""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
import threading
import time
from pathlib import Path

from offcache.cache.stats import CacheEntry
from offcache.types import Response

logger = logging.getLogger(__name__)

_DEFAULT_DB_PATH = Path.home() / ".offcache" / "cache.db"


class DiskCacheStore:
    """SQLite-backed store; one row per (region, key).

    Blocking SQLite calls run in a worker thread behind a lock, so each
    operation is atomic and the event loop never blocks on disk I/O.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path or _DEFAULT_DB_PATH
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._create_tables()

    @property
    def db_path(self) -> Path:
        return self._db_path

    async def open(self, region: str) -> None:
        await asyncio.to_thread(self._open_sync, region)

    async def match(self, region: str, key: str) -> CacheEntry | None:
        return await asyncio.to_thread(self._match_sync, region, key)

    async def put(self, region: str, entry: CacheEntry) -> None:
        await asyncio.to_thread(self._put_sync, region, entry)

    async def delete(self, region: str, key: str) -> bool:
        return await asyncio.to_thread(self._delete_sync, region, key)

    async def keys(self, region: str) -> list[str]:
        rows = await asyncio.to_thread(
            self._fetchall, "SELECT key FROM entries WHERE region = ?", (region,)
        )
        return [row["key"] for row in rows]

    async def regions(self) -> list[str]:
        rows = await asyncio.to_thread(
            self._fetchall, "SELECT name FROM regions ORDER BY created_at, name", ()
        )
        return [row["name"] for row in rows]

    async def delete_region(self, region: str) -> bool:
        return await asyncio.to_thread(self._delete_region_sync, region)

    async def entry_count(self) -> int:
        rows = await asyncio.to_thread(self._fetchall, "SELECT COUNT(*) AS n FROM entries", ())
        return rows[0]["n"]

    async def size_bytes(self) -> int:
        rows = await asyncio.to_thread(
            self._fetchall, "SELECT COALESCE(SUM(LENGTH(body)), 0) AS n FROM entries", ()
        )
        return rows[0]["n"]

    async def clear(self) -> None:
        await asyncio.to_thread(self._clear_sync)

    async def close(self) -> None:
        with self._lock:
            self._conn.close()

    # ── Synchronous internals (run in worker thread) ──

    def _create_tables(self) -> None:
        with self._lock:
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS regions (
                    name TEXT PRIMARY KEY,
                    created_at REAL
                )
            """)
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    region TEXT,
                    key TEXT,
                    created_at REAL,
                    status INTEGER,
                    status_text TEXT,
                    headers TEXT,
                    body BLOB,
                    PRIMARY KEY (region, key)
                )
            """)
            self._conn.commit()

    def _open_sync(self, region: str) -> None:
        with self._lock:
            self._ensure_region(region)
            self._conn.commit()

    def _ensure_region(self, region: str) -> None:
        self._conn.execute(
            "INSERT OR IGNORE INTO regions (name, created_at) VALUES (?, ?)",
            (region, time.time()),
        )

    def _match_sync(self, region: str, key: str) -> CacheEntry | None:
        with self._lock:
            row = self._conn.execute(
                "SELECT * FROM entries WHERE region = ? AND key = ?", (region, key)
            ).fetchone()
        if row is None:
            return None
        return self._row_to_entry(row)

    def _put_sync(self, region: str, entry: CacheEntry) -> None:
        response = entry.response
        with self._lock:
            self._ensure_region(region)
            self._conn.execute(
                """INSERT OR REPLACE INTO entries
                   (region, key, created_at, status, status_text, headers, body)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    region, entry.key, entry.created_at,
                    response.status, response.status_text,
                    json.dumps(response.headers), response.body,
                ),
            )
            self._conn.commit()

    def _delete_sync(self, region: str, key: str) -> bool:
        with self._lock:
            cursor = self._conn.execute(
                "DELETE FROM entries WHERE region = ? AND key = ?", (region, key)
            )
            self._conn.commit()
        return cursor.rowcount > 0

    def _delete_region_sync(self, region: str) -> bool:
        with self._lock:
            self._conn.execute("DELETE FROM entries WHERE region = ?", (region,))
            cursor = self._conn.execute("DELETE FROM regions WHERE name = ?", (region,))
            self._conn.commit()
        return cursor.rowcount > 0

    def _clear_sync(self) -> None:
        with self._lock:
            self._conn.execute("DELETE FROM entries")
            self._conn.execute("DELETE FROM regions")
            self._conn.commit()

    def _fetchall(self, sql: str, params: tuple) -> list[sqlite3.Row]:
        with self._lock:
            return self._conn.execute(sql, params).fetchall()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> CacheEntry:
        headers: dict[str, str] = {}
        try:
            headers = json.loads(row["headers"]) if row["headers"] else {}
        except (json.JSONDecodeError, TypeError):
            logger.warning("Corrupt headers for cached key %s, dropping them", row["key"])

        return CacheEntry(
            key=row["key"],
            created_at=row["created_at"],
            response=Response(
                status=row["status"],
                status_text=row["status_text"] or "",
                headers=headers,
                body=row["body"] or b"",
            ),
        )

"""ResponseCache SQLite 实现

同一主机上的多个 worker 进程共享一份缓存文件。
过期时间使用墙钟时间（跨进程可比较）。
"""

import time
from collections.abc import Callable

import aiosqlite


class SqliteResponseCache:
    """ResponseCache 的 SQLite 实现"""

    def __init__(
        self,
        conn: aiosqlite.Connection,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.conn = conn
        self._clock = clock

    async def get(self, key: str) -> bytes | None:
        cursor = await self.conn.execute(
            "SELECT body FROM response_cache WHERE key = ? AND expires_at > ?",
            (key, self._clock()),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return bytes(row[0])

    async def put(self, key: str, body: bytes, ttl_s: float) -> None:
        await self.conn.execute(
            """
            INSERT OR REPLACE INTO response_cache (key, body, expires_at)
            VALUES (?, ?, ?)
            """,
            (key, body, self._clock() + ttl_s),
        )
        await self.conn.commit()

    async def purge_expired(self) -> int:
        """删除已过期条目

        Returns:
            删除的条目数
        """
        cursor = await self.conn.execute(
            "DELETE FROM response_cache WHERE expires_at <= ?",
            (self._clock(),),
        )
        await self.conn.commit()
        return cursor.rowcount

    async def close(self) -> None:
        await self.conn.close()

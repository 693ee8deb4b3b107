"""ResponseCache 进程内实现

每个 worker 进程各自持有一份缓存。过期条目在读取该键时清除，
写入时整体清理一次，条目数不超过 TTL 窗口内写入的键数。
"""

import time
from collections.abc import Callable


class InMemoryResponseCache:
    """ResponseCache 的 dict 实现"""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, bytes]] = {}

    async def get(self, key: str) -> bytes | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, body = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return body

    async def put(self, key: str, body: bytes, ttl_s: float) -> None:
        now = self._clock()
        self.purge_expired(now)
        self._entries[key] = (now + ttl_s, body)

    def purge_expired(self, now: float | None = None) -> int:
        """删除所有已过期条目，返回删除条数"""
        if now is None:
            now = self._clock()
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
        for k in expired:
            del self._entries[k]
        return len(expired)

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

"""ResponseCache Protocol 接口定义

advisory 缓存：未命中只触发实时拉取，不视为错误；无事务保证，并发写入 last write wins。
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from typing import Protocol


class ResponseCache(Protocol):
    """上游响应缓存接口"""

    async def get(self, key: str) -> bytes | None:
        """读取未过期的缓存值，不存在或已过期返回 None"""
        ...

    async def put(self, key: str, body: bytes, ttl_s: float) -> None:
        """写入缓存值，ttl_s 秒后过期"""
        ...

    async def close(self) -> None:
        """释放底层资源"""
        ...

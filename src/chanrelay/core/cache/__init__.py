"""chanrelay Core Cache -- advisory 上游响应缓存

提供工厂函数按配置创建缓存后端。
"""

from pathlib import Path

import aiosqlite
import structlog

from .memory_cache import InMemoryResponseCache
from .protocols import ResponseCache
from .sqlite_cache import SqliteResponseCache
from .sqlite_init import init_db

log = structlog.get_logger()


async def open_sqlite_cache(db_path: str) -> SqliteResponseCache:
    """打开（必要时创建）SQLite 缓存库

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        SqliteResponseCache 实例
    """
    # 确保数据库目录存在
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)
    return SqliteResponseCache(conn)


async def create_response_cache(backend: str, db_path: str) -> ResponseCache:
    """按后端名称创建缓存

    Args:
        backend: "memory" 或 "sqlite"，未知值降级为 memory
        db_path: sqlite 后端使用的数据库路径

    Returns:
        ResponseCache 实例
    """
    if backend == "sqlite":
        return await open_sqlite_cache(db_path)
    if backend != "memory":
        log.warning(
            "unknown_cache_backend",
            env_var="CHANRELAY_CACHE_BACKEND",
            value=backend,
            fallback="memory",
        )
    return InMemoryResponseCache()


__all__ = [
    "ResponseCache",
    "InMemoryResponseCache",
    "SqliteResponseCache",
    "create_response_cache",
    "open_sqlite_cache",
    "init_db",
]

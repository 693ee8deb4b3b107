"""SQLite 缓存库初始化

PRAGMA 配置 + response_cache 表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# response_cache 表 DDL
_RESPONSE_CACHE_DDL = """
CREATE TABLE IF NOT EXISTS response_cache (
    key         TEXT PRIMARY KEY,
    body        BLOB NOT NULL,
    expires_at  REAL NOT NULL
);
"""

_RESPONSE_CACHE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_response_cache_expires_at ON response_cache(expires_at);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化缓存库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 多 worker 进程共享同一文件
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    await conn.execute(_RESPONSE_CACHE_DDL)
    for idx_sql in _RESPONSE_CACHE_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()

"""CLI 入口模块 -- python -m chanrelay.core <command>

支持的命令：
  purge-cache  删除 SQLite 缓存中已过期的条目
"""

import asyncio
import sys

from .config import get_cache_db_path


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m chanrelay.core <command>")
        print("命令:")
        print("  purge-cache  删除 SQLite 缓存中已过期的条目")
        sys.exit(1)

    command = sys.argv[1]

    if command == "purge-cache":
        asyncio.run(purge_cache())
    else:
        print(f"未知命令: {command}")
        print("可用命令: purge-cache")
        sys.exit(1)


async def purge_cache() -> None:
    """执行过期缓存清理"""
    from .cache import open_sqlite_cache

    db_path = get_cache_db_path()
    print(f"缓存库路径: {db_path}")

    cache = await open_sqlite_cache(db_path)
    try:
        removed = await cache.purge_expired()
        print(f"清理完成，删除 {removed} 条过期缓存")
    finally:
        await cache.close()


if __name__ == "__main__":
    main()

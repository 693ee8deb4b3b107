"""配置常量模块 -- 可通过环境变量覆盖

包含缓存后端、缓存路径、CORS 来源、消息数量上限等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("CHANRELAY_DATA_DIR", "data"))


def get_cache_backend() -> str:
    """获取响应缓存后端（memory / sqlite）"""
    return os.environ.get("CHANRELAY_CACHE_BACKEND", "memory").strip().lower()


def get_cache_db_path() -> str:
    """获取 SQLite 缓存数据库路径"""
    return os.environ.get(
        "CHANRELAY_CACHE_DB_PATH",
        str(_get_base_dir() / "sqlite" / "cache.db"),
    )


def get_allowed_origin() -> str:
    """获取 CORS 允许来源覆盖值，空字符串表示未配置"""
    return os.environ.get("ALLOWED_ORIGIN", "")


# 响应缓存新鲜期（秒）
CACHE_TTL_S: int = int(os.environ.get("CHANRELAY_CACHE_TTL_S", "10"))

# /messages 默认与最大拉取条数
MESSAGES_DEFAULT_LIMIT: int = 50
MESSAGES_MAX_LIMIT: int = 100

# /lookup 单次拉取条数（不分页）
LOOKUP_FETCH_LIMIT: int = 200

# 注册消息前缀
REGISTER_PREFIX: str = "REGISTER "

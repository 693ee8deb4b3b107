"""依赖注入模块 -- 通过 FastAPI Depends 注入上游客户端与缓存

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from chanrelay.core.cache import ResponseCache
from chanrelay.provider import DiscordClient
from fastapi import Request


def get_discord_client(request: Request) -> DiscordClient:
    """从 app.state 获取 DiscordClient 实例"""
    return request.app.state.discord_client


def get_response_cache(request: Request) -> ResponseCache:
    """从 app.state 获取 ResponseCache 实例"""
    return request.app.state.response_cache

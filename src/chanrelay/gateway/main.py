"""FastAPI 应用主文件

app 创建 + lifespan 管理：上游 HTTP 客户端 + 响应缓存初始化/关闭 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import structlog
from chanrelay.core.cache import create_response_cache
from chanrelay.core.config import get_allowed_origin, get_cache_backend, get_cache_db_path
from chanrelay.provider import DiscordClient, load_provider_config
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from .middleware.cors_mw import CorsMiddleware
from .middleware.error_mw import ErrorMiddleware
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .routes import health, lookup, messages

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时创建上游客户端与缓存，关闭时释放"""
    provider_config = load_provider_config()
    app.state.provider_config = provider_config

    http_client = httpx.AsyncClient()
    app.state.http_client = http_client
    app.state.discord_client = DiscordClient(
        http_client,
        bot_token=provider_config.bot_token.get_secret_value(),
        api_base_url=provider_config.api_base_url,
        timeout_s=provider_config.timeout_s,
    )

    cache_backend = get_cache_backend()
    app.state.response_cache = await create_response_cache(
        cache_backend,
        get_cache_db_path(),
    )

    log.info(
        "gateway_initialized",
        api_base_url=provider_config.api_base_url,
        bot_token_configured=app.state.discord_client.is_configured,
        cache_backend=cache_backend,
    )
    if not app.state.discord_client.is_configured:
        log.warning("bot_token_missing", env_var="BOT_TOKEN")

    try:
        yield
    finally:
        try:
            await app.state.response_cache.close()
        finally:
            await http_client.aclose()


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """未匹配的路径或方法统一返回 404 not_found"""
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "not_found"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="chanrelay",
        version="0.1.0",
        description="频道消息只读代理 API",
        lifespan=lifespan,
        # 对外仅暴露业务路由，其余路径一律 404
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # 注册中间件（由内到外：Error -> CORS -> Logging）
    app.add_middleware(ErrorMiddleware)
    app.add_middleware(CorsMiddleware, allowed_origin=get_allowed_origin())
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # 初始化日志
    setup_logging()
    setup_logfire()

    # 注册路由
    app.include_router(health.router, tags=["health"])
    app.include_router(messages.router, tags=["messages"])
    app.include_router(lookup.router, tags=["lookup"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()

"""gateway 测试配置 -- FastAPI app + httpx AsyncClient fixture"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from chanrelay.core.cache import InMemoryResponseCache
from chanrelay.provider import DiscordClient
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def test_app(monkeypatch, http_client):
    """创建测试用 FastAPI app 实例

    手动注入上游客户端与缓存（绕过 lifespan）。
    """
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
    monkeypatch.delenv("ALLOWED_ORIGIN", raising=False)

    from chanrelay.gateway.main import create_app

    app = create_app()
    app.state.discord_client = DiscordClient(
        http_client,
        bot_token="test-token",
        api_base_url="https://discord.test/api/v10",
    )
    app.state.response_cache = InMemoryResponseCache()
    yield app


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac

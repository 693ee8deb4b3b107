"""全局 pytest 配置 -- 上游 Mock + 样例消息 fixture"""

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio


class FakeDiscordAPI:
    """可控的上游 Mock，作为 httpx.MockTransport handler 使用

    记录每次请求，便于断言调用次数、URL 和认证头。
    """

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.status_code = 200
        self.payload: object = []
        self.text: str | None = None
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def fake_discord() -> FakeDiscordAPI:
    """上游 Mock 实例"""
    return FakeDiscordAPI()


@pytest_asyncio.fixture
async def http_client(fake_discord) -> AsyncGenerator[httpx.AsyncClient, None]:
    """挂载上游 Mock 的 httpx AsyncClient"""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_discord)) as client:
        yield client


@pytest.fixture
def raw_messages() -> list[dict]:
    """上游原始消息样例（newest-first）"""
    return [
        {
            "id": "1003",
            "channel_id": "42",
            "content": "REGISTER alice|salt1|hash1|100",
            "timestamp": "2024-05-01T12:03:00.000000+00:00",
            "author": {"username": "alice", "discriminator": "0"},
            "attachments": [],
        },
        {
            "id": "1002",
            "channel_id": "42",
            "content": "hello",
            "timestamp": "2024-05-01T12:02:00.000000+00:00",
            "author": {"username": "carol", "discriminator": "1234"},
            "attachments": [
                {"url": "https://cdn.test/a.png", "filename": "a.png", "size": 2048},
            ],
        },
        {
            "id": "1001",
            "channel_id": "42",
            "content": "REGISTER bob|salt2|hash2|200",
            "timestamp": "2024-05-01T12:01:00.000000+00:00",
            "author": {"username": "bob"},
        },
    ]

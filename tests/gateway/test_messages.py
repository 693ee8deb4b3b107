"""GET /messages 测试

测试内容：
1. 参数校验（channel_id 必填、limit 截断/默认）
2. 凭据缺失 -> 500
3. 归一化输出 + 顺序保持
4. 缓存命中不触发第二次上游调用；缓存故障不影响响应
5. 上游错误状态码透传
"""

import json

import pytest
from chanrelay.core.cache import InMemoryResponseCache
from chanrelay.provider import DiscordClient
from httpx import AsyncClient


class TestMessagesValidation:
    """参数校验"""

    @pytest.mark.parametrize(
        "params",
        [{}, {"limit": "10"}, {"channel_id": ""}, {"channel_id": "", "limit": "abc"}],
    )
    async def test_missing_channel_id(self, client: AsyncClient, fake_discord, params):
        resp = await client.get("/messages", params=params)
        assert resp.status_code == 400
        assert resp.json() == {"error": "missing channel_id"}
        assert fake_discord.calls == []

    async def test_missing_token(self, client: AsyncClient, test_app, http_client, fake_discord):
        test_app.state.discord_client = DiscordClient(http_client, bot_token="")

        resp = await client.get("/messages", params={"channel_id": "42"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "server misconfigured"}
        assert fake_discord.calls == []

    @pytest.mark.parametrize(
        "limit,expected",
        [
            (None, "50"),
            ("10", "10"),
            ("100", "100"),
            ("101", "100"),
            ("5000", "100"),
            ("abc", "50"),
            ("12.5", "50"),
            ("0", "50"),
            ("-3", "50"),
        ],
    )
    async def test_limit_resolution(self, client: AsyncClient, fake_discord, limit, expected):
        params = {"channel_id": "42"}
        if limit is not None:
            params["limit"] = limit

        resp = await client.get("/messages", params=params)

        assert resp.status_code == 200
        assert fake_discord.calls[0].url.params["limit"] == expected


class TestMessagesFetch:
    """上游拉取 + 归一化"""

    async def test_returns_normalized_messages(self, client: AsyncClient, fake_discord, raw_messages):
        fake_discord.payload = raw_messages

        resp = await client.get("/messages", params={"channel_id": "42", "limit": "3"})

        assert resp.status_code == 200
        data = resp.json()
        assert [m["id"] for m in data] == ["1003", "1002", "1001"]
        assert data[0]["author_name"] == "alice"
        assert data[1] == {
            "id": "1002",
            "content": "hello",
            "timestamp": "2024-05-01T12:02:00.000000+00:00",
            "author_name": "carol#1234",
            "attachments": [
                {"url": "https://cdn.test/a.png", "filename": "a.png", "size": 2048},
            ],
        }
        assert data[2]["attachments"] == []

    async def test_upstream_request(self, client: AsyncClient, fake_discord):
        await client.get("/messages", params={"channel_id": "42"})

        request = fake_discord.calls[0]
        assert str(request.url) == "https://discord.test/api/v10/channels/42/messages?limit=50"
        assert request.headers["authorization"] == "Bot test-token"

    async def test_empty_channel(self, client: AsyncClient, fake_discord):
        fake_discord.payload = []
        resp = await client.get("/messages", params={"channel_id": "42"})
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_unexpected_payload_is_server_error(self, client: AsyncClient, fake_discord):
        fake_discord.payload = {"message": "not a list"}

        resp = await client.get("/messages", params={"channel_id": "42"})

        assert resp.status_code == 500
        assert resp.json()["error"] == "server_error"


class TestMessagesCache:
    """advisory 缓存"""

    async def test_second_call_served_from_cache(self, client: AsyncClient, fake_discord, raw_messages):
        fake_discord.payload = raw_messages

        first = await client.get("/messages", params={"channel_id": "42", "limit": "3"})
        second = await client.get("/messages", params={"channel_id": "42", "limit": "3"})

        assert len(fake_discord.calls) == 1
        assert first.json() == second.json()

    async def test_cache_keyed_by_upstream_url(self, client: AsyncClient, fake_discord):
        await client.get("/messages", params={"channel_id": "42", "limit": "3"})
        await client.get("/messages", params={"channel_id": "42", "limit": "4"})
        await client.get("/messages", params={"channel_id": "43", "limit": "3"})
        assert len(fake_discord.calls) == 3

    async def test_clamped_limits_share_entry(self, client: AsyncClient, fake_discord):
        """limit=500 与 limit=100 对应同一上游 URL"""
        await client.get("/messages", params={"channel_id": "42", "limit": "500"})
        await client.get("/messages", params={"channel_id": "42", "limit": "100"})
        assert len(fake_discord.calls) == 1

    async def test_refetch_after_expiry(self, client: AsyncClient, test_app, fake_discord):
        now = [0.0]
        test_app.state.response_cache = InMemoryResponseCache(clock=lambda: now[0])

        await client.get("/messages", params={"channel_id": "42"})
        now[0] = 11.0
        await client.get("/messages", params={"channel_id": "42"})

        assert len(fake_discord.calls) == 2

    async def test_stores_raw_body(self, client: AsyncClient, test_app, fake_discord):
        fake_discord.payload = [{"id": "1"}]

        await client.get("/messages", params={"channel_id": "42"})

        cached = await test_app.state.response_cache.get(
            "https://discord.test/api/v10/channels/42/messages?limit=50"
        )
        assert json.loads(cached) == [{"id": "1"}]

    async def test_cache_read_failure_falls_back_to_live(self, client: AsyncClient, test_app, fake_discord, raw_messages):
        class BrokenReadCache(InMemoryResponseCache):
            async def get(self, key):
                raise RuntimeError("cache exploded")

        fake_discord.payload = raw_messages
        test_app.state.response_cache = BrokenReadCache()

        resp = await client.get("/messages", params={"channel_id": "42"})

        assert resp.status_code == 200
        assert [m["id"] for m in resp.json()] == ["1003", "1002", "1001"]
        assert len(fake_discord.calls) == 1

    async def test_cache_write_failure_still_returns_messages(self, client: AsyncClient, test_app, fake_discord, raw_messages):
        class BrokenWriteCache(InMemoryResponseCache):
            async def put(self, key, body, ttl_s):
                raise RuntimeError("disk full")

        fake_discord.payload = raw_messages
        test_app.state.response_cache = BrokenWriteCache()

        first = await client.get("/messages", params={"channel_id": "42"})
        second = await client.get("/messages", params={"channel_id": "42"})

        assert first.status_code == 200
        assert second.json() == first.json()
        # 未写入缓存，两次都走上游
        assert len(fake_discord.calls) == 2


class TestMessagesUpstreamErrors:
    """上游错误透传"""

    @pytest.mark.parametrize("status_code", [403, 404, 429, 500, 502, 503])
    async def test_status_passthrough(self, client: AsyncClient, fake_discord, status_code):
        fake_discord.status_code = status_code
        fake_discord.text = '{"message": "Missing Access", "code": 50001}'

        resp = await client.get("/messages", params={"channel_id": "42"})

        assert resp.status_code == status_code
        assert resp.json() == {
            "error": "discord_error",
            "status": status_code,
            "text": '{"message": "Missing Access", "code": 50001}',
        }

    async def test_errors_not_cached(self, client: AsyncClient, fake_discord):
        fake_discord.status_code = 429
        fake_discord.text = "rate limited"

        await client.get("/messages", params={"channel_id": "42"})
        await client.get("/messages", params={"channel_id": "42"})

        assert len(fake_discord.calls) == 2

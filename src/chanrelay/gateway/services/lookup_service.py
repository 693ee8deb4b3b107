"""LookupService -- /lookup 业务逻辑

始终实时拉取（不走缓存），单次拉取 LOOKUP_FETCH_LIMIT 条，不分页。
"""

import structlog
from chanrelay.core.config import LOOKUP_FETCH_LIMIT
from chanrelay.core.models import LookupResult, parse_upstream_messages
from chanrelay.core.registration import find_registration
from chanrelay.provider import DiscordClient

log = structlog.get_logger()


class LookupService:
    """注册消息查询服务"""

    def __init__(
        self,
        discord_client: DiscordClient,
        fetch_limit: int = LOOKUP_FETCH_LIMIT,
    ) -> None:
        self._client = discord_client
        self._fetch_limit = fetch_limit

    async def lookup(self, channel_id: str, username: str) -> LookupResult:
        """查找 username 的注册消息

        Raises:
            UpstreamHTTPError: 上游返回非 2xx
        """
        structlog.contextvars.bind_contextvars(channel_id=channel_id, username=username)
        body = await self._client.fetch_messages(channel_id, self._fetch_limit)
        msgs = parse_upstream_messages(body)
        result = find_registration(msgs, username, channel_id)

        log.info(
            "registration_lookup",
            scanned=len(msgs),
            found=result.found,
        )
        return result

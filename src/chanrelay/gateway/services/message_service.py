"""MessageService -- /messages 业务逻辑

缓存查询 -> 未命中时拉取上游 -> 写缓存 -> 归一化。
channel_id / limit 绑定到 structlog contextvars，上游调用日志随之携带。
"""

import structlog
from chanrelay.core.cache import ResponseCache
from chanrelay.core.config import CACHE_TTL_S, MESSAGES_DEFAULT_LIMIT, MESSAGES_MAX_LIMIT
from chanrelay.core.models import NormalizedMessage, parse_upstream_messages
from chanrelay.core.normalize import normalize_messages
from chanrelay.provider import DiscordClient

log = structlog.get_logger()


def resolve_limit(raw: str | None) -> int:
    """解析 limit 查询参数

    缺失、非整数或 <= 0 时使用默认值，上限截断为 MESSAGES_MAX_LIMIT。
    """
    if raw is None:
        return MESSAGES_DEFAULT_LIMIT
    try:
        limit = int(raw.strip())
    except ValueError:
        return MESSAGES_DEFAULT_LIMIT
    if limit <= 0:
        return MESSAGES_DEFAULT_LIMIT
    return min(MESSAGES_MAX_LIMIT, limit)


class MessageService:
    """频道消息读取服务"""

    def __init__(
        self,
        discord_client: DiscordClient,
        cache: ResponseCache,
        cache_ttl_s: float = CACHE_TTL_S,
    ) -> None:
        self._client = discord_client
        self._cache = cache
        self._cache_ttl_s = cache_ttl_s

    async def list_messages(self, channel_id: str, limit: int) -> list[NormalizedMessage]:
        """读取频道最近消息（保持上游顺序）

        缓存后端故障只记录日志：读失败视为未命中，写失败跳过写入。

        Raises:
            UpstreamHTTPError: 上游返回非 2xx（不写缓存）
        """
        structlog.contextvars.bind_contextvars(channel_id=channel_id, limit=limit)
        cache_key = self._client.messages_url(channel_id, limit)

        body = await self._cache_get(cache_key)
        if body is not None:
            log.debug("cache_hit")
        else:
            body = await self._client.fetch_messages(channel_id, limit)
            if await self._cache_put(cache_key, body):
                log.debug("cache_stored", ttl_s=self._cache_ttl_s)

        return normalize_messages(parse_upstream_messages(body))

    async def _cache_get(self, key: str) -> bytes | None:
        try:
            return await self._cache.get(key)
        except Exception as e:
            log.warning("cache_get_failed", error=str(e), error_type=type(e).__name__)
            return None

    async def _cache_put(self, key: str, body: bytes) -> bool:
        try:
            await self._cache.put(key, body, self._cache_ttl_s)
        except Exception as e:
            log.warning("cache_put_failed", error=str(e), error_type=type(e).__name__)
            return False
        return True

"""DiscordClient -- 上游消息读取 API 封装

只读：GET /channels/{channel_id}/messages?limit=<n>
不重试、不退避，失败立即抛出。
"""

import time
from urllib.parse import quote

import httpx
import structlog

from .config import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT_S
from .exceptions import ProviderError, UpstreamHTTPError, UpstreamUnreachableError

log = structlog.get_logger()


class DiscordClient:
    """上游 REST API 客户端

    httpx.AsyncClient 由调用方注入并负责关闭。
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        bot_token: str = "",
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout_s: int = DEFAULT_TIMEOUT_S,
    ) -> None:
        self._http = http_client
        self._bot_token = bot_token
        self._api_base_url = api_base_url.rstrip("/")
        self._timeout_s = timeout_s

    @property
    def is_configured(self) -> bool:
        """是否已配置 Bot 凭据"""
        return bool(self._bot_token)

    def messages_url(self, channel_id: str, limit: int) -> str:
        """构建频道消息 URL（同时作为缓存键）"""
        return (
            f"{self._api_base_url}/channels/{quote(channel_id, safe='')}"
            f"/messages?limit={limit}"
        )

    async def fetch_messages(self, channel_id: str, limit: int) -> bytes:
        """拉取频道最近消息，返回原始 JSON 响应体

        Args:
            channel_id: 频道 ID
            limit: 拉取条数

        Returns:
            上游响应体原始字节

        Raises:
            ProviderError: 未配置 Bot 凭据
            UpstreamHTTPError: 上游返回非 2xx
            UpstreamUnreachableError: 连接失败或超时
        """
        if not self.is_configured:
            raise ProviderError("bot token not configured", recoverable=False)

        url = self.messages_url(channel_id, limit)
        start_time = time.monotonic()

        try:
            resp = await self._http.get(
                url,
                headers={"Authorization": f"Bot {self._bot_token}"},
                timeout=self._timeout_s,
            )
        except httpx.TransportError as e:
            log.error(
                "upstream_call_failed",
                channel_id=channel_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamUnreachableError(url=url, original_error=e) from e

        duration_ms = int((time.monotonic() - start_time) * 1000)

        if not resp.is_success:
            log.warning(
                "upstream_error_status",
                channel_id=channel_id,
                status_code=resp.status_code,
                duration_ms=duration_ms,
            )
            raise UpstreamHTTPError(status_code=resp.status_code, text=resp.text)

        log.info(
            "upstream_call_completed",
            channel_id=channel_id,
            limit=limit,
            duration_ms=duration_ms,
        )
        return resp.content

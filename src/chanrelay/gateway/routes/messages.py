"""频道消息路由

GET /messages?channel_id=...&limit=...: 读取频道最近消息，归一化后返回。
"""

from chanrelay.core.cache import ResponseCache
from chanrelay.provider import DiscordClient, UpstreamHTTPError
from fastapi import APIRouter, Depends, Query
from starlette.responses import JSONResponse

from ..deps import get_discord_client, get_response_cache
from ..services.message_service import MessageService, resolve_limit

router = APIRouter()


@router.get("/messages")
async def list_messages(
    channel_id: str | None = Query(default=None, description="频道 ID，必填"),
    limit: str | None = Query(default=None, description="拉取条数，默认 50，最大 100"),
    discord_client: DiscordClient = Depends(get_discord_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """读取频道消息

    - 缺少 channel_id 返回 400
    - 未配置 BOT_TOKEN 返回 500
    - 上游非 2xx 原样透传状态码
    """
    if not channel_id:
        return JSONResponse(status_code=400, content={"error": "missing channel_id"})
    if not discord_client.is_configured:
        return JSONResponse(status_code=500, content={"error": "server misconfigured"})

    service = MessageService(discord_client, cache)
    try:
        messages = await service.list_messages(channel_id, resolve_limit(limit))
    except UpstreamHTTPError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"error": "discord_error", "status": e.status_code, "text": e.text},
        )

    return JSONResponse(content=[m.model_dump() for m in messages])

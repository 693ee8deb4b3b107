"""注册查询路由

GET /lookup?channel_id=...&username=...: 在频道最近消息中查找 "REGISTER <username>|..."。
"""

from chanrelay.provider import DiscordClient, UpstreamHTTPError
from fastapi import APIRouter, Depends, Query
from starlette.responses import JSONResponse

from ..deps import get_discord_client
from ..services.lookup_service import LookupService

router = APIRouter()


@router.get("/lookup")
async def lookup_registration(
    channel_id: str | None = Query(default=None, description="频道 ID，必填"),
    username: str | None = Query(default=None, description="用户名，必填"),
    discord_client: DiscordClient = Depends(get_discord_client),
):
    """查找注册消息

    找到与否均返回 200，通过 found 字段区分。
    """
    if not channel_id or not username:
        return JSONResponse(
            status_code=400,
            content={"error": "missing channel_id or username"},
        )
    if not discord_client.is_configured:
        return JSONResponse(status_code=500, content={"error": "server misconfigured"})

    service = LookupService(discord_client)
    try:
        result = await service.lookup(channel_id, username)
    except UpstreamHTTPError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"error": "discord_error", "status": e.status_code},
        )

    return JSONResponse(content=result.to_response())

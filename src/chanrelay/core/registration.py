"""注册消息扫描 -- /lookup 的核心逻辑

注册消息格式: "REGISTER <username>|<field>|<field>|..."
按上游返回顺序线性扫描，首个匹配即返回（不保证时间序）。
"""

from datetime import datetime

from .config import REGISTER_PREFIX
from .models.lookup import LookupResult
from .models.message import UpstreamMessage
from .normalize import resolve_timestamp


def registered_username(content: str | None) -> str | None:
    """从注册消息中提取 username，非注册消息返回 None"""
    if not content or not content.startswith(REGISTER_PREFIX):
        return None
    return content[len(REGISTER_PREFIX):].split("|", 1)[0]


def find_registration(
    msgs: list[UpstreamMessage],
    username: str,
    channel_id: str,
    now: datetime | None = None,
) -> LookupResult:
    """在消息列表中查找 username 的注册消息

    Args:
        msgs: 上游消息（保持上游顺序）
        username: 待查找的用户名，精确匹配
        channel_id: 请求的频道 ID，消息自身无 channel_id 时使用
        now: 缺省时间戳

    Returns:
        LookupResult，未找到时 found=False
    """
    for msg in msgs:
        if registered_username(msg.content) != username:
            continue
        return LookupResult(
            found=True,
            message_id=msg.id or "",
            channel_id=msg.channel_id or channel_id,
            raw=msg.content,
            ts=resolve_timestamp(msg, now),
        )
    return LookupResult(found=False)

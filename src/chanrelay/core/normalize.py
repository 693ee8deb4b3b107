"""消息归一化 -- UpstreamMessage -> NormalizedMessage

保持上游返回顺序（newest-first），不做重排。
缺失字段按固定规则补默认值；同一 now 下对同一输入输出恒定。
"""

from datetime import UTC, datetime

from .models.message import (
    NormalizedAttachment,
    NormalizedMessage,
    UpstreamAttachment,
    UpstreamAuthor,
    UpstreamMessage,
)

UNKNOWN_AUTHOR = "Unknown"


def isoformat(dt: datetime) -> str:
    """格式化为毫秒精度的 UTC ISO-8601 字符串（Z 结尾）"""
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_timestamp(msg: UpstreamMessage, now: datetime | None = None) -> str:
    """取最佳可用时间戳

    优先级: timestamp > created_at > createdTimestamp(epoch ms) > now
    """
    if msg.timestamp:
        return msg.timestamp
    if msg.created_at:
        return msg.created_at
    created = msg.created_timestamp
    if created:
        if isinstance(created, str):
            return created
        return isoformat(datetime.fromtimestamp(created / 1000, tz=UTC))
    return isoformat(now or datetime.now(UTC))


def _has_discriminator(discriminator: str | None) -> bool:
    # 新版用户名体系下 discriminator 为 "0"
    return bool(discriminator) and bool(discriminator.strip("0"))


def format_author_name(author: UpstreamAuthor | None) -> str:
    """作者显示名: username#discriminator / username / Unknown"""
    if author is None or not author.username:
        return UNKNOWN_AUTHOR
    if _has_discriminator(author.discriminator):
        return f"{author.username}#{author.discriminator}"
    return author.username


def normalize_attachment(attachment: UpstreamAttachment) -> NormalizedAttachment:
    """归一化单个附件"""
    return NormalizedAttachment(
        url=attachment.url or "",
        filename=attachment.filename or attachment.name or "",
        size=int(attachment.size or 0),
    )


def normalize_message(
    msg: UpstreamMessage,
    now: datetime | None = None,
) -> NormalizedMessage:
    """归一化单条消息"""
    return NormalizedMessage(
        id=msg.id or "",
        content=msg.content or "",
        timestamp=resolve_timestamp(msg, now),
        author_name=format_author_name(msg.author),
        attachments=[normalize_attachment(a) for a in msg.attachments or []],
    )


def normalize_messages(
    msgs: list[UpstreamMessage],
    now: datetime | None = None,
) -> list[NormalizedMessage]:
    """批量归一化，整批共用同一个 now 作为缺省时间戳"""
    now = now or datetime.now(UTC)
    return [normalize_message(m, now) for m in msgs]

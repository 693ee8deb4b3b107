"""消息 Domain Model -- 上游原始格式 + 对外归一化格式

上游消息来自不受控的第三方 API，所有字段可选，未知字段忽略。
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class UpstreamAuthor(BaseModel):
    """上游消息作者"""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    username: str | None = None
    discriminator: str | None = None


class UpstreamAttachment(BaseModel):
    """上游消息附件"""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    url: str | None = None
    filename: str | None = None
    name: str | None = None
    size: int | float | None = None


class UpstreamMessage(BaseModel):
    """上游消息 -- 防御式解析，所有字段缺省为 None"""

    model_config = ConfigDict(
        extra="ignore",
        coerce_numbers_to_str=True,
        populate_by_name=True,
    )

    id: str | None = None
    channel_id: str | None = None
    content: str | None = None
    timestamp: str | None = None
    created_at: str | None = None
    created_timestamp: int | float | str | None = Field(
        default=None,
        alias="createdTimestamp",
        description="epoch 毫秒",
    )
    author: UpstreamAuthor | None = None
    attachments: list[UpstreamAttachment] | None = None


class NormalizedAttachment(BaseModel):
    """归一化附件"""

    url: str = Field(default="", description="附件 URL")
    filename: str = Field(default="", description="文件名")
    size: int = Field(default=0, description="文件大小")


class NormalizedMessage(BaseModel):
    """NormalizedMessage -- 对外暴露的最小消息格式"""

    id: str = Field(default="", description="消息 ID")
    content: str = Field(default="", description="文本内容")
    timestamp: str = Field(description="ISO-8601 时间戳")
    author_name: str = Field(default="Unknown", description="作者显示名")
    attachments: list[NormalizedAttachment] = Field(
        default_factory=list,
        description="附件列表",
    )


_UPSTREAM_MESSAGES = TypeAdapter(list[UpstreamMessage])


def parse_upstream_messages(body: bytes | str) -> list[UpstreamMessage]:
    """解析上游 JSON 响应体为 UpstreamMessage 列表

    Raises:
        pydantic.ValidationError: 响应体不是消息数组
    """
    return _UPSTREAM_MESSAGES.validate_json(body)

"""LookupResult Domain Model -- 注册消息查询结果"""

from pydantic import BaseModel, Field


class LookupResult(BaseModel):
    """注册消息查询结果

    未找到时仅序列化 found 字段。
    """

    found: bool = Field(description="是否找到注册消息")
    message_id: str | None = Field(default=None, serialization_alias="messageId")
    channel_id: str | None = Field(default=None, serialization_alias="channelId")
    raw: str | None = Field(default=None, description="注册消息原文")
    ts: str | None = Field(default=None, description="注册消息时间戳")

    def to_response(self) -> dict:
        """序列化为响应体"""
        return self.model_dump(by_alias=True, exclude_none=True)

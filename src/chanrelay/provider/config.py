"""ProviderConfig -- 上游 API 配置加载

从环境变量加载配置，BOT_TOKEN 由部署平台以 secret 形式注入。
"""

import os

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()

DEFAULT_API_BASE_URL = "https://discord.com/api/v10"
DEFAULT_TIMEOUT_S = 5


class ProviderConfig(BaseModel):
    """上游 API 配置 -- 从环境变量加载

    环境变量:
        BOT_TOKEN: Bot 认证凭据
        DISCORD_API_BASE_URL: API 基础 URL（默认 https://discord.com/api/v10）
        CHANRELAY_UPSTREAM_TIMEOUT_S: 请求超时（秒，默认 5）
    """

    bot_token: SecretStr = Field(
        default=SecretStr(""),
        description="Bot 认证凭据，空值表示未配置",
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="上游 REST API 基础 URL",
    )
    timeout_s: int = Field(
        default=DEFAULT_TIMEOUT_S,
        ge=1,
        description="上游请求超时（秒）",
    )


def load_provider_config() -> ProviderConfig:
    """从环境变量加载上游 API 配置

    Returns:
        ProviderConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("BOT_TOKEN"):
        kwargs["bot_token"] = SecretStr(val)

    if val := os.environ.get("DISCORD_API_BASE_URL"):
        kwargs["api_base_url"] = val

    if val := os.environ.get("CHANRELAY_UPSTREAM_TIMEOUT_S"):
        try:
            timeout_s = int(val)
        except ValueError:
            timeout_s = 0
        if timeout_s >= 1:
            kwargs["timeout_s"] = timeout_s
        else:
            log.warning(
                "invalid_timeout_config",
                env_var="CHANRELAY_UPSTREAM_TIMEOUT_S",
                value=val,
                fallback=DEFAULT_TIMEOUT_S,
            )
            # 使用默认值，不阻塞启动

    return ProviderConfig(**kwargs)

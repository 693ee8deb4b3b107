"""chanrelay Provider -- 上游聊天平台 API 调用层

provider 包的公开接口导出。
"""

# 核心组件
from .client import DiscordClient

# 配置
from .config import ProviderConfig, load_provider_config

# 异常
from .exceptions import ProviderError, UpstreamHTTPError, UpstreamUnreachableError

__all__ = [
    "DiscordClient",
    "ProviderConfig",
    "load_provider_config",
    "ProviderError",
    "UpstreamHTTPError",
    "UpstreamUnreachableError",
]

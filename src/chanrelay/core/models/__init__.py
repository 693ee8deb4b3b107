"""chanrelay Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .lookup import LookupResult
from .message import (
    NormalizedAttachment,
    NormalizedMessage,
    UpstreamAttachment,
    UpstreamAuthor,
    UpstreamMessage,
    parse_upstream_messages,
)

__all__ = [
    # 上游
    "UpstreamMessage",
    "UpstreamAuthor",
    "UpstreamAttachment",
    "parse_upstream_messages",
    # 归一化
    "NormalizedMessage",
    "NormalizedAttachment",
    # 查询
    "LookupResult",
]

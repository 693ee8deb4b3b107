"""Provider 异常体系"""


class ProviderError(Exception):
    """Provider 包基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 是否可通过重试恢复（本服务不重试，仅作标记）
        """
        super().__init__(message)
        self.recoverable = recoverable


class UpstreamUnreachableError(ProviderError):
    """上游 API 不可达（连接失败、超时、DNS 解析失败等）"""

    def __init__(self, url: str, original_error: Exception) -> None:
        """
        Args:
            url: 请求的上游地址
            original_error: 原始异常
        """
        super().__init__(
            f"上游 API 不可达: {url} -- {original_error}",
            recoverable=True,
        )
        self.url = url
        self.original_error = original_error


class UpstreamHTTPError(ProviderError):
    """上游 API 返回非 2xx 状态码

    status_code 与 text 原样透传给调用方。
    """

    def __init__(self, status_code: int, text: str) -> None:
        """
        Args:
            status_code: 上游 HTTP 状态码
            text: 上游响应体文本
        """
        super().__init__(
            f"上游 API 返回 {status_code}",
            recoverable=status_code == 429 or status_code >= 500,
        )
        self.status_code = status_code
        self.text = text

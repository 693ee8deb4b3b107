"""ErrorMiddleware

兜底：请求处理中任何未捕获异常转换为 500 server_error JSON 响应，
保证调用方总能拿到 HTTP 响应。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

log = structlog.get_logger()


class ErrorMiddleware(BaseHTTPMiddleware):
    """顶层异常转换中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            log.exception(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return JSONResponse(
                status_code=500,
                content={"error": "server_error", "detail": str(e)},
            )

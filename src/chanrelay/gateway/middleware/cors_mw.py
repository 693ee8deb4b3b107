"""CorsMiddleware

所有响应（成功或错误）附带 CORS 头；OPTIONS 预检直接返回 204 空响应。
Allow-Origin 优先级: ALLOWED_ORIGIN 配置 > 请求 Origin 头 > "*"
回显请求 Origin 时追加 Vary: Origin。
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

ALLOW_METHODS = "GET,OPTIONS"
ALLOW_HEADERS = "Content-Type"


def cors_headers(request: Request, allowed_origin: str = "") -> dict[str, str]:
    """计算请求对应的 CORS 响应头"""
    request_origin = request.headers.get("origin")
    headers = {
        "Access-Control-Allow-Origin": allowed_origin or request_origin or "*",
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }
    if not allowed_origin and request_origin:
        headers["Vary"] = "Origin"
    return headers


class CorsMiddleware(BaseHTTPMiddleware):
    """CORS 中间件"""

    def __init__(self, app: ASGIApp, allowed_origin: str = "") -> None:
        super().__init__(app)
        self._allowed_origin = allowed_origin

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        headers = cors_headers(request, self._allowed_origin)

        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)

        response = await call_next(request)
        vary = headers.pop("Vary", None)
        response.headers.update(headers)
        if vary:
            # 与下游已有的 Vary 合并
            response.headers.add_vary_header(vary)
        return response

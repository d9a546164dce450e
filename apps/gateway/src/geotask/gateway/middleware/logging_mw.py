"""LoggingMiddleware -- 请求级日志

- request_id：沿用客户端传入的 X-Request-ID（合法时），否则生成 ULID
- request_id 在请求处理期间绑定到 structlog contextvars，
  ToolClient 的调用日志与转发给 Tool 服务端的 X-Request-ID 都使用同一个值
- 请求结束记录状态码与耗时；5xx 记 error，4xx 记 warning
"""

import re
import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

# 客户端传入的 request_id 只接受短的可打印标识
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,64}$")

log = structlog.get_logger()


def _resolve_request_id(request: Request) -> str:
    incoming = request.headers.get(REQUEST_ID_HEADER)
    if incoming and _REQUEST_ID_RE.match(incoming):
        return incoming
    return str(ULID())


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = _resolve_request_id(request)
        start_time = time.monotonic()

        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            try:
                response = await call_next(request)
            except Exception:
                log.exception(
                    "request_failed",
                    duration_ms=int((time.monotonic() - start_time) * 1000),
                )
                raise

            duration_ms = int((time.monotonic() - start_time) * 1000)
            if response.status_code >= 500:
                log_method = log.error
            elif response.status_code >= 400:
                log_method = log.warning
            else:
                log_method = log.info
            log_method(
                "request_completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

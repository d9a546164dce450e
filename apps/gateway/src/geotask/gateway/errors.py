"""统一错误响应

所有错误响应体形如 {"error": {"code": ..., "message": ...}}，
包括 FastAPI 自身的请求校验失败。
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from geotask.mcp import InvalidArgumentError, ProtocolError, ToolClientError, TransportError
from starlette.responses import JSONResponse


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def tool_error_response(e: ToolClientError) -> JSONResponse:
    """将 Tool 异常映射为 HTTP 错误响应

    参数非法 422，远端传输/协议错误 502。
    """
    if isinstance(e, InvalidArgumentError):
        status_code, code = 422, "INVALID_ARGUMENT"
    elif isinstance(e, TransportError):
        status_code, code = 502, "TOOL_SERVER_UNAVAILABLE"
    elif isinstance(e, ProtocolError):
        status_code, code = 502, "TOOL_RESPONSE_MALFORMED"
    else:
        status_code, code = 502, "TOOL_ERROR"
    return error_response(status_code, code, str(e))


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else err.get("msg", "invalid"))
    return "; ".join(parts) or "Invalid request"


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """FastAPI 请求校验失败（query/body 类型或枚举不匹配、缺参数）"""
    return error_response(422, "INVALID_REQUEST", _format_validation_errors(exc))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)

"""ToolClient -- 远程 Tool 调用封装

通用信封（name + arguments）发往单一远端地址，不感知任何 Maps 语义。
传输细节（header、序列化、状态码检查）只在此处处理。
每次调用只尝试一次，失败立即抛给调用方，不做重试。
当前上下文绑定了 request_id 时，以 X-Request-ID 头转发给远端。
"""

import time
from typing import Any

import httpx
import structlog

from .config import DEFAULT_MCP_URL, DEFAULT_TIMEOUT_S
from .exceptions import InvalidArgumentError, ProtocolError, TransportError
from .models import ToolList, ToolRequest, ToolResponse

log = structlog.get_logger()

CALL_PATH = "/tools/call"
LIST_PATH = "/tools/list"
REQUEST_ID_HEADER = "X-Request-ID"


class ToolClient:
    """远程 Tool 服务客户端

    base_url 在构造时确定，之后不可变。
    """

    def __init__(
        self,
        base_url: str = DEFAULT_MCP_URL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初始化 Tool 客户端

        Args:
            base_url: Tool 服务端基础 URL
            timeout_s: 单次请求超时（秒），超时按 TransportError 处理
            transport: 可选 httpx transport（测试注入 MockTransport）
        """
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None = None,
    ) -> ToolResponse:
        """调用远端 Tool

        Args:
            name: Tool 名称
            arguments: JSON 参数表

        Returns:
            ToolResponse，content 原样透传

        Raises:
            InvalidArgumentError: name 为空
            TransportError: 请求无法发送或远端返回非 2xx
            ProtocolError: 响应体不是 {"content": ...} 结构
        """
        if not name or not name.strip():
            raise InvalidArgumentError("name")

        request = ToolRequest(name=name, arguments=arguments or {})
        body = await self._post(CALL_PATH, request.model_dump(), tool=name)

        if not isinstance(body, dict) or "content" not in body:
            log.error("tool_response_malformed", tool=name, body_type=type(body).__name__)
            raise ProtocolError(
                f"Tool '{name}' response has no 'content' field",
                payload=body,
            )
        return ToolResponse(content=body["content"])

    async def list_tools(self) -> ToolList:
        """列出远端声明的 Tool（诊断用，不在用户操作热路径上）

        Raises:
            TransportError: 请求无法发送或远端返回非 2xx
            ProtocolError: 响应体不含 tools 数组
        """
        body = await self._post(LIST_PATH, None, tool="tools/list")

        if not isinstance(body, dict) or not isinstance(body.get("tools"), list):
            raise ProtocolError("Tool list response has no 'tools' array", payload=body)
        try:
            return ToolList.model_validate(body)
        except ValueError as e:
            raise ProtocolError(f"Tool list response is malformed: {e}", payload=body) from e

    async def health_check(self) -> bool:
        """检查 Tool 服务端可达性

        Returns:
            True 如果 tools/list 成功，否则 False

        注意: 此方法不抛出异常。
        """
        try:
            await self.list_tools()
            return True
        except (TransportError, ProtocolError) as e:
            log.debug("tool_server_health_check_failed", url=self._base_url, error=str(e))
            return False

    async def _post(self, path: str, payload: dict[str, Any] | None, tool: str) -> Any:
        """发送 POST 请求并解码 JSON 响应体"""
        url = f"{self._base_url}{path}"
        start_time = time.monotonic()

        headers = {"Content-Type": "application/json"}
        request_id = structlog.contextvars.get_contextvars().get("request_id")
        if request_id:
            headers[REQUEST_ID_HEADER] = request_id

        log.debug("tool_call_start", tool=tool, url=url)

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout_s,
                headers=headers,
            ) as http_client:
                if payload is None:
                    resp = await http_client.post(url)
                else:
                    resp = await http_client.post(url, json=payload)
        except httpx.HTTPError as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            log.error(
                "tool_call_failed",
                tool=tool,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=duration_ms,
            )
            raise TransportError(url=url, original_error=e) from e

        duration_ms = int((time.monotonic() - start_time) * 1000)

        if not resp.is_success:
            log.error(
                "tool_call_failed",
                tool=tool,
                status_code=resp.status_code,
                duration_ms=duration_ms,
            )
            raise TransportError(url=url, status_code=resp.status_code)

        try:
            body = resp.json()
        except ValueError as e:
            log.error("tool_response_not_json", tool=tool, duration_ms=duration_ms)
            raise ProtocolError(f"Tool '{tool}' response is not valid JSON") from e

        log.info(
            "tool_call_completed",
            tool=tool,
            status_code=resp.status_code,
            duration_ms=duration_ms,
        )
        return body

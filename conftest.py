"""全局 pytest 配置 -- 伪 Tool 服务端 + 临时 SQLite 数据库 fixture"""

import json
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

import aiosqlite
import httpx
import pytest
import pytest_asyncio
from geotask.mcp import MapsClient, ToolClient

TOOL_SERVER_URL = "http://tools.test/mcp"

DEFAULT_TOOLS = [
    {"name": "search_places", "description": "Search places by text", "inputSchema": {}},
    {"name": "get_place_details", "description": "Place details", "inputSchema": {}},
    {"name": "get_directions", "description": "Directions", "inputSchema": {}},
    {"name": "nearby_search", "description": "Nearby places", "inputSchema": {}},
]


class FakeToolServer:
    """按 Tool 名称返回预设响应，并记录收到的请求"""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self._list_route: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"tools": DEFAULT_TOOLS})
        )

    # ---- 预设响应 ----

    def reply(self, tool: str, content: Any) -> None:
        """tools/call 成功响应 {"content": content}"""
        self._routes[tool] = lambda request: httpx.Response(200, json={"content": content})

    def reply_body(self, tool: str, body: Any) -> None:
        """tools/call 返回任意 JSON 响应体"""
        self._routes[tool] = lambda request: httpx.Response(200, json=body)

    def reply_text(self, tool: str, text: str) -> None:
        self._routes[tool] = lambda request: httpx.Response(200, text=text)

    def fail(self, tool: str, status_code: int = 500) -> None:
        self._routes[tool] = lambda request: httpx.Response(
            status_code, json={"error": "boom"}
        )

    def raise_error(self, tool: str, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)

        self._routes[tool] = _raise

    def list_reply(self, body: Any, status_code: int = 200) -> None:
        self._list_route = lambda request: httpx.Response(status_code, json=body)

    # ---- 请求记录 ----

    @property
    def calls(self) -> list[dict[str, Any]]:
        """已收到的 tools/call 请求体"""
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.path.endswith("/tools/call")
        ]

    @property
    def last_call(self) -> dict[str, Any]:
        return self.calls[-1]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/tools/list"):
            return self._list_route(request)

        body = json.loads(request.content)
        route = self._routes.get(body.get("name"))
        if route is None:
            return httpx.Response(404, json={"error": f"unknown tool {body.get('name')}"})
        return route(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def tool_server() -> FakeToolServer:
    """伪 Tool 服务端"""
    return FakeToolServer()


@pytest.fixture
def tool_client(tool_server: FakeToolServer) -> ToolClient:
    """连接伪 Tool 服务端的 ToolClient"""
    return ToolClient(
        base_url=TOOL_SERVER_URL,
        timeout_s=5,
        transport=tool_server.transport(),
    )


@pytest.fixture
def maps_client(tool_client: ToolClient) -> MapsClient:
    return MapsClient(tool_client)


@pytest.fixture
def central_park() -> dict[str, Any]:
    """search_places 返回的单个地点"""
    return {
        "place_id": "ChIJ4zGFAZpYwokRGUGph3Mf37k",
        "name": "Central Park",
        "formatted_address": "Central Park, NYC",
        "rating": 4.8,
        "types": ["park", "tourist_attraction"],
        "geometry": {"location": {"lat": 40.78, "lng": -73.96}},
    }


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "test.db"


@pytest_asyncio.fixture
async def db_conn(tmp_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    from geotask.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_db_path))
    await init_db(conn)
    yield conn
    await conn.close()

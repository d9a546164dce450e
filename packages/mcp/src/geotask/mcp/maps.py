"""MapsClient -- Maps 能力方法

每个方法只做两件事：
1. 组装 Tool 参数（含默认值，未提供的可选参数不出现在参数表中）
2. 委托 ToolClient 调用，并在边界处把不透明 content 解析为带 kind 的结果类型

本地只校验必填字符串非空；地址能否解析等更深的校验由远端负责。
"""

from typing import Any

import structlog
from pydantic import ValidationError

from .client import ToolClient
from .exceptions import InvalidArgumentError, ProtocolError
from .models import (
    Direction,
    DirectionResult,
    LatLng,
    Place,
    PlaceDetail,
    PlaceList,
    ToolList,
)

log = structlog.get_logger()

# 远端 Tool 名称
SEARCH_PLACES_TOOL = "search_places"
PLACE_DETAILS_TOOL = "get_place_details"
DIRECTIONS_TOOL = "get_directions"
NEARBY_SEARCH_TOOL = "nearby_search"

DEFAULT_TRAVEL_MODE = "driving"


def _require_text(argument: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise InvalidArgumentError(argument)
    return value


def _latlng_arg(location: LatLng | dict[str, float]) -> dict[str, float]:
    """统一为 {"lat": ..., "lng": ...}"""
    if isinstance(location, LatLng):
        return location.model_dump()
    try:
        return LatLng.model_validate(location).model_dump()
    except ValidationError as e:
        raise InvalidArgumentError("location", f"Invalid location: {e}") from e


def parse_place_list(content: Any, tool: str = SEARCH_PLACES_TOOL) -> PlaceList:
    """解析地点列表载荷

    接受：
        - 地点数组
        - {"results": [...]} 或 {"places": [...]}
        - null（视为空列表）

    不是合法地点的条目（如 {} 或 {"type": "text", ...}）被跳过，
    因此全部条目非法时结果为空列表。
    """
    if content is None:
        return PlaceList()

    items: Any = content
    if isinstance(content, dict):
        items = next(
            (content[key] for key in ("results", "places") if isinstance(content.get(key), list)),
            None,
        )
    if not isinstance(items, list):
        raise ProtocolError(f"Tool '{tool}' content is not a place list", payload=content)

    places: list[Place] = []
    for index, item in enumerate(items):
        try:
            places.append(Place.model_validate(item))
        except ValidationError as e:
            log.warning(
                "place_entry_skipped",
                tool=tool,
                index=index,
                error_count=e.error_count(),
            )
    return PlaceList(places=places)


def parse_place_detail(content: Any) -> PlaceDetail:
    """解析地点详情载荷（地点对象，或 {"result": {...}}）"""
    if isinstance(content, dict) and isinstance(content.get("result"), dict):
        content = content["result"]
    if not isinstance(content, dict):
        raise ProtocolError(
            f"Tool '{PLACE_DETAILS_TOOL}' content is not a place object", payload=content
        )
    try:
        return PlaceDetail(place=Place.model_validate(content))
    except ValidationError as e:
        raise ProtocolError(
            f"Tool '{PLACE_DETAILS_TOOL}' returned an invalid place: {e}", payload=content
        ) from e


def parse_direction(content: Any) -> DirectionResult:
    """解析路线载荷

    接受单条路线对象，或 {"routes": [...]}（取第一条路线；无路线时为空路线）。
    """
    if isinstance(content, dict) and isinstance(content.get("routes"), list):
        routes = content["routes"]
        content = routes[0] if routes else {}
    if not isinstance(content, dict):
        raise ProtocolError(
            f"Tool '{DIRECTIONS_TOOL}' content is not a direction object", payload=content
        )
    try:
        return DirectionResult(direction=Direction.model_validate(content))
    except ValidationError as e:
        raise ProtocolError(
            f"Tool '{DIRECTIONS_TOOL}' returned an invalid direction: {e}", payload=content
        ) from e


class MapsClient:
    """Maps 能力门面 -- 构建在 ToolClient 之上的强类型方法集合"""

    def __init__(self, tool_client: ToolClient) -> None:
        self._tools = tool_client

    @property
    def tool_client(self) -> ToolClient:
        return self._tools

    async def search_places(
        self,
        query: str,
        location: LatLng | dict[str, float] | None = None,
    ) -> PlaceList:
        """按文本搜索地点

        Args:
            query: 搜索文本（非空）
            location: 可选偏置坐标，None 时参数表中不出现 location
        """
        arguments: dict[str, Any] = {"query": _require_text("query", query)}
        if location is not None:
            arguments["location"] = _latlng_arg(location)

        response = await self._tools.call_tool(SEARCH_PLACES_TOOL, arguments)
        result = parse_place_list(response.content, SEARCH_PLACES_TOOL)
        log.debug("places_found", query=query, count=len(result.places))
        return result

    async def get_place_details(self, place_id: str) -> PlaceDetail:
        """查询单个地点的扩展信息"""
        arguments = {"place_id": _require_text("place_id", place_id)}
        response = await self._tools.call_tool(PLACE_DETAILS_TOOL, arguments)
        return parse_place_detail(response.content)

    async def get_directions(
        self,
        origin: str,
        destination: str,
        mode: str | None = None,
    ) -> DirectionResult:
        """查询路线，mode 缺省为 driving"""
        arguments = {
            "origin": _require_text("origin", origin),
            "destination": _require_text("destination", destination),
            "mode": mode or DEFAULT_TRAVEL_MODE,
        }
        response = await self._tools.call_tool(DIRECTIONS_TOOL, arguments)
        return parse_direction(response.content)

    async def get_nearby_places(
        self,
        location: LatLng | dict[str, float],
        radius: float,
        type: str | None = None,
    ) -> PlaceList:
        """查询坐标附近的地点

        Args:
            location: 中心坐标
            radius: 搜索半径（米，必须为正数）
            type: 可选地点类型，None 时参数表中不出现 type
        """
        if radius is None or radius <= 0:
            raise InvalidArgumentError("radius", "Argument 'radius' must be a positive number")

        arguments: dict[str, Any] = {"location": _latlng_arg(location), "radius": radius}
        if type:
            arguments["type"] = type

        response = await self._tools.call_tool(NEARBY_SEARCH_TOOL, arguments)
        return parse_place_list(response.content, NEARBY_SEARCH_TOOL)

    async def list_tools(self) -> ToolList:
        return await self._tools.list_tools()

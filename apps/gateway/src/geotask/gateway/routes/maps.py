"""Maps 路由 -- 能力方法的 HTTP 透传

GET /api/places/search       地点搜索
GET /api/places/suggest      输入中的地点候选（不足 3 个字符返回空，最多 5 个）
GET /api/places/nearby       附近地点
GET /api/places/{place_id}   地点详情
GET /api/directions          路线（mode 缺省 driving）
GET /api/tools               远端 Tool 目录（诊断）

错误映射：参数非法 422，远端传输/协议错误 502。
"""

from fastapi import APIRouter, Depends, Query
from geotask.core.enrichment import DEFAULT_SUGGESTION_LIMIT, LocationEnricher
from geotask.mcp import InvalidArgumentError, LatLng, MapsClient, ToolClientError

from ..deps import get_enricher, get_maps_client
from ..errors import tool_error_response

router = APIRouter()


@router.get("/api/places/search")
async def search_places(
    query: str = Query(description="搜索文本"),
    lat: float | None = Query(default=None, description="偏置纬度"),
    lng: float | None = Query(default=None, description="偏置经度"),
    maps: MapsClient = Depends(get_maps_client),
):
    if (lat is None) != (lng is None):
        return tool_error_response(
            InvalidArgumentError("location", "lat and lng must be given together")
        )
    location = LatLng(lat=lat, lng=lng) if lat is not None else None
    try:
        result = await maps.search_places(query, location=location)
    except ToolClientError as e:
        return tool_error_response(e)
    return result.model_dump()


@router.get("/api/places/suggest")
async def suggest_places(
    query: str = Query(default="", description="正在输入的地点文本"),
    limit: int = Query(default=DEFAULT_SUGGESTION_LIMIT, ge=1, le=20, description="最多候选数"),
    enricher: LocationEnricher = Depends(get_enricher),
):
    try:
        places = await enricher.suggest(query, limit=limit)
    except ToolClientError as e:
        return tool_error_response(e)
    return {"places": [p.model_dump() for p in places]}


@router.get("/api/places/nearby")
async def nearby_places(
    lat: float = Query(description="中心纬度"),
    lng: float = Query(description="中心经度"),
    radius: float = Query(description="搜索半径（米）"),
    type: str | None = Query(default=None, description="地点类型"),
    maps: MapsClient = Depends(get_maps_client),
):
    try:
        result = await maps.get_nearby_places(LatLng(lat=lat, lng=lng), radius, type=type)
    except ToolClientError as e:
        return tool_error_response(e)
    return result.model_dump()


@router.get("/api/places/{place_id}")
async def place_details(
    place_id: str,
    maps: MapsClient = Depends(get_maps_client),
):
    try:
        result = await maps.get_place_details(place_id)
    except ToolClientError as e:
        return tool_error_response(e)
    return result.model_dump()


@router.get("/api/directions")
async def directions(
    origin: str = Query(description="起点"),
    destination: str = Query(description="终点"),
    mode: str | None = Query(default=None, description="出行方式，默认 driving"),
    maps: MapsClient = Depends(get_maps_client),
):
    try:
        result = await maps.get_directions(origin, destination, mode=mode)
    except ToolClientError as e:
        return tool_error_response(e)
    return result.model_dump()


@router.get("/api/tools")
async def list_tools(maps: MapsClient = Depends(get_maps_client)):
    try:
        result = await maps.list_tools()
    except ToolClientError as e:
        return tool_error_response(e)
    return {"tools": [t.model_dump() for t in result.tools]}

"""LocationEnricher -- 地点解析（尽力而为）

把自由文本地点解析为 地址 + 坐标：
1. 调用 search_places(query)
2. 取第一个结果作为匹配（不做消歧、不做二次排序）
3. 远端无坐标时 lat/lng 记为 0

另提供输入过程中的地点候选（suggest）：不足 3 个字符不查询，最多返回 5 个。

失败不抛异常，而是返回 outcome=failed 的 EnrichmentResult，
由调用方（TaskStore.create）显式映射为"无地点"。
"""

from enum import StrEnum
from typing import Protocol

import structlog
from geotask.mcp import LatLng, Place, PlaceList, ToolClientError
from pydantic import BaseModel, Field, model_validator

from .exceptions import ValidationError
from .models.task import TaskLocation

log = structlog.get_logger()

MIN_SUGGEST_QUERY_LENGTH = 3
DEFAULT_SUGGESTION_LIMIT = 5


class PlaceSearcher(Protocol):
    """地点搜索接口（MapsClient 满足此接口）"""

    async def search_places(
        self,
        query: str,
        location: LatLng | dict[str, float] | None = None,
    ) -> PlaceList:
        ...


class EnrichmentOutcome(StrEnum):
    RESOLVED = "resolved"
    NO_MATCH = "no_match"
    FAILED = "failed"


class EnrichmentResult(BaseModel):
    """地点解析结果

    仅 outcome=resolved 时携带 location。
    """

    outcome: EnrichmentOutcome
    location: TaskLocation | None = None
    reason: str = Field(default="", description="未解析时的原因说明")

    @model_validator(mode="after")
    def _location_only_when_resolved(self) -> "EnrichmentResult":
        if (self.outcome == EnrichmentOutcome.RESOLVED) != (self.location is not None):
            raise ValueError("location must be set if and only if outcome is resolved")
        return self

    @property
    def ok(self) -> bool:
        return self.outcome == EnrichmentOutcome.RESOLVED


def location_from_place(place: Place) -> TaskLocation:
    """从地点构造 TaskLocation，缺失坐标记为 0"""
    coords = place.location
    return TaskLocation(
        address=place.formatted_address,
        lat=coords.lat if coords is not None else 0.0,
        lng=coords.lng if coords is not None else 0.0,
    )


class LocationEnricher:
    """地点解析工作流"""

    def __init__(self, searcher: PlaceSearcher) -> None:
        self._searcher = searcher

    async def enrich(self, query: str) -> EnrichmentResult:
        """解析自由文本地点

        Returns:
            EnrichmentResult
            - 有结果: outcome=resolved，location 为第一个结果
            - 无结果: outcome=no_match
            - 调用失败: outcome=failed，reason 为错误描述
        """
        try:
            places = await self._searcher.search_places(query)
        except ToolClientError as e:
            log.warning(
                "location_enrichment_failed",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
            )
            return EnrichmentResult(outcome=EnrichmentOutcome.FAILED, reason=str(e))

        place = places.first()
        if place is None:
            log.info("location_enrichment_no_match", query=query)
            return EnrichmentResult(
                outcome=EnrichmentOutcome.NO_MATCH,
                reason=f"No place matches '{query}'",
            )

        location = location_from_place(place)
        log.debug(
            "location_enriched",
            query=query,
            address=location.address,
            candidates=len(places.places),
        )
        return EnrichmentResult(outcome=EnrichmentOutcome.RESOLVED, location=location)

    async def suggest(self, query: str, limit: int = DEFAULT_SUGGESTION_LIMIT) -> list[Place]:
        """输入中的地点候选

        Args:
            query: 正在输入的地点文本
            limit: 最多返回的候选数

        Returns:
            搜索结果的前 limit 个；去除空白后不足 3 个字符时返回 []，不发起远程调用

        Raises:
            ValidationError: limit 不是正数
            ToolClientError: 远端调用失败（候选列表不做降级）
        """
        if limit <= 0:
            raise ValidationError("limit", "Suggestion limit must be positive")

        query = query.strip()
        if len(query) < MIN_SUGGEST_QUERY_LENGTH:
            return []

        places = await self._searcher.search_places(query)
        suggestions = places.places[:limit]
        log.debug("location_suggestions", query=query, count=len(suggestions))
        return suggestions

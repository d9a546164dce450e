"""到任务地点的路线

任务没有地点时不发起远程调用，直接返回 None。
起点缺省为 "Current Location"，由远端按调用方当前位置解析。
"""

from typing import Protocol

import structlog
from geotask.mcp import DirectionResult

from .models.task import Task

log = structlog.get_logger()

DEFAULT_ORIGIN = "Current Location"


class DirectionsProvider(Protocol):
    """路线查询接口（MapsClient 满足此接口）"""

    async def get_directions(
        self,
        origin: str,
        destination: str,
        mode: str | None = None,
    ) -> DirectionResult:
        ...


async def directions_to_task(
    provider: DirectionsProvider,
    task: Task,
    origin: str | None = None,
    mode: str | None = None,
) -> DirectionResult | None:
    """查询从 origin 到任务地址的路线

    Args:
        provider: 路线查询接口
        task: 目标任务
        origin: 起点，空值时使用 DEFAULT_ORIGIN
        mode: 出行方式，None 时由 provider 决定默认值

    Returns:
        DirectionResult；任务无地点时返回 None

    Raises:
        ToolClientError: 远端调用失败，原样抛出
    """
    if task.location is None:
        log.info("task_directions_skipped", task_id=task.id, reason="no_location")
        return None

    origin = origin.strip() if origin and origin.strip() else DEFAULT_ORIGIN
    result = await provider.get_directions(origin, task.location.address, mode=mode)
    log.debug(
        "task_directions_found",
        task_id=task.id,
        origin=origin,
        legs=len(result.direction.legs),
    )
    return result

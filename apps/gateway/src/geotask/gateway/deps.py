"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store / MapsClient / LocationEnricher 实例

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request
from geotask.core.enrichment import LocationEnricher
from geotask.core.store import StoreGroup, TaskStore
from geotask.mcp import MapsClient


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_task_store(request: Request) -> TaskStore:
    return request.app.state.store_group.task_store


def get_maps_client(request: Request) -> MapsClient:
    """从 app.state 获取 MapsClient 实例"""
    return request.app.state.maps_client


def get_enricher(request: Request) -> LocationEnricher:
    return request.app.state.enricher

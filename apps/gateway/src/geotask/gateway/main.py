"""FastAPI 应用主文件

app 创建 + lifespan 管理：Tool 客户端初始化 + Store 初始化/关闭 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from geotask.core.config import get_db_path, get_tasks_slot_key
from geotask.core.enrichment import LocationEnricher
from geotask.core.store import create_store_group
from geotask.mcp import MapsClient, ToolClient, load_mcp_config

from .errors import install_error_handlers
from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .routes import health, maps, tasks

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化客户端与 Store，关闭时清理连接"""
    mcp_config = load_mcp_config()
    tool_client = ToolClient(
        base_url=mcp_config.base_url,
        timeout_s=mcp_config.timeout_s,
    )
    maps_client = MapsClient(tool_client)
    app.state.mcp_config = mcp_config
    app.state.tool_client = tool_client
    app.state.maps_client = maps_client

    enricher = LocationEnricher(maps_client)
    app.state.enricher = enricher

    store_group = await create_store_group(
        get_db_path(),
        enricher=enricher,
        slot_key=get_tasks_slot_key(),
    )
    app.state.store_group = store_group

    log.info(
        "gateway_initialized",
        tool_server_url=mcp_config.base_url,
        timeout_s=mcp_config.timeout_s,
        task_count=len(store_group.task_store.list_tasks()),
    )

    yield

    # 关闭：清理数据库连接
    if getattr(app.state, "store_group", None):
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="GeoTask Gateway",
        version="0.1.0",
        description="地点搜索 / 路线 / 带地点的任务列表 API",
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    install_error_handlers(app)

    setup_logging()

    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(maps.router, tags=["maps"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()

"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from geotask.core.enrichment import LocationEnricher
from geotask.core.store import StoreGroup, create_store_group
from httpx import ASGITransport, AsyncClient


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "sqlite" / "geotask.db")


@pytest.fixture
def build_app(db_path: str, tool_client, maps_client) -> Callable:
    """模拟一次进程启动：新 app + 新连接，共享同一个数据库文件"""

    async def _build() -> tuple[FastAPI, StoreGroup]:
        from geotask.gateway.main import create_app

        app = create_app()
        enricher = LocationEnricher(maps_client)
        store_group = await create_store_group(db_path, enricher=enricher)
        app.state.store_group = store_group
        app.state.enricher = enricher
        app.state.tool_client = tool_client
        app.state.maps_client = maps_client
        return app, store_group

    return _build


@pytest_asyncio.fixture
async def integration_app(build_app):
    """集成测试用 FastAPI app"""
    app, store_group = await build_app()
    yield app
    await store_group.conn.close()


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac

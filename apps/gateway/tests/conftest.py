"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient fixture

绕过 lifespan，手动把 Store 与连接伪 Tool 服务端的客户端放入 app.state。
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from geotask.core.enrichment import LocationEnricher
from geotask.core.store import create_store_group
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def test_app(tmp_path: Path, tool_client, maps_client):
    """创建测试用 FastAPI app 实例"""
    from geotask.gateway.main import create_app

    app = create_app()

    enricher = LocationEnricher(maps_client)
    store_group = await create_store_group(
        str(tmp_path / "sqlite" / "test.db"),
        enricher=enricher,
    )
    app.state.store_group = store_group
    app.state.enricher = enricher
    app.state.tool_client = tool_client
    app.state.maps_client = maps_client

    yield app

    await store_group.conn.close()


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac

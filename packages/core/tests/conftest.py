"""packages/core 测试配置 -- 持久化槽与 TaskStore fixture"""

from collections.abc import Callable

import aiosqlite
import pytest
from geotask.core.enrichment import LocationEnricher
from geotask.core.store import SqliteKeyValueStore, TaskStore


@pytest.fixture
def kv_store(db_conn: aiosqlite.Connection) -> SqliteKeyValueStore:
    return SqliteKeyValueStore(db_conn)


@pytest.fixture
def enricher(maps_client) -> LocationEnricher:
    """基于伪 Tool 服务端的地点解析器"""
    return LocationEnricher(maps_client)


@pytest.fixture
def make_store(kv_store, enricher) -> Callable[..., TaskStore]:
    """在同一个持久化槽上构造新的 TaskStore（模拟重新启动）"""

    def _make(**kwargs) -> TaskStore:
        kwargs.setdefault("enricher", enricher)
        return TaskStore(kv_store, **kwargs)

    return _make


@pytest.fixture
async def task_store(make_store) -> TaskStore:
    """已加载（空集合）的 TaskStore"""
    store = make_store()
    await store.load()
    return store

"""GeoTask Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

from pathlib import Path

import aiosqlite
import structlog

from ..config import DEFAULT_TASKS_SLOT_KEY
from ..enrichment import LocationEnricher
from .codec import decode_tasks, encode_tasks, task_to_record
from .kv_store import SqliteKeyValueStore
from .sqlite_init import init_db, verify_wal_mode
from .task_store import TaskStore

log = structlog.get_logger()


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(
        self,
        conn: aiosqlite.Connection,
        enricher: LocationEnricher | None = None,
        slot_key: str = DEFAULT_TASKS_SLOT_KEY,
    ) -> None:
        self.conn = conn
        self.kv_store = SqliteKeyValueStore(conn)
        self.task_store = TaskStore(self.kv_store, enricher=enricher, slot_key=slot_key)


async def create_store_group(
    db_path: str,
    enricher: LocationEnricher | None = None,
    slot_key: str = DEFAULT_TASKS_SLOT_KEY,
) -> StoreGroup:
    """创建 Store 实例组并加载任务集合

    Args:
        db_path: SQLite 数据库文件路径
        enricher: 地点解析器
        slot_key: 任务集合所在的 key

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)
    if not await verify_wal_mode(conn):
        log.warning("sqlite_wal_not_enabled", db_path=db_path)

    store_group = StoreGroup(conn=conn, enricher=enricher, slot_key=slot_key)
    await store_group.task_store.load()
    return store_group


__all__ = [
    "StoreGroup",
    "create_store_group",
    "TaskStore",
    "SqliteKeyValueStore",
    "init_db",
    "encode_tasks",
    "decode_tasks",
    "task_to_record",
]

"""KeyValueStore SQLite 实现

每个 key 保存一段完整的 JSON 文本，set() 即覆盖写并立即提交。
"""

from datetime import UTC, datetime

import aiosqlite


class SqliteKeyValueStore:
    """KeyValueStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get(self, key: str) -> str | None:
        """读取 key 对应的值，不存在返回 None"""
        cursor = await self._conn.execute(
            "SELECT value FROM kv_slots WHERE key = ?",
            (key,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return row[0]

    async def set(self, key: str, value: str) -> None:
        """覆盖写入并提交"""
        await self._conn.execute(
            """
            INSERT INTO kv_slots (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, value, datetime.now(UTC).isoformat()),
        )
        await self._conn.commit()

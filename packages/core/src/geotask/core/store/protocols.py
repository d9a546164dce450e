"""Store Protocol 接口定义

使用 Python Protocol 实现结构化子类型（duck typing），
TaskStore 只依赖此接口，不依赖具体存储。
"""

from typing import Protocol


class KeyValueStore(Protocol):
    """持久化槽接口 -- 一个 key 对应一段文本"""

    async def get(self, key: str) -> str | None:
        """读取 key 对应的值，不存在返回 None"""
        ...

    async def set(self, key: str, value: str) -> None:
        """覆盖写入"""
        ...

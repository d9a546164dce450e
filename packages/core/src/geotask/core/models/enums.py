"""枚举定义

包含 Priority 优先级与 TaskState 任务状态。
"""

from enum import StrEnum


class Priority(StrEnum):
    """任务优先级"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskState(StrEnum):
    """Task 状态

    PENDING <-> COMPLETED 通过 toggle 互相切换；
    remove 从任一状态进入终态 DELETED（任务从集合中消失）。
    状态由 completed 字段派生，仅用于日志与视图，不单独持久化。
    """

    PENDING = "pending"
    COMPLETED = "completed"
    DELETED = "deleted"

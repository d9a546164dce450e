"""GeoTask Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import Priority, TaskState
from .task import Task, TaskDraft, TaskLocation, truncate_to_millis

__all__ = [
    # 枚举
    "Priority",
    "TaskState",
    # Task
    "Task",
    "TaskDraft",
    "TaskLocation",
    "truncate_to_millis",
]

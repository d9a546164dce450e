"""Task Store 异常体系"""


class TaskStoreError(Exception):
    """Task Store 基础异常"""


class ValidationError(TaskStoreError, ValueError):
    """本地输入非法（如标题为空），在任何远程调用之前抛出"""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(TaskStoreError, LookupError):
    """操作引用的 task_id 不存在"""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with id {task_id} does not exist")
        self.task_id = task_id


class CorruptSlotError(TaskStoreError):
    """持久化槽中的数据无法解码

    TaskStore.load() 捕获此异常并降级为空列表。
    """

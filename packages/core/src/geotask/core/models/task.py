"""Task Domain Model

Task 是唯一持久化的实体。location 只能由地点解析产生，要么三个字段齐全，要么整体缺失。
时间戳统一截断到毫秒，保证序列化往返后完全相等。
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .enums import Priority, TaskState


def truncate_to_millis(value: datetime) -> datetime:
    """将时间戳截断到毫秒精度"""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


class TaskLocation(BaseModel):
    """任务地点（地址 + 坐标），字段全部必填"""

    address: str = Field(description="格式化地址")
    lat: float = Field(description="纬度，远端无坐标时为 0")
    lng: float = Field(description="经度，远端无坐标时为 0")


class TaskDraft(BaseModel):
    """创建任务时的用户输入"""

    title: str = Field(default="", description="任务标题（创建时去除首尾空白）")
    description: str = Field(default="", description="描述")
    priority: Priority = Field(default=Priority.MEDIUM, description="优先级")
    due_date: datetime | None = Field(default=None, description="截止时间")


class Task(BaseModel):
    """Task 数据模型

    completed 只能通过 TaskStore.toggle_completed() 修改，其余字段创建后不变。
    """

    id: str = Field(min_length=1, description="唯一标识，ULID 格式")
    title: str = Field(description="任务标题，非空")
    description: str = Field(default="", description="描述")
    location: TaskLocation | None = Field(default=None, description="解析后的地点")
    completed: bool = Field(default=False, description="是否已完成")
    priority: Priority = Field(default=Priority.MEDIUM, description="优先级")
    created_at: datetime = Field(description="创建时间")
    due_date: datetime | None = Field(default=None, description="截止时间")

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    @field_validator("created_at", "due_date")
    @classmethod
    def _millis(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return truncate_to_millis(value)

    @property
    def state(self) -> TaskState:
        return TaskState.COMPLETED if self.completed else TaskState.PENDING

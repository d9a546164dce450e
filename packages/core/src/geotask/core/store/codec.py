"""任务集合序列化协议

持久化格式（schema_version=1）:
    {"schema_version": 1, "tasks": [{...}, ...]}

时间戳以 ISO-8601 字符串保存（毫秒精度），解码时解析回 datetime。
同时兼容浏览器版本写入的 v0 格式：裸 JSON 数组，时间字段为 createdAt / dueDate。
格式变更只需修改本模块的 encode/decode 两个函数。
"""

import json
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..config import TASKS_SCHEMA_VERSION
from ..exceptions import CorruptSlotError
from ..models.task import Task

# v0 字段名 -> v1 字段名
_LEGACY_FIELD_MAP = {
    "createdAt": "created_at",
    "dueDate": "due_date",
}


def encode_datetime(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds")


def task_to_record(task: Task) -> dict[str, Any]:
    record = task.model_dump(mode="json")
    record["created_at"] = encode_datetime(task.created_at)
    record["due_date"] = encode_datetime(task.due_date)
    return record


def _legacy_record(item: Any) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise CorruptSlotError(f"Legacy task entry is not an object: {item!r}")
    return {_LEGACY_FIELD_MAP.get(k, k): v for k, v in item.items()}


def encode_tasks(tasks: list[Task]) -> str:
    """将任务集合编码为持久化文本（v1 格式）"""
    envelope = {
        "schema_version": TASKS_SCHEMA_VERSION,
        "tasks": [task_to_record(t) for t in tasks],
    }
    return json.dumps(envelope, ensure_ascii=False)


def decode_tasks(raw: str) -> list[Task]:
    """将持久化文本解码为任务集合

    Raises:
        CorruptSlotError: 非 JSON、版本未知、任务记录非法或 id 重复
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise CorruptSlotError(f"Task slot is not valid JSON: {e}") from e

    if isinstance(data, list):
        records = [_legacy_record(item) for item in data]
    elif isinstance(data, dict) and data.get("schema_version") == TASKS_SCHEMA_VERSION:
        records = data.get("tasks")
        if not isinstance(records, list):
            raise CorruptSlotError("Task slot envelope has no 'tasks' array")
    else:
        version = data.get("schema_version") if isinstance(data, dict) else None
        raise CorruptSlotError(f"Unsupported task slot format (schema_version={version!r})")

    try:
        tasks = [Task.model_validate(record) for record in records]
    except PydanticValidationError as e:
        raise CorruptSlotError(f"Task slot contains an invalid task: {e}") from e

    ids = [t.id for t in tasks]
    if len(set(ids)) != len(ids):
        raise CorruptSlotError("Task slot contains duplicate task ids")
    return tasks

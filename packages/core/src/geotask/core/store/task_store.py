"""TaskStore -- 任务集合 + 写穿持久化

内存中以 task_id -> Task 的有序映射保存（保持插入顺序），
每次变更在返回前整体写回持久化槽（write-through）。
pending() / completed() 是对同一集合的派生视图，不是独立存储。

不加锁：多个写者并发时后写者覆盖（面向单一交互会话）。
"""

from collections.abc import Iterable
from datetime import UTC, datetime

import structlog
from ulid import ULID

from ..config import DEFAULT_TASKS_SLOT_KEY
from ..enrichment import LocationEnricher
from ..exceptions import CorruptSlotError, NotFoundError, ValidationError
from ..models.enums import TaskState
from ..models.task import Task, TaskDraft, TaskLocation
from .codec import decode_tasks, encode_tasks
from .protocols import KeyValueStore

log = structlog.get_logger()


class TaskStore:
    """任务存储"""

    def __init__(
        self,
        slot: KeyValueStore,
        enricher: LocationEnricher | None = None,
        slot_key: str = DEFAULT_TASKS_SLOT_KEY,
    ) -> None:
        """
        Args:
            slot: 持久化槽
            enricher: 地点解析器，None 时带地点的创建请求不解析地点
            slot_key: 任务集合所在的 key
        """
        self._slot = slot
        self._enricher = enricher
        self._slot_key = slot_key
        self._tasks: dict[str, Task] = {}

    async def load(self) -> list[Task]:
        """从持久化槽加载任务集合

        槽不存在或内容损坏时返回空列表（首次运行与数据损坏都降级为"无任务"）。
        """
        raw = await self._slot.get(self._slot_key)
        if raw is None:
            tasks: list[Task] = []
        else:
            try:
                tasks = decode_tasks(raw)
            except CorruptSlotError as e:
                log.warning("task_slot_corrupt", slot_key=self._slot_key, error=str(e))
                tasks = []

        self._tasks = {t.id: t for t in tasks}
        log.debug("tasks_loaded", slot_key=self._slot_key, count=len(tasks))
        return list(self._tasks.values())

    async def save(self, tasks: Iterable[Task] | None = None) -> None:
        """整体写回持久化槽

        Args:
            tasks: 要保存的任务序列，None 表示保存当前集合；
                   传入时同时替换内存中的集合

        Raises:
            ValidationError: 任务 id 重复
        """
        if tasks is None:
            mapping = self._tasks
        else:
            mapping = {}
            for task in tasks:
                if task.id in mapping:
                    raise ValidationError("id", f"Duplicate task id {task.id}")
                mapping[task.id] = task

        await self._slot.set(self._slot_key, encode_tasks(list(mapping.values())))
        self._tasks = mapping

    async def create(
        self,
        draft: TaskDraft,
        location_query: str | None = None,
    ) -> Task:
        """创建任务

        Args:
            draft: 用户输入
            location_query: 自由文本地点，非空时先解析地点再创建任务

        Returns:
            新建的 Task（completed=False）

        Raises:
            ValidationError: 标题去除空白后为空（不触发远程调用，不修改集合）
        """
        title = draft.title.strip()
        if not title:
            raise ValidationError("title", "Task title must not be empty")

        location: TaskLocation | None = None
        if location_query and location_query.strip():
            location = await self._resolve_location(location_query.strip())

        task = Task(
            id=self._new_id(),
            title=title,
            description=draft.description,
            location=location,
            completed=False,
            priority=draft.priority,
            created_at=datetime.now(UTC),
            due_date=draft.due_date,
        )
        await self.save([*self._tasks.values(), task])

        log.info(
            "task_created",
            task_id=task.id,
            priority=task.priority.value,
            has_location=task.location is not None,
        )
        return task

    async def toggle_completed(self, task_id: str) -> Task:
        """切换完成状态（Pending <-> Completed）

        Raises:
            NotFoundError: task_id 不存在
        """
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError(task_id)

        from_state = task.state
        task.completed = not task.completed
        try:
            await self.save()
        except Exception:
            # 写回失败时恢复内存状态，保持与持久化一致
            task.completed = not task.completed
            raise

        log.info("task_toggled", task_id=task_id, from_state=from_state, to_state=task.state)
        return task

    async def remove(self, task_id: str) -> None:
        """删除任务（幂等：不存在的 id 不报错）"""
        if task_id not in self._tasks:
            log.debug("task_remove_noop", task_id=task_id)
            return

        await self.save(t for t in self._tasks.values() if t.id != task_id)
        log.info("task_removed", task_id=task_id, to_state=TaskState.DELETED)

    def get(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        return self._tasks.get(task_id)

    def list_tasks(self) -> list[Task]:
        """全部任务（插入顺序）"""
        return list(self._tasks.values())

    def pending(self) -> list[Task]:
        return [t for t in self._tasks.values() if not t.completed]

    def completed(self) -> list[Task]:
        return [t for t in self._tasks.values() if t.completed]

    async def _resolve_location(self, query: str) -> TaskLocation | None:
        """地点解析：未解析（无结果或失败）映射为无地点"""
        if self._enricher is None:
            log.warning("location_enricher_not_configured", query=query)
            return None

        result = await self._enricher.enrich(query)
        if not result.ok:
            log.info(
                "task_location_skipped",
                query=query,
                outcome=result.outcome.value,
                reason=result.reason,
            )
            return None
        return result.location

    def _new_id(self) -> str:
        task_id = str(ULID())
        while task_id in self._tasks:
            task_id = str(ULID())
        return task_id

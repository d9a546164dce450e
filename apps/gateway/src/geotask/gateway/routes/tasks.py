"""任务路由

GET    /api/tasks                   任务列表，view=all/pending/completed
POST   /api/tasks                   创建任务（可带自由文本地点）
POST   /api/tasks/{task_id}/toggle  切换完成状态
DELETE /api/tasks/{task_id}         删除任务（幂等）
GET    /api/tasks/{task_id}/directions  到任务地点的路线（无地点时 direction 为 null）
"""

from datetime import datetime
from typing import Any, Literal

from fastapi import APIRouter, Depends, Query
from geotask.core.exceptions import NotFoundError, ValidationError
from geotask.core.models import Priority, TaskDraft
from geotask.core.navigation import directions_to_task
from geotask.core.store import TaskStore, task_to_record
from geotask.mcp import MapsClient, ToolClientError
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse, Response

from ..deps import get_maps_client, get_task_store
from ..errors import error_response, tool_error_response

router = APIRouter()


class TaskCreateRequest(BaseModel):
    """创建任务请求体"""

    title: str = Field(description="任务标题")
    description: str = Field(default="", description="描述")
    location: str = Field(default="", description="自由文本地点，留空表示无地点")
    priority: Priority = Field(default=Priority.MEDIUM, description="优先级")
    due_date: datetime | None = Field(default=None, description="截止时间")


class TaskListResponse(BaseModel):
    tasks: list[dict[str, Any]]


@router.get("/api/tasks", response_model=TaskListResponse)
async def list_tasks(
    view: Literal["all", "pending", "completed"] = Query(
        default="all", description="all / pending / completed"
    ),
    store: TaskStore = Depends(get_task_store),
):
    """查询任务列表（插入顺序）"""
    if view == "pending":
        tasks = store.pending()
    elif view == "completed":
        tasks = store.completed()
    else:
        tasks = store.list_tasks()
    return TaskListResponse(tasks=[task_to_record(t) for t in tasks])


@router.post("/api/tasks")
async def create_task(
    body: TaskCreateRequest,
    store: TaskStore = Depends(get_task_store),
):
    """创建任务，地点解析失败时仍创建（无地点）"""
    draft = TaskDraft(
        title=body.title,
        description=body.description,
        priority=body.priority,
        due_date=body.due_date,
    )
    try:
        task = await store.create(draft, location_query=body.location)
    except ValidationError as e:
        return error_response(422, "INVALID_TASK", str(e))

    return JSONResponse(status_code=201, content={"task": task_to_record(task)})


@router.post("/api/tasks/{task_id}/toggle")
async def toggle_task(
    task_id: str,
    store: TaskStore = Depends(get_task_store),
):
    """切换任务完成状态"""
    try:
        task = await store.toggle_completed(task_id)
    except NotFoundError as e:
        return error_response(404, "TASK_NOT_FOUND", str(e))
    return {"task": task_to_record(task)}


@router.delete("/api/tasks/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    store: TaskStore = Depends(get_task_store),
):
    """删除任务，不存在的 id 同样返回 204"""
    await store.remove(task_id)
    return Response(status_code=204)


@router.get("/api/tasks/{task_id}/directions")
async def task_directions(
    task_id: str,
    origin: str | None = Query(default=None, description="起点，缺省为 Current Location"),
    mode: str | None = Query(default=None, description="出行方式，默认 driving"),
    store: TaskStore = Depends(get_task_store),
    maps: MapsClient = Depends(get_maps_client),
):
    """查询到任务地点的路线，任务无地点时不调用远端"""
    task = store.get(task_id)
    if task is None:
        return error_response(404, "TASK_NOT_FOUND", f"Task with id {task_id} does not exist")

    try:
        result = await directions_to_task(maps, task, origin=origin, mode=mode)
    except ToolClientError as e:
        return tool_error_response(e)

    return {
        "task_id": task.id,
        "destination": task.location.address if task.location else None,
        "direction": result.direction.model_dump() if result else None,
    }

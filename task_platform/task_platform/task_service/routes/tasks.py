"""
Public task CRUD endpoints under /api/tasks.
"""
from typing import Optional
import logging

from fastapi import APIRouter, Query, status

from .. import crud
from ..schemas import ErrorResponse, TaskCreate, TaskList, TaskOut, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    responses={
        400: {"description": "Validation failed or malformed id", "model": ErrorResponse},
        404: {"description": "Task not found", "model": ErrorResponse},
    },
)


# Only tasks without an owner are reachable here, owned tasks live behind /tasks
PUBLIC = {"user_id": None}


def _as_list(tasks) -> TaskList:
    return TaskList(count=len(tasks), tasks=[TaskOut.model_validate(t) for t in tasks])


@router.get("", response_model=TaskList)
async def get_all_tasks(
    completed: Optional[bool] = Query(None, description="Filter by completion flag"),
    priority: Optional[int] = Query(None, ge=1, le=5, description="Filter by priority"),
):
    filters = dict(PUBLIC)
    if completed is not None:
        filters["completed"] = completed
    if priority is not None:
        filters["priority"] = priority
    return _as_list(await crud.list_tasks(filters))


# Declared before /{task_id} so "filter" is not read as an id
@router.get("/filter/pending", response_model=TaskList)
async def get_pending_tasks():
    return _as_list(await crud.list_tasks({**PUBLIC, "completed": False}, sort="-priority"))


@router.get("/filter/completed", response_model=TaskList)
async def get_completed_tasks():
    return _as_list(await crud.list_tasks({**PUBLIC, "completed": True}))


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(task_id: str):
    return TaskOut.model_validate(await crud.get_task_or_404(task_id, public_only=True))


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskCreate):
    task = await crud.create_task(payload)
    logger.info("Created task id=%s title=%s", task.id, task.title)
    return TaskOut.model_validate(task)


@router.put("/{task_id}", response_model=TaskOut)
async def replace_task(task_id: str, payload: TaskCreate):
    task = await crud.get_task_or_404(task_id, public_only=True)
    return TaskOut.model_validate(await crud.replace_task(task, payload))


@router.patch("/{task_id}", response_model=TaskOut)
async def update_task(task_id: str, payload: TaskUpdate):
    task = await crud.get_task_or_404(task_id, public_only=True)
    return TaskOut.model_validate(await crud.update_task(task, payload))


@router.delete("/{task_id}")
async def delete_task(task_id: str):
    task = await crud.get_task_or_404(task_id, public_only=True)
    await task.delete()
    logger.info("Deleted task id=%s", task_id)
    return {"message": "Task deleted successfully"}

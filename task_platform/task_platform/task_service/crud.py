"""
Task persistence helpers shared by the public and the owned task routers.
"""
from typing import Any, Dict, List, Optional

from beanie import PydanticObjectId
from bson.errors import InvalidId

from .errors import DocumentNotFoundError, InvalidIdError
from .models import Task
from .schemas import TaskCreate, TaskUpdate


def parse_object_id(value: str, resource: str = "task") -> PydanticObjectId:
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise InvalidIdError(resource) from exc


async def get_task_or_404(task_id: str, public_only: bool = False) -> Task:
    """
    Load a task by id. With public_only, tasks that belong to a user are
    reported as missing.
    """
    oid = parse_object_id(task_id)
    if public_only:
        task = await Task.find_one(Task.id == oid, Task.user_id == None)  # noqa: E711
    else:
        task = await Task.get(oid)
    if task is None:
        raise DocumentNotFoundError("Task")
    return task


async def list_tasks(filters: Optional[Dict[str, Any]] = None, sort: str = "-created_at") -> List[Task]:
    return await Task.find(filters or {}).sort(sort).to_list()


async def create_task(payload: TaskCreate, user_id: Optional[PydanticObjectId] = None) -> Task:
    task = Task(**payload.model_dump(), user_id=user_id)
    await task.insert()
    return task


async def replace_task(task: Task, payload: TaskCreate) -> Task:
    """Overwrite every editable field; fields missing from the payload fall back to their defaults."""
    for field, value in payload.model_dump().items():
        setattr(task, field, value)
    await task.save()
    return task


async def update_task(task: Task, payload: TaskUpdate) -> Task:
    """Apply only the fields present in the request body."""
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(task, field, value)
    await task.save()
    return task


async def count_tasks_for(user_id: PydanticObjectId) -> int:
    return await Task.find(Task.user_id == user_id).count()


async def delete_tasks_for(user_id: PydanticObjectId) -> int:
    result = await Task.find(Task.user_id == user_id).delete()
    return result.deleted_count if result is not None else 0

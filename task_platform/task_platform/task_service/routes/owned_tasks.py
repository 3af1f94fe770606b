"""
Per-user task endpoints under /tasks. Every route requires a bearer token.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from .. import crud
from ..dependencies import get_current_user
from ..models import Role, Task
from ..schemas import (
    DeletedTask,
    ErrorResponse,
    TaskCreate,
    TaskDeleted,
    TaskList,
    TaskMessage,
    TaskOut,
    TaskUpdate,
    TokenClaims,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tasks",
    tags=["owned-tasks"],
    dependencies=[Depends(get_current_user)],
    responses={
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
        403: {"description": "Caller does not own the task", "model": ErrorResponse},
    },
)


def _is_owner(task: Task, user: TokenClaims) -> bool:
    return task.user_id is not None and str(task.user_id) == user.user_id


@router.get("", response_model=TaskList)
async def get_my_tasks(user: TokenClaims = Depends(get_current_user)):
    owner_id = crud.parse_object_id(user.user_id, "user")
    tasks = await crud.list_tasks({"user_id": owner_id})
    return TaskList(count=len(tasks), tasks=[TaskOut.model_validate(t) for t in tasks])


@router.post("", response_model=TaskMessage, status_code=status.HTTP_201_CREATED)
async def create_my_task(payload: TaskCreate, user: TokenClaims = Depends(get_current_user)):
    task = await crud.create_task(payload, user_id=crud.parse_object_id(user.user_id, "user"))
    logger.info("Created task id=%s for user_id=%s", task.id, user.user_id)
    return TaskMessage(message="Task created successfully", task=TaskOut.model_validate(task))


@router.patch("/{task_id}", response_model=TaskMessage)
async def update_my_task(task_id: str, payload: TaskUpdate, user: TokenClaims = Depends(get_current_user)):
    task = await crud.get_task_or_404(task_id)
    if not _is_owner(task, user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to update this task",
        )
    task = await crud.update_task(task, payload)
    return TaskMessage(message="Task updated successfully", task=TaskOut.model_validate(task))


@router.delete("/{task_id}", response_model=TaskDeleted)
async def delete_my_task(task_id: str, user: TokenClaims = Depends(get_current_user)):
    task = await crud.get_task_or_404(task_id)
    if not _is_owner(task, user) and user.role != Role.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to delete this task",
        )
    deleted = DeletedTask(id=task.id, title=task.title)
    await task.delete()
    logger.info("Deleted task id=%s by user_id=%s role=%s", task_id, user.user_id, user.role.value)
    return TaskDeleted(message="Task deleted successfully", deleted_task=deleted)

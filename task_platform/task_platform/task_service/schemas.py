from datetime import datetime
from typing import Any, List, Optional

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import PASSWORD_MIN_LENGTH, Role, TaskDescription, TaskPriority, TaskTitle, normalize_email


# Users / auth
class UserCreate(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    role: Role = Role.USER

    @field_validator("email")
    @classmethod
    def clean_email(cls, v: str) -> str:
        return normalize_email(v)


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def clean_email(cls, v: str) -> str:
        return normalize_email(v)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: PydanticObjectId
    email: str
    role: Role
    created_at: datetime


class UserWithTaskCount(UserOut):
    task_count: int = 0


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class CurrentUserResponse(BaseModel):
    user: UserOut


class TokenClaims(BaseModel):
    """Decoded access token claims attached to an authenticated request."""
    user_id: str
    email: str
    role: Role


# Tasks
class TaskCreate(BaseModel):
    title: TaskTitle
    description: Optional[TaskDescription] = None
    completed: bool = False
    priority: TaskPriority = 3
    tags: List[str] = Field(default_factory=list)


class TaskUpdate(BaseModel):
    title: Optional[TaskTitle] = None
    description: Optional[TaskDescription] = None
    completed: Optional[bool] = None
    priority: Optional[TaskPriority] = None
    tags: Optional[List[str]] = None


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: PydanticObjectId
    title: str
    description: Optional[str] = None
    completed: bool
    priority: int
    tags: List[str] = Field(default_factory=list)
    user_id: Optional[PydanticObjectId] = None
    created_at: datetime
    updated_at: datetime


class TaskList(BaseModel):
    count: int
    tasks: List[TaskOut]


class TaskMessage(BaseModel):
    message: str
    task: TaskOut


class DeletedTask(BaseModel):
    id: PydanticObjectId
    title: str


class TaskDeleted(BaseModel):
    message: str
    deleted_task: DeletedTask


# Errors
class ErrorResponse(BaseModel):
    error: str
    details: Optional[List[Any]] = None

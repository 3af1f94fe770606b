from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional

from beanie import Document, Indexed, PydanticObjectId, Insert, Replace, Save, before_event
from pydantic import Field, StringConstraints, field_validator

# Field rules shared by the documents and the request schemas
TaskTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
TaskDescription = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
TaskPriority = Annotated[int, Field(ge=1, le=5)]
PASSWORD_MIN_LENGTH = 6


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"
    MODERATOR = "moderator"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class User(Document):
    email: Indexed(str, unique=True)
    password: str = Field(repr=False)
    role: Role = Role.USER
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("email")
    @classmethod
    def clean_email(cls, v: str) -> str:
        v = normalize_email(v)
        if not v:
            raise ValueError("Email is required")
        return v

    class Settings:
        name = "users"
        validate_on_save = True


class Task(Document):
    title: TaskTitle
    description: Optional[TaskDescription] = None
    completed: bool = False
    priority: TaskPriority = 3
    tags: List[str] = Field(default_factory=list)
    # owning user; unset for tasks created through the public /api/tasks routes
    user_id: Optional[PydanticObjectId] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @before_event(Insert, Replace, Save)
    def touch(self):
        self.updated_at = datetime.utcnow()

    class Settings:
        name = "tasks"
        validate_on_save = True


DOCUMENT_MODELS = [User, Task]

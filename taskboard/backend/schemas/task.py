# taskboard/backend/schemas/task.py
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

# JSON uses camelCase (dueDate, createdAt); Python attributes stay snake_case.
_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def percentage_of(completed: int, total: int) -> int:
    """Whole-number percentage rounded half up; 0 for an empty list."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


def _blank_date_to_none(value: Any) -> Any:
    # an empty date input submits ""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TaskCreate(BaseModel):
    # title is optional here so a missing title gets the same 400 as a blank one
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None

    model_config = _camel

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value: Any) -> Any:
        return _blank_date_to_none(value)


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None

    model_config = _camel

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value: Any) -> Any:
        return _blank_date_to_none(value)


class TaskRead(BaseModel):
    id: UUID
    title: str
    description: str = ""
    category: str = "personal"
    completed: bool = False
    priority: str = "medium"
    due_date: Optional[date] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class TaskStats(BaseModel):
    total: int
    completed: int
    pending: int
    percentage: int
    by_category: Dict[str, int]

    model_config = _camel


# ===== envelopes =====

class TaskEnvelope(BaseModel):
    success: bool = True
    data: TaskRead


class TaskListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: List[TaskRead]


class TaskStatsEnvelope(BaseModel):
    success: bool = True
    data: TaskStats


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str

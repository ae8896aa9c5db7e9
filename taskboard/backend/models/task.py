from sqlmodel import SQLModel, Field
from uuid import UUID, uuid4
from datetime import date, datetime, timezone
from typing import Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(SQLModel, table=True):
    __tablename__ = "task"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str
    description: str = ""
    category: str = Field(default="personal", index=True)
    completed: bool = Field(default=False, index=True)
    priority: str = "medium"
    due_date: Optional[date] = None
    created_at: datetime = Field(default_factory=_utcnow, index=True)

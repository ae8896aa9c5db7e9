# taskboard/backend/routers/task.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from taskboard.backend.db.session import get_session
from taskboard.backend.repositories.task_store import TaskStore
from taskboard.backend.schemas.task import (
    MessageEnvelope,
    TaskCreate,
    TaskEnvelope,
    TaskListEnvelope,
    TaskRead,
    TaskStatsEnvelope,
    TaskUpdate,
)
from taskboard.backend.services import task_service

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


def get_task_store(db: Session = Depends(get_session)) -> TaskStore:
    return TaskStore(db)


@router.get("", response_model=TaskListEnvelope)
def list_tasks(
    completed: Optional[str] = Query(None, description="'true' for completed only, anything else for pending"),
    category: Optional[str] = Query(None, description="'all' or omitted means every category"),
    sort_by: str = Query(task_service.DEFAULT_SORT_BY, alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    store: TaskStore = Depends(get_task_store),
):
    tasks = task_service.list_tasks(
        store,
        completed=completed,
        category=category,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return TaskListEnvelope(
        count=len(tasks),
        data=[TaskRead.model_validate(t) for t in tasks],
    )


# declared before /{task_id} so "stats" is not read as an id
@router.get("/stats/summary", response_model=TaskStatsEnvelope)
def task_stats(store: TaskStore = Depends(get_task_store)):
    return TaskStatsEnvelope(data=task_service.task_stats(store))


@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    task = task_service.get_task(store, task_id)
    return TaskEnvelope(data=TaskRead.model_validate(task))


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreate, store: TaskStore = Depends(get_task_store)):
    task = task_service.create_task(store, payload)
    return TaskEnvelope(data=TaskRead.model_validate(task))


@router.put("/{task_id}", response_model=TaskEnvelope)
def update_task(task_id: str, payload: TaskUpdate, store: TaskStore = Depends(get_task_store)):
    task = task_service.update_task(store, task_id, payload)
    return TaskEnvelope(data=TaskRead.model_validate(task))


@router.delete("/{task_id}", response_model=MessageEnvelope)
def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    task_service.delete_task(store, task_id)
    return MessageEnvelope(message="Task deleted successfully")

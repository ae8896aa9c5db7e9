# taskboard/backend/services/task_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from taskboard.backend.core.errors import TaskNotFoundError, TaskValidationError
from taskboard.backend.models.task import Task
from taskboard.backend.repositories.task_store import ASC, DESC, TaskStore
from taskboard.backend.schemas.task import TaskCreate, TaskStats, TaskUpdate, percentage_of

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "personal"
DEFAULT_PRIORITY = "medium"
DEFAULT_SORT_BY = "createdAt"

# JSON field name -> Task attribute
SORTABLE_FIELDS = {
    "title": "title",
    "description": "description",
    "category": "category",
    "completed": "completed",
    "priority": "priority",
    "dueDate": "due_date",
    "createdAt": "created_at",
}

# attributes an update may not set to null
_NON_NULLABLE = ("title", "description", "category", "completed", "priority")


def parse_task_id(raw: str) -> UUID:
    """Malformed ids can never match a record, so they are reported as not found."""
    try:
        return UUID(str(raw))
    except ValueError:
        raise TaskNotFoundError()


def _resolve_sort(sort_by: Optional[str], sort_order: Optional[str]) -> tuple[str, int]:
    field = SORTABLE_FIELDS.get(sort_by or DEFAULT_SORT_BY)
    if field is None:
        logger.warning("unknown sortBy=%r, falling back to %s", sort_by, DEFAULT_SORT_BY)
        field = SORTABLE_FIELDS[DEFAULT_SORT_BY]
    return field, ASC if sort_order == "asc" else DESC


def list_tasks(
    store: TaskStore,
    completed: Optional[str] = None,
    category: Optional[str] = None,
    sort_by: Optional[str] = DEFAULT_SORT_BY,
    sort_order: Optional[str] = "desc",
) -> List[Task]:
    filters: Dict[str, Any] = {}
    if completed is not None:
        filters["completed"] = completed == "true"
    if category and category != "all":
        filters["category"] = category
    return store.find_many(filters, _resolve_sort(sort_by, sort_order))


def get_task(store: TaskStore, task_id: str) -> Task:
    task = store.find_by_id(parse_task_id(task_id))
    if task is None:
        raise TaskNotFoundError()
    return task


def create_task(store: TaskStore, payload: TaskCreate) -> Task:
    title = (payload.title or "").strip()
    if not title:
        raise TaskValidationError("Task title is required")

    task = Task(
        title=title,
        description=payload.description.strip() if payload.description else "",
        category=payload.category or DEFAULT_CATEGORY,
        priority=payload.priority or DEFAULT_PRIORITY,
        due_date=payload.due_date or None,
    )
    saved = store.insert_one(task)
    logger.info("task created id=%s category=%s", saved.id, saved.category)
    return saved


def update_task(store: TaskStore, task_id: str, payload: TaskUpdate) -> Task:
    """
    Apply only the fields present in the request body.
    - explicit false / "" are real updates
    - title is trimmed but not re-validated (blank titles are accepted here)
    - dueDate: null clears the due date; null for any other field is rejected
    """
    tid = parse_task_id(task_id)
    fields = payload.model_dump(exclude_unset=True)

    for name in _NON_NULLABLE:
        if name in fields and fields[name] is None:
            raise TaskValidationError(f"{name} cannot be null")
    for name in ("title", "description"):
        if name in fields:
            fields[name] = fields[name].strip()

    task = store.update_by_id(tid, fields)
    if task is None:
        raise TaskNotFoundError()
    logger.info("task updated id=%s fields=%s", task.id, sorted(fields))
    return task


def delete_task(store: TaskStore, task_id: str) -> None:
    tid = parse_task_id(task_id)
    if not store.delete_by_id(tid):
        raise TaskNotFoundError()
    logger.info("task deleted id=%s", tid)


def task_stats(store: TaskStore) -> TaskStats:
    total = store.count()
    completed = store.count({"completed": True})
    by_category = store.group_count_by("category")
    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        percentage=percentage_of(completed, total),
        by_category={str(k): v for k, v in by_category.items()},
    )

"""
Task store: the document-style collection interface the service talks to.

Only insert-one, find-many, find-by-id, update-by-id, delete-by-id, count
and group-count-by are exposed. Filters are ``{attribute: value}`` equality
maps and sorts are ``(attribute, 1 | -1)`` pairs.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from taskboard.backend.core.errors import TaskStoreError
from taskboard.backend.models.task import Task

logger = logging.getLogger(__name__)

ASC = 1
DESC = -1


class TaskStore:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, op: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("task store %s failed: %s", op, exc)
            raise TaskStoreError(str(exc)) from exc

    def _where(self, stmt, filters: Optional[Mapping[str, Any]]):
        for field, value in (filters or {}).items():
            stmt = stmt.where(getattr(Task, field) == value)
        return stmt

    def insert_one(self, task: Task) -> Task:
        with self._guard("insert_one"):
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        return task

    def find_many(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        sort: Tuple[str, int] = ("created_at", DESC),
    ) -> List[Task]:
        field, direction = sort
        column = col(getattr(Task, field))
        stmt = self._where(select(Task), filters)
        stmt = stmt.order_by(column.asc() if direction == ASC else column.desc())
        with self._guard("find_many"):
            return list(self.db.exec(stmt).all())

    def find_by_id(self, task_id: UUID) -> Optional[Task]:
        with self._guard("find_by_id"):
            return self.db.get(Task, task_id)

    def update_by_id(self, task_id: UUID, fields: Mapping[str, Any]) -> Optional[Task]:
        with self._guard("update_by_id"):
            task = self.db.get(Task, task_id)
            if task is None:
                return None
            for field, value in fields.items():
                setattr(task, field, value)
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        return task

    def delete_by_id(self, task_id: UUID) -> bool:
        with self._guard("delete_by_id"):
            task = self.db.get(Task, task_id)
            if task is None:
                return False
            self.db.delete(task)
            self.db.commit()
        return True

    def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        stmt = self._where(select(func.count()).select_from(Task), filters)
        with self._guard("count"):
            return int(self.db.exec(stmt).one())

    def group_count_by(self, field: str) -> Dict[Any, int]:
        column = col(getattr(Task, field))
        stmt = select(column, func.count()).group_by(column)
        with self._guard("group_count_by"):
            rows = self.db.exec(stmt).all()
        return {key: int(n) for key, n in rows}

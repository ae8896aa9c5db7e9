# taskboard/client/api.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

import httpx
from pydantic.alias_generators import to_camel

from taskboard.backend.schemas.task import TaskRead, TaskStats

logger = logging.getLogger(__name__)


class TaskApiError(Exception):
    """Transport failure or a {success: false} envelope from the task API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TaskApi:
    """Thin async wrapper over the /api/tasks endpoints.

    Every call returns the envelope's ``data`` (or raises TaskApiError);
    no retries, no caching.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        kwargs: Dict[str, Any] = {"base_url": base_url}
        if timeout is not None:
            kwargs["timeout"] = timeout
        if transport is not None:
            kwargs["transport"] = transport
        self._http = httpx.AsyncClient(**kwargs)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "TaskApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            resp = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TaskApiError(str(exc) or exc.__class__.__name__) from exc

        try:
            payload = resp.json()
        except ValueError:
            raise TaskApiError(f"Unexpected response ({resp.status_code})", resp.status_code)

        if not isinstance(payload, dict) or not payload.get("success"):
            error = payload.get("error") if isinstance(payload, dict) else None
            logger.warning("%s %s -> %s: %s", method, path, resp.status_code, error)
            raise TaskApiError(error or f"Request failed ({resp.status_code})", resp.status_code)
        return payload

    async def list_tasks(
        self,
        completed: Optional[bool] = None,
        category: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> List[TaskRead]:
        params: Dict[str, str] = {}
        if completed is not None:
            params["completed"] = "true" if completed else "false"
        if category:
            params["category"] = category
        if sort_by:
            params["sortBy"] = sort_by
        if sort_order:
            params["sortOrder"] = sort_order
        payload = await self._request("GET", "/api/tasks", params=params)
        return [TaskRead.model_validate(item) for item in payload.get("data", [])]

    async def get_task(self, task_id: UUID | str) -> TaskRead:
        payload = await self._request("GET", f"/api/tasks/{task_id}")
        return TaskRead.model_validate(payload["data"])

    async def create_task(
        self,
        title: str,
        description: str = "",
        category: Optional[str] = None,
        priority: Optional[str] = None,
        due_date: Optional[date] = None,
    ) -> TaskRead:
        body: Dict[str, Any] = {"title": title, "description": description}
        if category:
            body["category"] = category
        if priority:
            body["priority"] = priority
        if due_date:
            body["dueDate"] = due_date.isoformat()
        payload = await self._request("POST", "/api/tasks", json=body)
        return TaskRead.model_validate(payload["data"])

    async def update_task(self, task_id: UUID | str, **fields: Any) -> TaskRead:
        """Send only the given fields; keyword names are snake_case attributes."""
        body: Dict[str, Any] = {}
        for name, value in fields.items():
            if isinstance(value, date):
                value = value.isoformat()
            body[to_camel(name)] = value
        payload = await self._request("PUT", f"/api/tasks/{task_id}", json=body)
        return TaskRead.model_validate(payload["data"])

    async def delete_task(self, task_id: UUID | str) -> str:
        payload = await self._request("DELETE", f"/api/tasks/{task_id}")
        return payload.get("message", "")

    async def stats(self) -> TaskStats:
        payload = await self._request("GET", "/api/tasks/stats/summary")
        return TaskStats.model_validate(payload["data"])

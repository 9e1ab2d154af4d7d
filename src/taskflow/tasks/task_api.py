# src/taskflow/tasks/task_api.py

from __future__ import annotations

"""
Request/response facade over the task store.

Mimics a small REST surface (GET/POST/PUT/DELETE /api/tasks) for front
ends that want status codes instead of exceptions. Calls are coroutines
that complete as soon as the store call returns.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..core.ports import TaskRepo
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

BASE_PATH = "/api/tasks"


@dataclass(slots=True, frozen=True)
class ApiResponse:
    status: int
    data: Any = None
    message: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def _log_request(method: str, path: str, body: Mapping[str, Any] | None = None) -> None:
    if body is None:
        logger.info("[API] %s %s", method, path)
    else:
        logger.info("[API] %s %s body=%s", method, path, dict(body))


def _not_found() -> ApiResponse:
    return ApiResponse(status=404, error="Task not found")


def _server_error(method: str, path: str) -> ApiResponse:
    logger.exception("[API] %s %s failed", method, path)
    return ApiResponse(status=500, error="Internal server error")


class TaskApi:
    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    async def get_tasks(self) -> ApiResponse:
        _log_request("GET", BASE_PATH)
        try:
            return ApiResponse(status=200, data=self._repo.list())
        except Exception:
            return _server_error("GET", BASE_PATH)

    async def create_task(self, payload: Mapping[str, Any]) -> ApiResponse:
        _log_request("POST", BASE_PATH, payload)
        try:
            task = self._repo.create(payload)
        except ValidationError as e:
            return ApiResponse(status=400, error=str(e))
        except Exception:
            return _server_error("POST", BASE_PATH)
        return ApiResponse(status=201, data=task, message="Task created successfully")

    async def update_task(self, task_id: str, payload: Mapping[str, Any]) -> ApiResponse:
        path = f"{BASE_PATH}/{task_id}"
        _log_request("PUT", path, payload)
        try:
            task = self._repo.update(task_id, payload)
        except ValidationError as e:
            return ApiResponse(status=400, error=str(e))
        except NotFoundError:
            return _not_found()
        except Exception:
            return _server_error("PUT", path)
        return ApiResponse(status=200, data=task, message="Task updated successfully")

    async def toggle_task_status(self, task_id: str) -> ApiResponse:
        path = f"{BASE_PATH}/{task_id}"
        _log_request("PATCH", path)
        try:
            task = self._repo.toggle_status(task_id)
        except NotFoundError:
            return _not_found()
        except Exception:
            return _server_error("PATCH", path)
        return ApiResponse(status=200, data=task, message="Task updated successfully")

    async def delete_task(self, task_id: str) -> ApiResponse:
        path = f"{BASE_PATH}/{task_id}"
        _log_request("DELETE", path)
        try:
            self._repo.delete(task_id)
        except NotFoundError:
            return _not_found()
        except Exception:
            return _server_error("DELETE", path)
        return ApiResponse(status=200, message="Task deleted successfully")

# src/taskflow/tasks/errors.py

"""Errors raised by the task store. Both kinds leave the store unchanged."""

from __future__ import annotations

from collections.abc import Iterable


class TaskError(Exception):
    """Base class for task store errors."""


class ValidationError(TaskError):
    """One or more required fields are missing, blank or unusable."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields: tuple[str, ...] = tuple(fields)
        details = ", ".join(f"{name} is required" for name in self.fields)
        super().__init__(f"Validation failed: {details}")


class NotFoundError(TaskError):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")

# src/taskflow/tasks/task_store.py

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from .errors import NotFoundError, ValidationError
from .task_models import FilterSpec, Task, TaskPriority, TaskStatus, parse_due_date
from .view_projector import project

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Canonical (wire) names of the fields every create/update must carry, in report order.
REQUIRED_FIELDS: tuple[str, ...] = ("title", "priority", "dueDate", "status")

# Wire name -> Task attribute, for the fields update() may overwrite.
MUTABLE_FIELDS: dict[str, str] = {
    "title": "title",
    "description": "description",
    "status": "status",
    "priority": "priority",
    "dueDate": "due_date",
}

_ALIASES: dict[str, str] = {"due_date": "dueDate"}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_keys(fields: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in fields.items():
        out[_ALIASES.get(key, key)] = value
    return out


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return str(value).strip() == ""


def _validate(fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    Check every required field and return the cleaned values.

    Never short-circuits: all offending fields are collected into a single
    ValidationError, in REQUIRED_FIELDS order.
    """
    data = _normalize_keys(fields)
    bad: list[str] = []
    clean: dict[str, Any] = {}

    title = data.get("title")
    if _is_blank(title):
        bad.append("title")
    else:
        clean["title"] = str(title)

    priority = None if _is_blank(data.get("priority")) else TaskPriority.parse(data.get("priority"))
    if priority is None:
        bad.append("priority")
    else:
        clean["priority"] = priority

    due_date = None if _is_blank(data.get("dueDate")) else parse_due_date(data.get("dueDate"))
    if due_date is None:
        bad.append("dueDate")
    else:
        clean["due_date"] = due_date

    status = None if _is_blank(data.get("status")) else TaskStatus.parse(data.get("status"))
    if status is None:
        bad.append("status")
    else:
        clean["status"] = status

    if bad:
        raise ValidationError(bad)

    if "description" in data:
        description = data.get("description")
        clean["description"] = "" if description is None else str(description)

    return clean


class TaskStore:
    """
    In-memory task store: the single owner of the canonical task sequence.

    Ordering:
    - insertion order is creation order; delete keeps the relative order of the rest

    Identity:
    - ids are millisecond-time-derived decimal strings, strictly increasing
    - every id ever issued or loaded is reserved, so deleted ids are never reused

    Atomicity:
    - validation and lookup happen before mutation; a failing call changes nothing
    - mutations run under a lock, so readers never see a half-applied change
    """

    def __init__(self, *, clock: Clock | None = None, tasks: Iterable[Task] | None = None) -> None:
        self._clock: Clock = clock or _utcnow
        self._tasks: list[Task] = []
        self._reserved_ids: set[str] = set()
        self._last_id = 0
        self._lock = threading.Lock()
        if tasks is not None:
            self.load(tasks)
        logger.info("TaskStore ready total=%s", len(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- helpers ----

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now

    def _reserve_id(self, task_id: str) -> None:
        self._reserved_ids.add(task_id)
        if task_id.isdigit():
            self._last_id = max(self._last_id, int(task_id))

    def _next_id(self, now: datetime) -> str:
        candidate = max(int(now.timestamp() * 1000), self._last_id + 1)
        while str(candidate) in self._reserved_ids:
            candidate += 1
        task_id = str(candidate)
        self._reserve_id(task_id)
        return task_id

    def _index_of(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise NotFoundError(task_id)

    # ---- public API ----

    def load(self, tasks: Iterable[Task]) -> None:
        """Append pre-existing records (sample data, imports) keeping their ids."""
        with self._lock:
            added = 0
            for task in tasks:
                if task.id in self._reserved_ids:
                    logger.warning("Skipping task with duplicate id=%s", task.id)
                    continue
                self._reserve_id(task.id)
                self._tasks.append(task)
                added += 1
        logger.debug("Loaded %d tasks (total=%d)", added, len(self._tasks))

    def list(self) -> list[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Task:
        return self._tasks[self._index_of(task_id)]

    def project(self, spec: FilterSpec | None = None) -> list[Task]:
        return project(self.list(), spec)

    def create(self, fields: Mapping[str, Any]) -> Task:
        clean = _validate(fields)
        with self._lock:
            now = self._now()
            task = Task(
                id=self._next_id(now),
                title=clean["title"],
                description=clean.get("description", ""),
                status=clean["status"],
                priority=clean["priority"],
                due_date=clean["due_date"],
                created_at=now,
                updated_at=now,
            )
            self._tasks.append(task)
        logger.debug(
            "Task created id=%s status=%s priority=%s due=%s",
            task.id,
            task.status.value,
            task.priority.value,
            task.due_date,
        )
        return task

    def _replace_at(self, idx: int, clean: Mapping[str, Any]) -> Task:
        # Caller holds self._lock.
        current = self._tasks[idx]
        changes = {attr: clean[attr] for attr in MUTABLE_FIELDS.values() if attr in clean}
        updated_at = max(self._now(), current.updated_at)
        task = dataclasses.replace(current, **changes, updated_at=updated_at)
        self._tasks[idx] = task
        logger.debug("Task updated id=%s fields=%s", task.id, sorted(changes))
        return task

    def update(self, task_id: str, fields: Mapping[str, Any]) -> Task:
        clean = _validate(fields)
        with self._lock:
            return self._replace_at(self._index_of(task_id), clean)

    def delete(self, task_id: str) -> None:
        with self._lock:
            idx = self._index_of(task_id)
            del self._tasks[idx]
        logger.debug("Task deleted id=%s", task_id)

    def toggle_status(self, task_id: str) -> Task:
        """
        completed -> pending; any other status -> completed.

        The read of the current status and the write happen under one lock
        acquisition, so concurrent toggles never both act on the same state.
        """
        with self._lock:
            idx = self._index_of(task_id)
            current = self._tasks[idx]
            new_status = (
                TaskStatus.PENDING if current.status == TaskStatus.COMPLETED else TaskStatus.COMPLETED
            )
            fields = current.to_dict()
            fields["status"] = new_status
            return self._replace_at(idx, _validate(fields))

# src/taskflow/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """Task lifecycle status (wire values are hyphenated)."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus | None:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def weight(self) -> int:
        return PRIORITY_WEIGHTS[self]

    @classmethod
    def parse(cls, raw: Any) -> TaskPriority | None:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


PRIORITY_WEIGHTS: dict[TaskPriority, int] = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


class SortKey(StrEnum):
    CREATED_AT = "createdAt"
    PRIORITY = "priority"
    DUE_DATE = "dueDate"
    TITLE = "title"

    @classmethod
    def parse(cls, raw: Any, default: SortKey | None = None) -> SortKey:
        """Lenient parse; unknown keys fall back to `default` (createdAt)."""
        fallback = default or cls.CREATED_AT
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            return fallback
        wanted = raw.strip().replace("_", "").lower()
        for key in cls:
            if key.value.lower() == wanted:
                return key
        return fallback


def format_timestamp(ts: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a 'Z' suffix: 2025-08-10T10:00:00.000Z."""
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def parse_timestamp(raw: str | datetime) -> datetime:
    if isinstance(raw, datetime):
        ts = raw
    else:
        text = raw.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        ts = datetime.fromisoformat(text)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def parse_due_date(raw: Any) -> str | None:
    """Normalize a due date to 'YYYY-MM-DD'; None if it is not a calendar date."""
    if isinstance(raw, datetime):
        return raw.date().isoformat()
    if isinstance(raw, date):
        return raw.isoformat()
    if not isinstance(raw, str):
        return None
    try:
        return date.fromisoformat(raw.strip()).isoformat()
    except ValueError:
        return None


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    due_date: str
    created_at: datetime
    updated_at: datetime
    description: str = ""

    @property
    def due(self) -> date:
        return date.fromisoformat(self.due_date)

    def to_dict(self) -> dict[str, Any]:
        """Export/wire form. Key order matches the exported JSON document."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "dueDate": self.due_date,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        status = TaskStatus.parse(raw.get("status"))
        priority = TaskPriority.parse(raw.get("priority"))
        due_date = parse_due_date(raw.get("dueDate", raw.get("due_date")))
        title = str(raw.get("title") or "")
        if not title.strip() or status is None or priority is None or due_date is None:
            raise ValueError(f"Malformed task record: {raw!r}")

        created_at = parse_timestamp(raw.get("createdAt", raw.get("created_at")))
        updated_raw = raw.get("updatedAt", raw.get("updated_at"))
        updated_at = parse_timestamp(updated_raw) if updated_raw else created_at

        return cls(
            id=str(raw["id"]),
            title=title,
            description=str(raw.get("description") or ""),
            status=status,
            priority=priority,
            due_date=due_date,
            created_at=created_at,
            updated_at=updated_at,
        )


@dataclass(slots=True, frozen=True)
class FilterSpec:
    """
    Ephemeral query descriptor for the task view.

    Empty `status` / `priority` mean "no constraint"; `search` is matched
    case-insensitively against title and description.
    """

    search: str = ""
    status: TaskStatus | str = ""
    priority: TaskPriority | str = ""
    sort_key: SortKey = SortKey.CREATED_AT


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int
    pending: int
    in_progress: int
    completed: int

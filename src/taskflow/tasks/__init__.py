from .errors import NotFoundError, TaskError, ValidationError
from .task_models import FilterSpec, SortKey, Task, TaskPriority, TaskStats, TaskStatus
from .task_store import TaskStore
from .view_projector import project, summarize

__all__ = [
    "FilterSpec",
    "NotFoundError",
    "SortKey",
    "Task",
    "TaskError",
    "TaskPriority",
    "TaskStats",
    "TaskStatus",
    "TaskStore",
    "ValidationError",
    "project",
    "summarize",
]

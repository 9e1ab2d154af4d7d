# src/taskflow/tasks/view_projector.py

from __future__ import annotations

"""
Derived task view.

`project` turns the canonical task sequence plus a FilterSpec into the
ordered list a renderer displays. It is recomputed from scratch on every
call and never touches its input.
"""

import locale
from collections.abc import Callable, Iterable
from typing import Any

from .task_models import FilterSpec, SortKey, Task, TaskStats, TaskStatus


def _matches_search(task: Task, needle: str) -> bool:
    return needle in task.title.lower() or needle in task.description.lower()


def _title_key(task: Task) -> Any:
    # strxfrm rejects embedded NULs.
    return locale.strxfrm(task.title.casefold().replace("\x00", ""))


# (key function, descending). Python's sort is stable in both directions.
_SORTS: dict[SortKey, tuple[Callable[[Task], Any], bool]] = {
    SortKey.PRIORITY: (lambda t: t.priority.weight, True),
    SortKey.DUE_DATE: (lambda t: t.due, False),
    SortKey.TITLE: (_title_key, False),
    SortKey.CREATED_AT: (lambda t: t.created_at, True),
}


def project(tasks: Iterable[Task], spec: FilterSpec | None = None) -> list[Task]:
    """Filter (search AND status AND priority) then sort by `spec.sort_key`."""
    spec = spec or FilterSpec()
    view = list(tasks)

    if spec.search:
        needle = spec.search.lower()
        view = [t for t in view if _matches_search(t, needle)]

    if spec.status:
        view = [t for t in view if t.status == spec.status]

    if spec.priority:
        view = [t for t in view if t.priority == spec.priority]

    key, descending = _SORTS.get(SortKey.parse(spec.sort_key), _SORTS[SortKey.CREATED_AT])
    view.sort(key=key, reverse=descending)
    return view


def summarize(tasks: Iterable[Task]) -> TaskStats:
    total = pending = in_progress = completed = 0
    for t in tasks:
        total += 1
        if t.status == TaskStatus.PENDING:
            pending += 1
        elif t.status == TaskStatus.IN_PROGRESS:
            in_progress += 1
        elif t.status == TaskStatus.COMPLETED:
            completed += 1
    return TaskStats(total=total, pending=pending, in_progress=in_progress, completed=completed)

# src/taskflow/cli/render.py

"""Plain-text rendering of the projected task view."""

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.task_models import FilterSpec, Task, TaskStats, TaskStatus

STATUS_MARKS: dict[TaskStatus, str] = {
    TaskStatus.PENDING: "[ ]",
    TaskStatus.IN_PROGRESS: "[~]",
    TaskStatus.COMPLETED: "[x]",
}

EMPTY_VIEW = "No tasks found. Create your first task with /add."


def render_task(task: Task, *, show_description: bool = True) -> str:
    mark = STATUS_MARKS.get(task.status, "[?]")
    head = (
        f"{mark} {task.id}  {task.title}  "
        f"({task.priority.value}, {task.status.value.replace('-', ' ')}, "
        f"due {task.due_date}, created {task.created_at.date().isoformat()})"
    )
    if show_description and task.description:
        return f"{head}\n      {task.description}"
    return head


def render_view(tasks: Sequence[Task], *, show_description: bool = True) -> str:
    if not tasks:
        return EMPTY_VIEW
    return "\n".join(render_task(t, show_description=show_description) for t in tasks)


def render_filters(spec: FilterSpec) -> str:
    parts = [f"sort={spec.sort_key}"]
    if spec.search:
        parts.append(f"search={spec.search!r}")
    if spec.status:
        parts.append(f"status={spec.status}")
    if spec.priority:
        parts.append(f"priority={spec.priority}")
    return "Filters: " + ", ".join(parts)


def render_stats(stats: TaskStats) -> str:
    return (
        f"Total: {stats.total} | Pending: {stats.pending} | "
        f"In progress: {stats.in_progress} | Completed: {stats.completed}"
    )

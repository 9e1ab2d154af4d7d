# src/taskflow/tasks/sample_data.py

"""Demo tasks seeded into a fresh session (see Settings.seed_sample_tasks)."""

from __future__ import annotations

from typing import Any

from .task_models import Task

SAMPLE_TASKS: tuple[dict[str, Any], ...] = (
    {
        "id": "1",
        "title": "Complete Project Documentation",
        "description": "Write comprehensive documentation for the new feature implementation",
        "status": "in-progress",
        "priority": "high",
        "dueDate": "2025-08-20",
        "createdAt": "2025-08-10T10:00:00Z",
        "updatedAt": "2025-08-15T08:30:00Z",
    },
    {
        "id": "2",
        "title": "Code Review Session",
        "description": "Review pull requests from team members and provide feedback",
        "status": "pending",
        "priority": "medium",
        "dueDate": "2025-08-16",
        "createdAt": "2025-08-12T14:20:00Z",
        "updatedAt": "2025-08-12T14:20:00Z",
    },
    {
        "id": "3",
        "title": "Team Meeting Preparation",
        "description": "Prepare slides and agenda for the weekly team standup",
        "status": "completed",
        "priority": "low",
        "dueDate": "2025-08-15",
        "createdAt": "2025-08-13T09:15:00Z",
        "updatedAt": "2025-08-15T09:45:00Z",
    },
    {
        "id": "4",
        "title": "Database Migration Script",
        "description": "Create and test migration script for the new user table schema",
        "status": "pending",
        "priority": "high",
        "dueDate": "2025-08-18",
        "createdAt": "2025-08-14T16:30:00Z",
        "updatedAt": "2025-08-14T16:30:00Z",
    },
    {
        "id": "5",
        "title": "UI Component Library Update",
        "description": "Update the shared component library with new design system changes",
        "status": "in-progress",
        "priority": "medium",
        "dueDate": "2025-08-22",
        "createdAt": "2025-08-11T11:45:00Z",
        "updatedAt": "2025-08-15T10:00:00Z",
    },
)


def sample_tasks() -> list[Task]:
    return [Task.from_dict(raw) for raw in SAMPLE_TASKS]

# src/taskflow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the front ends.

The API facade and the console commands depend on this Protocol instead of
the concrete TaskStore, which keeps them easy to test with fakes.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from ..tasks.task_models import FilterSpec, Task


class TaskRepo(Protocol):
    # Read API
    def list(self) -> list[Task]: ...
    def get(self, task_id: str) -> Task: ...
    def project(self, spec: FilterSpec | None = None) -> list[Task]: ...

    # Mutation API (raises ValidationError / NotFoundError)
    def create(self, fields: Mapping[str, Any]) -> Task: ...
    def update(self, task_id: str, fields: Mapping[str, Any]) -> Task: ...
    def delete(self, task_id: str) -> None: ...
    def toggle_status(self, task_id: str) -> Task: ...

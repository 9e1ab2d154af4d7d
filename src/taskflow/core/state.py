# src/taskflow/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from ..tasks.task_api import TaskApi
from ..tasks.task_models import FilterSpec, Task
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """
    Session state shared by the front ends.

    The store is the only owner of tasks; `filters` is the current view query
    and is replaced (never mutated) whenever the user changes it.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: Any
    task_store: TaskStore
    filters: FilterSpec = field(default_factory=FilterSpec)
    api: TaskApi = field(init=False)

    def __post_init__(self) -> None:
        self.api = TaskApi(self.task_store)

    def set_filters(self, **changes: Any) -> FilterSpec:
        self.filters = replace(self.filters, **changes)
        return self.filters

    def view(self) -> list[Task]:
        return self.task_store.project(self.filters)

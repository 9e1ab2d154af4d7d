# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskflow.core.state import AppState
from taskflow.tasks.task_models import SortKey
from taskflow.tasks.task_store import TaskStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the commands.

    A SimpleNamespace rather than the real config keeps tests independent of
    the environment and any local .env file.
    """
    return SimpleNamespace(
        app_name="taskflow-test",
        log_level="DEBUG",
        console_enabled=False,
        default_sort=SortKey.CREATED_AT,
        seed_sample_tasks=False,
        data_dir=tmp_path / "data",
        export_dir=tmp_path / "exports",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock: FakeClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store)


def task_fields(**overrides) -> dict:
    fields = {
        "title": "Write report",
        "description": "Quarterly numbers",
        "status": "pending",
        "priority": "medium",
        "dueDate": "2025-09-01",
    }
    fields.update(overrides)
    return fields

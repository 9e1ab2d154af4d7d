# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskflow.config import Settings
from taskflow.tasks.task_models import SortKey

ENV_VARS = [
    "TASKFLOW_APP_NAME",
    "TASKFLOW_LOG_LEVEL",
    "TASKFLOW_CONSOLE_ENABLED",
    "TASKFLOW_DEFAULT_SORT",
    "TASKFLOW_SEED_SAMPLE_TASKS",
    "TASKFLOW_DATA_DIR",
    "TASKFLOW_EXPORT_DIR",
]


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()
    assert s.app_name == "taskflow"
    assert s.log_level == "INFO"
    assert s.console_enabled is True
    assert s.seed_sample_tasks is True
    assert s.default_sort is SortKey.CREATED_AT
    assert s.data_dir == Path(".local/taskflow")
    assert s.export_dir == Path(".local/taskflow/exports")


def test_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("TASKFLOW_APP_NAME", "board")
    clean_env.setenv("TASKFLOW_LOG_LEVEL", "debug")
    clean_env.setenv("TASKFLOW_CONSOLE_ENABLED", "off")
    clean_env.setenv("TASKFLOW_SEED_SAMPLE_TASKS", "0")
    clean_env.setenv("TASKFLOW_DEFAULT_SORT", "dueDate")
    clean_env.setenv("TASKFLOW_DATA_DIR", str(tmp_path))

    s = Settings.from_env()
    assert s.app_name == "board"
    assert s.log_level == "DEBUG"
    assert s.console_enabled is False
    assert s.seed_sample_tasks is False
    assert s.default_sort is SortKey.DUE_DATE
    assert s.data_dir == tmp_path
    assert s.export_dir == tmp_path / "exports"


def test_bad_values_fall_back(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TASKFLOW_DEFAULT_SORT", "alphabetical")
    clean_env.setenv("TASKFLOW_CONSOLE_ENABLED", "  ")
    clean_env.setenv("TASKFLOW_APP_NAME", "   ")

    s = Settings.from_env()
    assert s.default_sort is SortKey.CREATED_AT
    assert s.console_enabled is True
    assert s.app_name == "taskflow"

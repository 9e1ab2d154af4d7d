# src/taskflow/tasks/export.py

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)


def tasks_to_json(tasks: Iterable[Task]) -> str:
    """One pretty-printed JSON array of task objects (camelCase field names)."""
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2)


def export_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"tasks_{today.isoformat()}.json"


def export_tasks(tasks: Iterable[Task], directory: str | Path, *, today: date | None = None) -> Path:
    """Write the export document into `directory` (via tmp + rename) and return its path."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(today)

    tasks = list(tasks)
    tmp = path.with_suffix(".tmp")
    tmp.write_text(tasks_to_json(tasks), "utf-8")
    os.replace(tmp, path)

    logger.info("Exported %d tasks to %s", len(tasks), path)
    return path

# src/taskflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- builds the TaskStore (optionally seeded with demo tasks) and the AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.sample_data import sample_tasks
from ..tasks.task_models import FilterSpec, SortKey
from ..tasks.task_store import Clock, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(clock=clock)
    if getattr(settings, "seed_sample_tasks", False):
        store.load(sample_tasks())
        logger.info("Seeded %d sample tasks", len(store))

    sort_key = SortKey.parse(getattr(settings, "default_sort", None))
    return AppState(settings=settings, task_store=store, filters=FilterSpec(sort_key=sort_key))

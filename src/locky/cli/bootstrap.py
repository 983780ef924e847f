# src/locky/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- wires the file store and the task list into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    An unreadable task file starts an empty session with a notice; a corrupt
    record (CorruptRecordError) propagates so the file is never overwritten.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.tasks_path)
    notices: list[str] = []
    try:
        task_list = TaskList.from_storage(store)
    except OSError as e:
        logger.warning("Could not load previous tasks from %s: %s", store.path, e)
        notices.append(f"(Could not load previous tasks: {e})")
        task_list = TaskList(store)

    return AppState(settings=settings, task_store=store, task_list=task_list, notices=notices)

# src/locky/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings kept on the state so connectors can read app_name etc.
    settings: object

    task_store: TaskStore
    task_list: TaskList

    # One-off messages for the user at session start (e.g. load problems).
    notices: list[str] = field(default_factory=list)

# src/locky/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

TaskList depends on this Protocol instead of the concrete file store,
so tests can swap in an in-memory or failing storage.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class TaskStorage(Protocol):
    """Loads and saves the whole task sequence at once."""

    def load(self) -> list[Task]: ...

    def save(self, tasks: Sequence[Task]) -> None: ...

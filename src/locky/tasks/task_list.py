# src/locky/tasks/task_list.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import datetime

from ..core.errors import ErrorKind, PersistenceError, TaskListError
from ..core.ports import TaskStorage
from .task_models import Deadline, Event, Task, Todo

logger = logging.getLogger(__name__)


def render_numbered(tasks: Iterable[Task]) -> str:
    """Render "1. [T][ ] ..." lines, numbered from 1."""
    return "\n".join(f"{i}. {t.render()}" for i, t in enumerate(tasks, start=1))


class TaskList:
    """
    Ordered task collection owned by a single session.

    Indices are 1-based on every public method. Tasks handed out are copies;
    the stored objects never leave this class. Each mutation is followed by a
    synchronous save through the storage port.
    """

    def __init__(self, storage: TaskStorage, tasks: Iterable[Task] = ()) -> None:
        self._storage = storage
        self._tasks: list[Task] = list(tasks)

    @classmethod
    def from_storage(cls, storage: TaskStorage) -> TaskList:
        tasks = storage.load()
        logger.info("TaskList created with %d tasks", len(tasks))
        return cls(storage, tasks)

    # ---- queries ----

    @property
    def size(self) -> int:
        return len(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def is_empty(self) -> bool:
        return not self._tasks

    def _index(self, index: int) -> int:
        idx = index - 1
        if idx < 0 or idx >= len(self._tasks):
            raise TaskListError(f"No such task: {index}", ErrorKind.NO_SUCH_TASK)
        return idx

    def get(self, index: int) -> Task:
        return replace(self._tasks[self._index(index)])

    def is_done(self, index: int) -> bool:
        return self._tasks[self._index(index)].done

    def tasks(self) -> list[Task]:
        return [replace(t) for t in self._tasks]

    def find(self, keyword: str) -> list[Task]:
        key = keyword.strip().casefold()
        return [replace(t) for t in self._tasks if key in t.description.casefold()]

    def printable_list(self) -> str:
        return render_numbered(self._tasks)

    # ---- mutations ----

    def add_todo(self, description: str) -> Task:
        return self._append(Todo(description))

    def add_deadline(self, description: str, due: datetime) -> Task:
        return self._append(Deadline(description, due))

    def add_event(self, description: str, start: datetime, end: datetime) -> Task:
        event = Event(description, start, end)
        for existing in self._tasks:
            if isinstance(existing, Event) and existing.overlaps(start, end):
                logger.info("Event %r rejected: clashes with %r", description, existing.description)
                raise TaskListError(
                    f'Clash! "{existing.description}" already takes up '
                    f"{existing.interval_text()}. Pick another slot.",
                    ErrorKind.CLASH,
                )
        return self._append(event)

    def mark(self, index: int) -> Task:
        task = self._tasks[self._index(index)]
        task.done = True
        self._save(task)
        return replace(task)

    def unmark(self, index: int) -> Task:
        task = self._tasks[self._index(index)]
        task.done = False
        self._save(task)
        return replace(task)

    def delete(self, index: int) -> Task:
        task = self._tasks.pop(self._index(index))
        self._save(task)
        return task

    # ---- internals ----

    def _append(self, task: Task) -> Task:
        self._tasks.append(task)
        self._save(task)
        return replace(task)

    def _save(self, touched: Task) -> None:
        snapshot: Sequence[Task] = tuple(self._tasks)
        try:
            self._storage.save(snapshot)
        except OSError as e:
            logger.warning("Failed to save %d tasks: %s", len(snapshot), e)
            raise PersistenceError(str(e), task=replace(touched)) from e

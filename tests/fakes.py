# tests/fakes.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from locky.tasks.task_models import Task


@dataclass
class MemoryStorage:
    """
    In-memory TaskStorage for unit tests.

    - `loaded` is what load() returns
    - every save() appends a snapshot (copies) to `saves`
    """

    loaded: list[Task] = field(default_factory=list)
    saves: list[list[Task]] = field(default_factory=list)

    def load(self) -> list[Task]:
        return [replace(t) for t in self.loaded]

    def save(self, tasks: Sequence[Task]) -> None:
        self.saves.append([replace(t) for t in tasks])


@dataclass
class FailingStorage(MemoryStorage):
    """Storage whose save() always fails like a full or read-only disk."""

    reason: str = "disk full"
    attempts: int = 0

    def save(self, tasks: Sequence[Task]) -> None:
        self.attempts += 1
        raise OSError(self.reason)


class ScriptedInput:
    """Feeds lines to the console loop, then raises EOFError."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = list(lines)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)

# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from locky.tasks.task_list import TaskList
from locky.tasks.task_store import TaskStore

from .fakes import MemoryStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap and connectors.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any .env file.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="Locky",
        log_level="WARNING",
        file_logging=False,
        data_dir=data_dir,
        tasks_path=data_dir / "locky.txt",
        log_dir=data_dir,
    )


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def task_list(storage: MemoryStorage) -> TaskList:
    """Empty TaskList over in-memory storage (records every save)."""
    return TaskList(storage)


@pytest.fixture()
def file_store(tmp_path: Path) -> TaskStore:
    """
    Real flat-file store under tmp_path.

    NOTE: the parent directory does not exist yet; save() must create it.
    """
    return TaskStore(tmp_path / "nested" / "locky.txt")

# src/locky/core/errors.py

"""
Error model shared by parser, task list and dispatcher.

Internally every recoverable problem is a LockyError carrying an ErrorKind.
The dispatcher turns these into Reply values, so connectors never see exceptions
for ordinary user mistakes.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    # validation (nothing mutated)
    EMPTY_INPUT = "empty_input"
    UNKNOWN_COMMAND = "unknown_command"
    MISSING_ARGUMENT = "missing_argument"
    BAD_FORMAT = "bad_format"
    EMPTY_FIELD = "empty_field"
    BAD_DATE = "bad_date"
    BAD_ORDER = "bad_order"
    NOT_A_NUMBER = "not_a_number"
    NO_SUCH_TASK = "no_such_task"
    CLASH = "clash"

    # mutation applied, save failed
    PERSISTENCE = "persistence"

    # storage file holds a recognised record that cannot be read
    CORRUPT_RECORD = "corrupt_record"


class LockyError(Exception):
    """Base error with a user-facing message and a machine-readable kind."""

    def __init__(self, message: str, kind: ErrorKind) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind


class ParseError(LockyError):
    pass


class TaskListError(LockyError):
    pass


class PersistenceError(LockyError):
    """Saving failed after the in-memory change was already applied."""

    def __init__(self, message: str, *, task: Any = None) -> None:
        super().__init__(message, ErrorKind.PERSISTENCE)
        self.task = task


class CorruptRecordError(LockyError, ValueError):
    def __init__(self, message: str, *, line_no: int | None = None) -> None:
        super().__init__(message, ErrorKind.CORRUPT_RECORD)
        self.line_no = line_no

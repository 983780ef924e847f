# src/locky/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import ClassVar

INPUT_FORMAT = "%Y-%m-%d %H%M"
INPUT_FORMAT_HINT = "yyyy-MM-dd HHmm (e.g. 2019-12-02 1800)"
DISPLAY_HINT = "MMM dd yyyy, h:mma (e.g. Dec 02 2019, 6:00PM)"

_INPUT_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2} \d{4}")
_DISPLAY_SHAPE = re.compile(r"([A-Za-z]{3}) (\d{1,2}) (\d{4}), (\d{1,2}):(\d{2})([AaPp][Mm])")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class TaskKind(StrEnum):
    """Single-letter tag used in rendering ("[T]") and in the storage file."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


def parse_input_datetime(raw: str) -> datetime:
    """
    Parse the user-facing "yyyy-MM-dd HHmm" format.

    strptime alone accepts single-digit fields ("2019-1-2 900"), so the shape
    is checked first. Raises ValueError on any mismatch.
    """
    text = raw.strip()
    if not _INPUT_SHAPE.fullmatch(text):
        raise ValueError(f"not in input format: {raw!r}")
    return datetime.strptime(text, INPUT_FORMAT)


def format_display(dt: datetime) -> str:
    """Render like "Dec 02 2019, 6:00PM" regardless of the current locale."""
    hour = dt.hour % 12 or 12
    ampm = "AM" if dt.hour < 12 else "PM"
    return f"{_MONTHS[dt.month - 1]} {dt.day:02d} {dt.year:04d}, {hour}:{dt.minute:02d}{ampm}"


def parse_display(raw: str) -> datetime:
    """Inverse of format_display. Raises ValueError if the text does not match."""
    m = _DISPLAY_SHAPE.fullmatch(raw.strip())
    if not m:
        raise ValueError(f"not in display format: {raw!r}")
    mon, day, year, hour, minute, ampm = m.groups()
    try:
        month = _MONTHS.index(mon.capitalize()) + 1
    except ValueError:
        raise ValueError(f"unknown month: {mon!r}") from None
    h = int(hour)
    if not 1 <= h <= 12:
        raise ValueError(f"hour out of range: {raw!r}")
    h = h % 12 + (12 if ampm.upper() == "PM" else 0)
    return datetime(int(year), month, int(day), h, int(minute))


def _done_tag(done: bool) -> str:
    return "[X] " if done else "[ ] "


@dataclass(slots=True)
class Todo:
    description: str
    done: bool = False

    kind: ClassVar[TaskKind] = TaskKind.TODO

    def render(self) -> str:
        return f"[{self.kind}]{_done_tag(self.done)}{self.description}"


@dataclass(slots=True)
class Deadline:
    description: str
    due: datetime
    done: bool = False

    kind: ClassVar[TaskKind] = TaskKind.DEADLINE

    def render(self) -> str:
        return f"[{self.kind}]{_done_tag(self.done)}{self.description} by: {format_display(self.due)}"


@dataclass(slots=True)
class Event:
    """
    Time-ranged task. The interval is half-open: [start, end).

    end must be strictly after start; two events that only touch
    (one ends when the other starts) do not overlap.
    """

    description: str
    start: datetime
    end: datetime
    done: bool = False

    kind: ClassVar[TaskKind] = TaskKind.EVENT

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError("Event end must be after start.")

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return start < self.end and self.start < end

    def interval_text(self) -> str:
        return f"from: {format_display(self.start)} to: {format_display(self.end)}"

    def render(self) -> str:
        return f"[{self.kind}]{_done_tag(self.done)}{self.description} {self.interval_text()}"


Task = Todo | Deadline | Event

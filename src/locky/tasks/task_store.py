# src/locky/tasks/task_store.py

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from ..core.errors import CorruptRecordError
from .task_models import (
    DISPLAY_HINT,
    INPUT_FORMAT_HINT,
    Deadline,
    Event,
    Task,
    TaskKind,
    Todo,
    format_display,
    parse_display,
    parse_input_datetime,
)

logger = logging.getLogger(__name__)

FIELD_SEP = "|"


def _parse_iso_local(raw: str) -> datetime:
    """ISO-8601 local date-time ("2019-12-02T18:00"). Offsets and bare dates are rejected."""
    if "T" not in raw:
        raise ValueError(f"not an ISO local date-time: {raw!r}")
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is not None:
        raise ValueError(f"timezone offsets are not supported: {raw!r}")
    return dt


def parse_date_flexible(raw: str) -> datetime:
    """
    Parse a stored date: input format, then ISO-8601 local date-time, then display format.

    Raises ValueError naming the raw text when none of them match.
    """
    for parser in (parse_input_datetime, _parse_iso_local, parse_display):
        try:
            return parser(raw)
        except ValueError:
            continue
    raise ValueError(
        f'Unrecognized datetime: "{raw}". Expected formats like "{INPUT_FORMAT_HINT}", '
        f'ISO-8601 or "{DISPLAY_HINT}".'
    )


def serialize_task(task: Task) -> str:
    done = "1" if task.done else "0"
    fields = [task.kind.value, done, task.description]
    if isinstance(task, Deadline):
        fields.append(format_display(task.due))
    elif isinstance(task, Event):
        fields.extend([format_display(task.start), format_display(task.end)])
    return FIELD_SEP.join(fields)


def parse_line(line: str, *, line_no: int | None = None) -> Task | None:
    """
    Rebuild one task from a stored line.

    Returns None for short lines and unknown type tags. A recognised record
    whose dates cannot be read raises CorruptRecordError.
    """
    p = line.rstrip("\r\n").split(FIELD_SEP)
    # trailing empty fields do not count ("T|1|" is as short as "T|1")
    while p and p[-1] == "":
        p.pop()
    if len(p) < 3:
        return None

    tag, done_raw, desc = p[0], p[1], p[2]
    done = done_raw == "1"

    try:
        if tag == TaskKind.TODO:
            return Todo(desc, done=done)

        if tag == TaskKind.DEADLINE:
            if len(p) < 4:
                return None
            return Deadline(desc, parse_date_flexible(p[3]), done=done)

        if tag == TaskKind.EVENT:
            if len(p) < 5:
                return None
            return Event(desc, parse_date_flexible(p[3]), parse_date_flexible(p[4]), done=done)
    except ValueError as e:
        where = f" (line {line_no})" if line_no is not None else ""
        raise CorruptRecordError(f"Corrupt task record{where}: {e}", line_no=line_no) from e

    return None


class TaskStore:
    """
    Flat-file task store.

    One pipe-delimited line per task. The whole file is rewritten on every save
    (temp file + os.replace), so readers never see a half-written list.
    """

    def __init__(self, path: str | Path = "data/locky.txt") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        if not self._path.exists():
            logger.info("TaskStore: no file at %s, starting empty", self._path)
            return []

        tasks: list[Task] = []
        skipped = 0
        # undecodable bytes become U+FFFD instead of aborting the load
        with self._path.open("r", encoding="utf-8", errors="replace") as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                task = parse_line(line, line_no=line_no)
                if task is None:
                    skipped += 1
                    logger.debug("TaskStore: skipped malformed line %d: %r", line_no, line)
                    continue
                tasks.append(task)

        logger.info("TaskStore loaded path=%s tasks=%d skipped=%d", self._path, len(tasks), skipped)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = "".join(serialize_task(t) + "\n" for t in tasks)

        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(payload, "utf-8")
        os.replace(tmp, self._path)
        logger.debug("TaskStore saved path=%s tasks=%d", self._path, len(tasks))

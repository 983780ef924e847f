# src/locky/cli/parser.py

"""
Turns a raw input line into a typed command.

Arguments are tokenised on the literal markers (/by, /from, /to); a marker only
counts when followed by whitespace, so "/bye" inside a description is text.
Parsing has no side effects: every problem is raised as ParseError.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from ..core.errors import ErrorKind, ParseError
from ..tasks.task_models import INPUT_FORMAT_HINT, parse_input_datetime

COMMAND_NAMES: tuple[str, ...] = (
    "list",
    "todo",
    "deadline",
    "event",
    "mark",
    "unmark",
    "delete",
    "find",
)

_INDEX_RE = re.compile(r"[+-]?\d+")
_FIELD_SEP = "|"

DEADLINE_USAGE = 'deadline <desc> /by yyyy-MM-dd HHmm (e.g. 2019-12-02 1800)'
EVENT_USAGE = 'event <desc> /from <start> /to <end>'


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    command: str
    args: str


@dataclass(frozen=True, slots=True)
class ListCommand:
    name: ClassVar[str] = "list"


@dataclass(frozen=True, slots=True)
class TodoCommand:
    description: str
    name: ClassVar[str] = "todo"


@dataclass(frozen=True, slots=True)
class DeadlineCommand:
    description: str
    due: datetime
    name: ClassVar[str] = "deadline"


@dataclass(frozen=True, slots=True)
class EventCommand:
    description: str
    start: datetime
    end: datetime
    name: ClassVar[str] = "event"


@dataclass(frozen=True, slots=True)
class MarkCommand:
    index: int
    name: ClassVar[str] = "mark"


@dataclass(frozen=True, slots=True)
class UnmarkCommand:
    index: int
    name: ClassVar[str] = "unmark"


@dataclass(frozen=True, slots=True)
class DeleteCommand:
    index: int
    name: ClassVar[str] = "delete"


@dataclass(frozen=True, slots=True)
class FindCommand:
    keyword: str
    name: ClassVar[str] = "find"


Command = (
    ListCommand
    | TodoCommand
    | DeadlineCommand
    | EventCommand
    | MarkCommand
    | UnmarkCommand
    | DeleteCommand
    | FindCommand
)


# ---- low-level helpers ----


def _split_marker(text: str, marker: str) -> tuple[str, str] | None:
    """
    Split at the first occurrence of marker that ends a word.

    The marker must be followed by whitespace or the end of the text.
    Returns (before, after) untrimmed, or None when the marker is absent.
    """
    pos = text.find(marker)
    while pos != -1:
        end = pos + len(marker)
        after_ok = end == len(text) or text[end].isspace()
        if after_ok:
            return text[:pos], text[end:]
        pos = text.find(marker, pos + 1)
    return None


def _parse_when(raw: str) -> datetime:
    try:
        return parse_input_datetime(raw)
    except ValueError:
        raise ParseError(
            f"Invalid date format. Use {INPUT_FORMAT_HINT}", ErrorKind.BAD_DATE
        ) from None


def _check_description(desc: str) -> str:
    if _FIELD_SEP in desc:
        raise ParseError(
            f'Descriptions cannot contain "{_FIELD_SEP}". Try a "/" or "-" instead.',
            ErrorKind.BAD_FORMAT,
        )
    return desc


# ---- public API ----


def parse_command_line(raw: str) -> ParsedCommand:
    """Split into a lower-cased command word and the trimmed remainder."""
    s = raw.strip()
    if not s:
        raise ParseError("Say something? (try: todo ... / deadline ... / event ...)", ErrorKind.EMPTY_INPUT)

    parts = s.split(maxsplit=1)
    cmd = parts[0].lower()
    args = parts[1].strip() if len(parts) > 1 else ""
    return ParsedCommand(cmd, args)


def parse_deadline_args(args: str) -> DeadlineCommand:
    if not args:
        raise ParseError(
            'Deadline needs "description /by when". Try: "deadline CS2100 lab /by 2019-12-02 1800"',
            ErrorKind.MISSING_ARGUMENT,
        )

    split = _split_marker(args, "/by")
    if split is None:
        raise ParseError(f'Missing "/by". Format: "{DEADLINE_USAGE}"', ErrorKind.BAD_FORMAT)

    desc, by = split[0].strip(), split[1].strip()
    if not desc:
        raise ParseError("Deadline description cannot be empty.", ErrorKind.EMPTY_FIELD)
    if not by:
        raise ParseError("Deadline time cannot be empty after /by.", ErrorKind.EMPTY_FIELD)

    return DeadlineCommand(_check_description(desc), _parse_when(by))


def parse_event_args(args: str) -> EventCommand:
    if not args:
        raise ParseError(
            'Event needs "description /from start /to end". '
            'Try: "event team sync /from 2019-12-02 0900 /to 2019-12-02 1000"',
            ErrorKind.MISSING_ARGUMENT,
        )

    head = _split_marker(args, "/from")
    if head is None:
        raise ParseError(f'Missing "/from". Format: "{EVENT_USAGE}"', ErrorKind.BAD_FORMAT)
    tail = _split_marker(head[1], "/to")
    if tail is None:
        raise ParseError(f'Missing "/to" after "/from". Format: "{EVENT_USAGE}"', ErrorKind.BAD_FORMAT)

    desc, start, end = head[0].strip(), tail[0].strip(), tail[1].strip()
    if not desc:
        raise ParseError("Event description cannot be empty.", ErrorKind.EMPTY_FIELD)
    if not start:
        raise ParseError("Event start time cannot be empty after /from.", ErrorKind.EMPTY_FIELD)
    if not end:
        raise ParseError("Event end time cannot be empty after /to.", ErrorKind.EMPTY_FIELD)

    _check_description(desc)
    start_dt = _parse_when(start)
    end_dt = _parse_when(end)
    if end_dt <= start_dt:
        raise ParseError("Event end must be after start.", ErrorKind.BAD_ORDER)

    return EventCommand(desc, start_dt, end_dt)


def parse_index(cmd: str, args: str) -> int:
    if not args:
        raise ParseError(f'Which task number to {cmd}? e.g., "{cmd} 2"', ErrorKind.MISSING_ARGUMENT)
    if not _INDEX_RE.fullmatch(args):
        raise ParseError(f'Not a number: "{args}". Try "{cmd} 2".', ErrorKind.NOT_A_NUMBER)
    return int(args)


def parse(raw: str) -> Command:
    pc = parse_command_line(raw)
    cmd, args = pc.command, pc.args

    if cmd == "list":
        return ListCommand()
    if cmd == "todo":
        if not args:
            raise ParseError('Todo needs a description. Try: "todo buy milk"', ErrorKind.MISSING_ARGUMENT)
        return TodoCommand(_check_description(args))
    if cmd == "deadline":
        return parse_deadline_args(args)
    if cmd == "event":
        return parse_event_args(args)
    if cmd == "mark":
        return MarkCommand(parse_index(cmd, args))
    if cmd == "unmark":
        return UnmarkCommand(parse_index(cmd, args))
    if cmd == "delete":
        return DeleteCommand(parse_index(cmd, args))
    if cmd == "find":
        if not args:
            raise ParseError('Find needs a keyword. Try: "find milk"', ErrorKind.MISSING_ARGUMENT)
        return FindCommand(args)

    raise ParseError(f"Unknown command. Try: {' | '.join(COMMAND_NAMES)}", ErrorKind.UNKNOWN_COMMAND)

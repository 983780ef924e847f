# src/locky/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..core.errors import ErrorKind, LockyError, PersistenceError
from ..tasks.task_list import TaskList, render_numbered
from .parser import (
    Command,
    DeadlineCommand,
    DeleteCommand,
    EventCommand,
    FindCommand,
    ListCommand,
    MarkCommand,
    TodoCommand,
    UnmarkCommand,
    parse,
)

CommandHandler = Callable[[TaskList, Any], str]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Reply:
    """What a connector shows the user. error is None when the command fully succeeded."""

    text: str
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class _SaveFailed(Exception):
    """Carries the normal reply text out of a handler whose save failed."""

    def __init__(self, text: str, cause: PersistenceError) -> None:
        super().__init__(text)
        self.text = text
        self.cause = cause


class CommandRegistry:
    """Routes parsed commands to handlers and turns every outcome into a Reply."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(self, name: str, handler: CommandHandler, help_text: str) -> None:
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text

    def dispatch(self, task_list: TaskList, command: Command) -> Reply:
        handler = self._handlers.get(command.name)
        if handler is None:
            return Reply(f"Unknown command: {command.name}.", ErrorKind.UNKNOWN_COMMAND)

        try:
            return Reply(handler(task_list, command))
        except _SaveFailed as e:
            return Reply(f"{e.text}\n(Warning: failed to save: {e.cause.message})", ErrorKind.PERSISTENCE)
        except PersistenceError as e:
            return Reply(f"(Warning: failed to save: {e.message})", ErrorKind.PERSISTENCE)
        except LockyError as e:
            logger.debug("Command %s rejected: %s", command.name, e.message)
            return Reply(e.message, e.kind)

    def handle(self, task_list: TaskList, line: str) -> Reply:
        """Parse and execute one input line."""
        try:
            command = parse(line)
        except LockyError as e:
            return Reply(e.message, e.kind)
        return self.dispatch(task_list, command)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _with_task(message: str, render: str) -> str:
    return f"{message}\n{render}"


def _run_mutation(action: Callable[[], Any], describe: Callable[[Any], str]) -> str:
    """
    Run a TaskList mutation and describe its result.

    A failed save still leaves the change in memory, so the normal text is
    built from the task carried on the error and re-raised for dispatch().
    """
    try:
        task = action()
    except PersistenceError as e:
        if e.task is None:
            raise
        raise _SaveFailed(describe(e.task), e) from e
    return describe(task)


def cmd_list(task_list: TaskList, command: ListCommand) -> str:
    if task_list.is_empty():
        return "Looky looky your Locky task list is empty! Time to get started!"
    return "Oh my, look at all these tasks! Chop chop!\n" + task_list.printable_list()


def cmd_todo(task_list: TaskList, command: TodoCommand) -> str:
    return _run_mutation(
        lambda: task_list.add_todo(command.description),
        lambda t: f"Added: {t.render()}",
    )


def cmd_deadline(task_list: TaskList, command: DeadlineCommand) -> str:
    return _run_mutation(
        lambda: task_list.add_deadline(command.description, command.due),
        lambda t: f"Added: {t.render()}",
    )


def cmd_event(task_list: TaskList, command: EventCommand) -> str:
    return _run_mutation(
        lambda: task_list.add_event(command.description, command.start, command.end),
        lambda t: f"Added: {t.render()}",
    )


def cmd_mark(task_list: TaskList, command: MarkCommand) -> str:
    was_done = task_list.is_done(command.index)
    msg = (
        "You locked in once you don't have to do this again"
        if was_done
        else "Locked In! Task marked as completed:"
    )
    return _run_mutation(lambda: task_list.mark(command.index), lambda t: _with_task(msg, t.render()))


def cmd_unmark(task_list: TaskList, command: UnmarkCommand) -> str:
    """
    unmark 2 -> clear the done flag of task 2

    On a task that is not done the flag is already clear; only the message differs.
    """
    was_done = task_list.is_done(command.index)
    msg = "Ok, undone. Back to work!" if was_done else "Oh.... it's still not done."
    return _run_mutation(lambda: task_list.unmark(command.index), lambda t: _with_task(msg, t.render()))


def cmd_delete(task_list: TaskList, command: DeleteCommand) -> str:
    return _run_mutation(
        lambda: task_list.delete(command.index),
        lambda t: _with_task("Ok, so let's just forget that task existed...", t.render()),
    )


def cmd_find(task_list: TaskList, command: FindCommand) -> str:
    matches = task_list.find(command.keyword)
    if not matches:
        return "No matching tasks found."
    return "Matching tasks:\n" + render_numbered(matches)


registry.register("list", cmd_list, help_text="Show all tasks: list")
registry.register("todo", cmd_todo, help_text="Add a todo: todo <desc>")
registry.register("deadline", cmd_deadline, help_text="Add a deadline: deadline <desc> /by yyyy-MM-dd HHmm")
registry.register("event", cmd_event, help_text="Add an event: event <desc> /from <start> /to <end>")
registry.register("mark", cmd_mark, help_text="Mark task n as done: mark <n>")
registry.register("unmark", cmd_unmark, help_text="Mark task n as not done: unmark <n>")
registry.register("delete", cmd_delete, help_text="Remove task n: delete <n>")
registry.register("find", cmd_find, help_text="Case-insensitive search: find <keyword>")

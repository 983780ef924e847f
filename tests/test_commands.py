# tests/test_commands.py

from __future__ import annotations

from locky.cli.commands import CommandRegistry, Reply, registry
from locky.cli.parser import ListCommand
from locky.core.errors import ErrorKind
from locky.tasks.task_list import TaskList
from locky.tasks.task_models import Todo

from .fakes import FailingStorage


def _say(task_list: TaskList, line: str) -> Reply:
    return registry.handle(task_list, line)


def test_command_registry_routes_by_name(task_list: TaskList) -> None:
    reg = CommandRegistry()
    called = {"list": 0}

    def h(tl, command):
        called["list"] += 1
        return "listed"

    reg.register("list", h, "list")

    assert reg.handle(task_list, "list") == Reply("listed")
    assert called["list"] == 1
    # parsed fine but nothing registered for it
    assert reg.handle(task_list, "todo x").error is ErrorKind.UNKNOWN_COMMAND


def test_todo_grows_list_by_one(task_list: TaskList) -> None:
    reply = _say(task_list, "todo buy milk")
    assert reply == Reply("Added: [T][ ] buy milk")
    assert task_list.tasks() == [Todo("buy milk", done=False)]


def test_list_messages(task_list: TaskList) -> None:
    assert _say(task_list, "list").text == (
        "Looky looky your Locky task list is empty! Time to get started!"
    )
    _say(task_list, "todo a")
    _say(task_list, "deadline b /by 2019-12-02 1800")
    assert _say(task_list, "list").text == (
        "Oh my, look at all these tasks! Chop chop!\n"
        "1. [T][ ] a\n"
        "2. [D][ ] b by: Dec 02 2019, 6:00PM"
    )


def test_mark_transition_then_noop(task_list: TaskList) -> None:
    _say(task_list, "todo read")

    first = _say(task_list, "mark 1")
    assert first.text == "Locked In! Task marked as completed:\n[T][X] read"

    again = _say(task_list, "mark 1")
    assert again.ok
    assert again.text == "You locked in once you don't have to do this again\n[T][X] read"


def test_unmark_noop_then_transition(task_list: TaskList) -> None:
    _say(task_list, "todo read")

    noop = _say(task_list, "unmark 1")
    assert noop.text == "Oh.... it's still not done.\n[T][ ] read"
    assert task_list.is_done(1) is False

    _say(task_list, "mark 1")
    assert _say(task_list, "unmark 1").text == "Ok, undone. Back to work!\n[T][ ] read"


def test_delete_reply(task_list: TaskList) -> None:
    _say(task_list, "todo a")
    _say(task_list, "todo b")
    reply = _say(task_list, "delete 1")
    assert reply.text == "Ok, so let's just forget that task existed...\n[T][ ] a"
    assert [t.description for t in task_list.tasks()] == ["b"]


def test_out_of_range_index_is_reported(task_list: TaskList) -> None:
    _say(task_list, "todo a")
    for line in ("mark 2", "unmark 0", "delete 9"):
        reply = _say(task_list, line)
        assert reply.error is ErrorKind.NO_SUCH_TASK
        assert reply.text.startswith("No such task")
    assert task_list.tasks() == [Todo("a")]


def test_find_replies(task_list: TaskList) -> None:
    _say(task_list, "todo buy milk")
    _say(task_list, "todo walk dog")

    assert _say(task_list, "find MILK").text == "Matching tasks:\n1. [T][ ] buy milk"
    assert _say(task_list, "find cat").text == "No matching tasks found."


def test_event_clash_reply(task_list: TaskList) -> None:
    ok = _say(task_list, "event team sync /from 2019-12-02 0900 /to 2019-12-02 1000")
    assert ok.text == "Added: [E][ ] team sync from: Dec 02 2019, 9:00AM to: Dec 02 2019, 10:00AM"

    clash = _say(task_list, "event standup /from 2019-12-02 0930 /to 2019-12-02 1100")
    assert clash.error is ErrorKind.CLASH
    assert "team sync" in clash.text

    touching = _say(task_list, "event lunch /from 2019-12-02 1000 /to 2019-12-02 1100")
    assert touching.ok
    assert task_list.size == 2


def test_parse_errors_become_replies(task_list: TaskList) -> None:
    reply = _say(task_list, "")
    assert not reply.ok
    assert reply.error is ErrorKind.EMPTY_INPUT

    reply = _say(task_list, "mark abc")
    assert reply.text == 'Not a number: "abc". Try "mark 2".'


def test_save_failure_is_a_warning_not_a_crash() -> None:
    tl = TaskList(FailingStorage(reason="read-only file system"))

    reply = registry.handle(tl, "todo keep me")

    assert reply.error is ErrorKind.PERSISTENCE
    assert reply.text == (
        "Added: [T][ ] keep me\n(Warning: failed to save: read-only file system)"
    )
    assert tl.tasks() == [Todo("keep me")]

    marked = registry.handle(tl, "mark 1")
    assert marked.error is ErrorKind.PERSISTENCE
    assert marked.text.startswith("Locked In!")
    assert tl.is_done(1)


def test_dispatch_accepts_parsed_commands(task_list: TaskList) -> None:
    assert registry.dispatch(task_list, ListCommand()).ok


def test_help_lists_every_command() -> None:
    text = registry.build_help()
    for name in ("list", "todo", "deadline", "event", "mark", "unmark", "delete", "find"):
        assert f"  {name} - " in text

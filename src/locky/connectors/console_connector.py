# src/locky/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

DIVIDER = "_" * 60
EXIT_WORD = "bye"
FAREWELL = "You better Lock In!"


def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    One line in, one reply out, until "bye", EOF or Ctrl+C.

    read_line/write default to the terminal; tests pass their own.
    """
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "Locky"))
    logger.info("Console connector started (tasks=%d).", state.task_list.size)

    write(f"Hello! I'm {app_name}. What can I do for you? (type '{EXIT_WORD}' to quit)")
    write(command_registry.build_help())
    for notice in state.notices:
        write(notice)

    while True:
        try:
            user_input = read_line("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if user_input.lower() == EXIT_WORD:
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state.task_list, user_input)
            text = reply.text
        except Exception as e:
            logger.exception("Command handler crashed.")
            text = f"Unexpected error: {e}"

        write(DIVIDER)
        write(text)
        write("")

    write(f"{DIVIDER}\n{FAREWELL}\n{DIVIDER}")
    logger.info("Console connector finished.")

# src/locky/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.errors import CorruptRecordError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    console_level = getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(
        log_dir=settings.log_dir,
        console_level=console_level,
        file_logging=settings.file_logging,
    )

    logger.info("Starting %s (tasks file: %s)...", settings.app_name, settings.tasks_path)

    try:
        state = create_initial_state(settings=settings)
    except CorruptRecordError as e:
        logger.error("Refusing to start: %s", e.message)
        print(f"{e.message}\nFix or move {settings.tasks_path} and try again.", file=sys.stderr)
        raise SystemExit(1) from e

    run_console_loop(state)
    logger.info("Bye.")


if __name__ == "__main__":
    main()

# src/gist_todo/connectors/console_connector.py

from __future__ import annotations

import logging
import shlex

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = "todo> "


def run_console_loop(state: AppState) -> None:
    """Interactive shell: each line is one command, same syntax as the CLI."""
    logger.info("Console shell started.")
    print("Type commands without the 'gist-todo' prefix (e.g. list, add \"Buy milk\"). Use exit to quit.")

    def emit(text: str) -> None:
        print(text, flush=True)

    while True:
        try:
            line = input(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            print()
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("exit", "quit", "/exit", "/quit"):
            break

        try:
            argv = shlex.split(line.lstrip("/"))
        except ValueError as e:
            print(f"Error: {e}")
            continue

        if argv and argv[0].lower() == "shell":
            print("Already in the shell.")
            continue

        result = command_registry.handle(state, argv, emit=emit)
        print(result.text)

    logger.info("Console shell finished.")

# src/gist_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then either runs one command from argv
or, for `gist-todo shell`, the interactive console loop.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.debug("Starting %s argv=%s", settings.app_name, argv)

    try:
        state = create_initial_state(settings=settings)
    except Exception:
        logger.exception("Failed to initialize local state.")
        print(f"Fatal error: could not open local data in {settings.data_dir}")
        return 1

    if argv and argv[0].lower() == "shell":
        run_console_loop(state)
        return 0

    result = registry.handle(state, argv, emit=print)
    print(result.text)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())

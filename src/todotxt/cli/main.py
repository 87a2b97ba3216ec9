# src/todotxt/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState from settings, then runs one command:
    todo <command> [arguments]     (no command means "list")
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import CommandError, registry
from ..config import Settings, get_settings
from ..logging_setup import level_from_name, setup_logging
from ..tasks.task_store import TaskFileError

logger = logging.getLogger(__name__)

USAGE_HINT = "Run 'todo help' for usage information."


def run(argv: list[str], settings: Settings) -> int:
    """Run one command against the configured files; returns the process exit status."""
    name, args = (argv[0], argv[1:]) if argv else ("list", [])

    try:
        state = create_initial_state(settings=settings)
        output = registry.handle(state, name, args)
    except CommandError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(USAGE_HINT, file=sys.stderr)
        return 1
    except TaskFileError as exc:
        logger.debug("File error while running %s", name, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    setup_logging(console_level=level_from_name(settings.log_level), log_dir=settings.log_dir)
    return run(sys.argv[1:] if argv is None else argv, settings)


if __name__ == "__main__":
    sys.exit(main())

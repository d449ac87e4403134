# src/task_tracker/cli/main.py

"""
CLI entrypoint.

One run = one command: load the tasks file, run the handler, save if the
handler changed something. Only a failed save (or a tasks file that exists
but cannot be read) makes the exit code non-zero.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from datetime import datetime

from ..config import get_settings
from ..logging_setup import setup_logging
from ..tasks.task_models import utcnow
from ..tasks.task_store import TaskStore, TaskStoreError
from .commands import registry

logger = logging.getLogger(__name__)


def _configure_logging(settings) -> None:
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(console_level, int):
        console_level = logging.WARNING

    log_dir = settings.data_dir if getattr(settings, "log_to_file", False) else None
    setup_logging(log_dir=log_dir, console_level=console_level)


def main(
    argv: Sequence[str] | None = None,
    *,
    settings=None,
    now: datetime | None = None,
) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = list(argv)

    if settings is None:
        settings = get_settings()
    _configure_logging(settings)

    if not args or args[0] == "help":
        print(registry.build_help())
        return 0

    name, cmd_args = args[0], args[1:]
    store = TaskStore(settings.tasks_path)
    try:
        tasks = store.load()
    except TaskStoreError:
        logger.error("Failed to read tasks from %s", store.path, exc_info=True)
        print("Error reading tasks file.", file=sys.stderr)
        return 1

    command = registry.get(name)
    if command is None:
        logger.debug("Unknown command %r, showing usage.", name)
        print(registry.build_help())
        return 0

    logger.info("%s: running %s", getattr(settings, "app_name", "task-tracker"), name)
    result = command.handler(tasks, cmd_args, now=now or utcnow())
    for line in result.lines:
        print(line)

    if command.mutating and result.mutated:
        try:
            store.save(result.tasks)
        except TaskStoreError:
            logger.error("Failed to persist tasks to %s", store.path, exc_info=True)
            print("Error saving tasks file.", file=sys.stderr)
            return 1

    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()

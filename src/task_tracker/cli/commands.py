# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime

from ..tasks import task_registry
from ..tasks.task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """
    What a handler did.

    `tasks` is the collection after the command (the input unchanged when
    `mutated` is False). `lines` are printed to stdout by the dispatcher.
    """

    mutated: bool
    tasks: list[Task]
    lines: list[str]


CommandHandler = Callable[..., CommandResult]


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    handler: CommandHandler
    usage: str
    help_text: str
    mutating: bool = True


class CommandRegistry:
    """Command-name -> handler table used by the dispatcher."""

    def __init__(self, title: str = "Task Tracker CLI") -> None:
        self._title = title
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        usage: str,
        help_text: str,
        *,
        mutating: bool = True,
    ) -> None:
        self._commands[name] = Command(
            name=name,
            handler=handler,
            usage=usage,
            help_text=help_text,
            mutating=mutating,
        )

    def get(self, name: str) -> Command | None:
        # Exact match only: "Add" is not "add".
        return self._commands.get(name)

    def names(self) -> list[str]:
        return list(self._commands)

    def build_help(self) -> str:
        lines = [self._title, "Usage:"]
        for cmd in self._commands.values():
            lines.append(f"  {cmd.usage:<32} {cmd.help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def parse_task_id(raw: str | None) -> int | None:
    """
    Parse a user-supplied task id.

    Only plain positive decimal integers are ids; "0", "", "-1", "1.5",
    "abc" and a missing argument all come back as None.
    """
    if raw is None:
        return None
    s = raw.strip()
    if not s or not s.isascii() or not s.isdigit():
        return None
    value = int(s)
    return value if value >= 1 else None


def _join_description(args: Sequence[str]) -> str:
    return " ".join(args).strip()


def _touch(task: Task, now: datetime, **changes) -> Task:
    # updated_at never goes below created_at, even with a skewed clock.
    return replace(task, updated_at=max(now, task.created_at), **changes)


def _unchanged(tasks: Sequence[Task], *lines: str) -> CommandResult:
    return CommandResult(mutated=False, tasks=list(tasks), lines=list(lines))


def _display_time(ts: datetime) -> str:
    return ts.astimezone().strftime("%d-%m-%Y %H:%M")


def format_task(task: Task) -> str:
    return (
        f"[{task.id}] ({task.status}) {task.description}"
        f" | Created: {_display_time(task.created_at)}"
        f" | Updated: {_display_time(task.updated_at)}"
    )


# ---- handlers ----


def cmd_add(tasks: Sequence[Task], args: list[str], *, now: datetime) -> CommandResult:
    description = _join_description(args)
    if not description:
        return _unchanged(tasks, "Please provide a task description.")

    task = Task(
        id=task_registry.next_id(tasks),
        description=description,
        status=TaskStatus.TODO,
        created_at=now,
        updated_at=now,
    )
    logger.debug("Task added id=%s", task.id)
    return CommandResult(
        mutated=True,
        tasks=[*tasks, task],
        lines=[f"Task added successfully (ID: {task.id})"],
    )


def cmd_update(tasks: Sequence[Task], args: list[str], *, now: datetime) -> CommandResult:
    task_id = parse_task_id(args[0] if args else None)
    description = _join_description(args[1:])
    if task_id is None or not description:
        return _unchanged(tasks, "Usage: update <id> <new description>")

    task = task_registry.find(tasks, task_id)
    if task is None:
        return _unchanged(tasks, "Task not found.")

    updated = _touch(task, now, description=description)
    logger.debug("Task updated id=%s", task_id)
    return CommandResult(
        mutated=True,
        tasks=task_registry.replace_task(tasks, updated),
        lines=["Task updated successfully."],
    )


def cmd_delete(tasks: Sequence[Task], args: list[str], *, now: datetime) -> CommandResult:
    task_id = parse_task_id(args[0] if args else None)
    if task_id is None:
        return _unchanged(tasks, "Usage: delete <id>")

    remaining, found = task_registry.remove(tasks, task_id)
    if not found:
        return _unchanged(tasks, "Task not found.")

    logger.debug("Task deleted id=%s", task_id)
    return CommandResult(mutated=True, tasks=remaining, lines=["Task deleted successfully."])


def _mark(status: TaskStatus) -> CommandHandler:
    command_name = f"mark-{status.value}"

    def handler(tasks: Sequence[Task], args: list[str], *, now: datetime) -> CommandResult:
        task_id = parse_task_id(args[0] if args else None)
        if task_id is None:
            return _unchanged(tasks, f"Usage: {command_name} <id>")

        task = task_registry.find(tasks, task_id)
        if task is None:
            return _unchanged(tasks, "Task not found.")

        logger.debug("Task id=%s status %s -> %s", task_id, task.status, status)
        return CommandResult(
            mutated=True,
            tasks=task_registry.replace_task(tasks, _touch(task, now, status=status)),
            lines=[f"Task marked as {status.value}."],
        )

    handler.__name__ = f"cmd_mark_{status.name.lower()}"
    return handler


cmd_mark_in_progress = _mark(TaskStatus.IN_PROGRESS)
cmd_mark_done = _mark(TaskStatus.DONE)


def cmd_list(tasks: Sequence[Task], args: list[str], *, now: datetime) -> CommandResult:
    """
    list           -> every task
    list <status>  -> only tasks in that status
    Anything else ("all", typos) lists every task.
    """
    flt = (args[0] if args else "all").lower()
    shown = task_registry.filter_by_status(tasks, TaskStatus.parse(flt))
    if not shown:
        return _unchanged(tasks, "No tasks found.")
    return _unchanged(tasks, *(format_task(t) for t in shown))


registry.register("add", cmd_add, "add <description>", "Add a new task")
registry.register("update", cmd_update, "update <id> <new description>", "Update a task")
registry.register("delete", cmd_delete, "delete <id>", "Delete a task")
registry.register(
    "mark-in-progress", cmd_mark_in_progress, "mark-in-progress <id>", "Mark a task as in-progress"
)
registry.register("mark-done", cmd_mark_done, "mark-done <id>", "Mark a task as done")
registry.register(
    "list", cmd_list, "list [all|todo|in-progress|done]", "List tasks", mutating=False
)

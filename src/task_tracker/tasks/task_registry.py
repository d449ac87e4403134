# src/task_tracker/tasks/task_registry.py

"""
Pure operations over the in-memory task list of one run.

Nothing here mutates its input: every function that changes the collection
returns a new list.
"""

from __future__ import annotations

from collections.abc import Sequence

from .task_models import Task, TaskStatus


def next_id(tasks: Sequence[Task]) -> int:
    if not tasks:
        return 1
    return max(t.id for t in tasks) + 1


def find(tasks: Sequence[Task], task_id: int) -> Task | None:
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def remove(tasks: Sequence[Task], task_id: int) -> tuple[list[Task], bool]:
    kept = [t for t in tasks if t.id != task_id]
    return kept, len(kept) != len(tasks)


def replace_task(tasks: Sequence[Task], task: Task) -> list[Task]:
    """Swap in `task` at the position of the task with the same id."""
    return [task if t.id == task.id else t for t in tasks]


def filter_by_status(tasks: Sequence[Task], status: TaskStatus | None) -> list[Task]:
    if status is None:
        return list(tasks)
    return [t for t in tasks if t.status is status]

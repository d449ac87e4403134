# tests/fakes.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from task_tracker.tasks.task_models import Task, TaskStatus

T0 = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """Deterministic clock: T0 + minutes."""
    return T0 + timedelta(minutes=minutes)


def make_task(
    task_id: int,
    description: str = "task",
    status: TaskStatus = TaskStatus.TODO,
    *,
    created_at: datetime = T0,
    updated_at: datetime | None = None,
) -> Task:
    return Task(
        id=task_id,
        description=description,
        status=status,
        created_at=created_at,
        updated_at=created_at if updated_at is None else updated_at,
    )

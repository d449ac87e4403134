# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any


class InvalidTaskRecord(ValueError):
    """Raised when a persisted record cannot be turned into a Task."""


class TaskStatus(StrEnum):
    """Task lifecycle status. Values are the strings stored on disk."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus | None:
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime


def utcnow() -> datetime:
    """Current UTC time, truncated to the millisecond precision used on disk."""
    ts = datetime.now(timezone.utc)
    return ts.replace(microsecond=ts.microsecond // 1000 * 1000)


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a 'Z' suffix."""
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidTaskRecord(f"bad timestamp: {raw!r}")
    try:
        ts = datetime.fromisoformat(raw.strip())
    except ValueError as e:
        raise InvalidTaskRecord(f"bad timestamp: {raw!r}") from e
    if ts.tzinfo is None:
        # Naive timestamps are stored UTC.
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "description": task.description,
        "status": task.status.value,
        "createdAt": format_timestamp(task.created_at),
        "updatedAt": format_timestamp(task.updated_at),
    }


def task_from_record(record: Any) -> Task:
    """
    Build a Task from one decoded JSON record.

    Raises InvalidTaskRecord for anything that would break the model
    invariants (positive int id, non-blank description, known status,
    updatedAt >= createdAt).
    """
    if not isinstance(record, dict):
        raise InvalidTaskRecord(f"record is not an object: {type(record).__name__}")

    task_id = record.get("id")
    # bool is an int subclass; True must not pass as id 1.
    if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
        raise InvalidTaskRecord(f"bad id: {task_id!r}")

    description = record.get("description")
    if not isinstance(description, str) or not description.strip():
        raise InvalidTaskRecord(f"bad description for id={task_id}")

    status = TaskStatus.parse(record.get("status"))
    if status is None:
        raise InvalidTaskRecord(f"bad status for id={task_id}: {record.get('status')!r}")

    created_at = parse_timestamp(record.get("createdAt"))
    updated_at = parse_timestamp(record.get("updatedAt"))
    if updated_at < created_at:
        raise InvalidTaskRecord(f"updatedAt before createdAt for id={task_id}")

    return Task(
        id=task_id,
        description=description,
        status=status,
        created_at=created_at,
        updated_at=updated_at,
    )

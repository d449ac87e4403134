# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from .task_models import InvalidTaskRecord, Task, task_from_record, task_to_record

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = "[]"


class TaskStoreError(RuntimeError):
    """The tasks file could not be read or written."""


class TaskStore:
    """
    JSON file task store.

    The whole collection lives in one document (a JSON array of task
    records). Reads self-heal: a missing, empty or corrupt file is reset to
    an empty array. Writes go to a temp file first and are swapped in with
    os.replace.

    Single writer: there is no locking, concurrent runs are last-writer-wins.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _reset(self, reason: str | None) -> None:
        if reason is not None:
            logger.warning("%s was %s. Resetting to empty list.", self._path.name, reason)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(EMPTY_DOCUMENT, "utf-8")
        except OSError:
            # Not fatal here; a failing save() will report it.
            logger.exception("Failed to reset tasks file %s", self._path)

    @staticmethod
    def _decode(raw: str) -> list[Task]:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise InvalidTaskRecord(f"document is not an array: {type(data).__name__}")

        tasks = [task_from_record(r) for r in data]
        ids = [t.id for t in tasks]
        if len(set(ids)) != len(ids):
            raise InvalidTaskRecord("duplicate task ids")
        return tasks

    # ---- public API ----

    def load(self) -> list[Task]:
        if not self._path.exists():
            logger.debug("Tasks file %s missing, creating it.", self._path)
            self._reset(None)
            return []

        try:
            data = self._path.read_bytes()
        except OSError as e:
            # Unreadable is not corrupt: leave the file alone.
            raise TaskStoreError(f"Failed to read tasks from {self._path}: {e}") from e

        if not data.strip():
            self._reset("empty")
            return []

        try:
            tasks = self._decode(data.decode("utf-8"))
        except (ValueError, RecursionError):
            # UnicodeDecodeError, json.JSONDecodeError and InvalidTaskRecord are all ValueErrors.
            logger.debug("Failed to decode %s", self._path, exc_info=True)
            self._reset("invalid")
            return []

        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            payload = json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False, indent=2)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError) as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise TaskStoreError(f"Failed to save tasks to {self._path}: {e}") from e

        logger.debug("Saved %d tasks to %s", len(tasks), self._path)

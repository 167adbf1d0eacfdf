# src/task_list/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from ..errors import StorageError
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    JSON task store.

    The whole collection is one JSON array at a single path:
    - read_tasks() loads everything
    - save_tasks() replaces everything (temp file + os.replace)

    There is no locking; two processes writing at once means last writer wins.
    The constructor does not touch the filesystem.
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _tmp_path(self) -> Path:
        return self._path.with_name(self._path.name + ".tmp")

    def _read_raw(self) -> str:
        try:
            return self._path.read_text("utf-8")
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Cannot read task store {self._path}: {exc}") from exc

    # ---- public API ----

    def read_tasks(self) -> list[Task]:
        """
        Load the full collection.

        A missing or blank file is an empty store. Anything else that is not a
        JSON array of well-formed task records is a StorageError.
        """
        raw = self._read_raw()
        if not raw.strip():
            logger.debug("Task store %s is empty or missing", self._path)
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Task store {self._path} is not valid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise StorageError(
                f"Task store {self._path} must hold a JSON array, got {type(data).__name__}"
            )

        tasks = [Task.from_dict(item) for item in data]

        seen: set[str] = set()
        for task in tasks:
            if task.id in seen:
                raise StorageError(f"Task store {self._path} has duplicate id {task.id}")
            seen.add(task.id)

        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save_tasks(self, tasks: Iterable[Task]) -> None:
        """Serialize the entire collection and replace the file in one step."""
        records = [task.to_dict() for task in tasks]
        payload = json.dumps(records, ensure_ascii=False, indent=2)

        tmp = self._tmp_path()
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageError(f"Cannot write task store {self._path}: {exc}") from exc

        logger.debug("Saved %d tasks to %s", len(records), self._path)

    def count_tasks(self) -> int:
        return len(self.read_tasks())

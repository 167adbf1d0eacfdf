# src/task_list/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task operations.

Operations depend on a Protocol instead of the concrete JSON store.
This keeps the storage swappable and makes testing easier.
"""

from collections.abc import Iterable
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """Whole-collection storage: every write replaces everything."""

    def read_tasks(self) -> list[Task]: ...
    def save_tasks(self, tasks: Iterable[Task]) -> None: ...

# src/task_list/tasks/task_api.py

from __future__ import annotations

"""
Task operations consumed by the command line.

Each call is one read-modify-write over the full collection:
read everything, compute the new list, save everything.
Errors propagate unchanged to the caller.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from ..core.ports import TaskRepo
from ..errors import NotFoundError, ValidationError
from .task_models import Priority, Task, TaskEdit, utc_now
from .task_query import Selector, TaskQuery, apply_query

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _require_title(title: str) -> str:
    if not title or not title.strip():
        raise ValidationError("The title is empty")
    return title


def add_tasks(
    store: TaskRepo,
    titles: Sequence[str],
    *,
    description: str | None = None,
    priority: Priority | None = None,
    now: Clock = utc_now,
) -> list[Task]:
    """Create one task per title, sharing description and priority."""
    if not titles:
        raise ValidationError("At least one title is required")
    for title in titles:
        _require_title(title)

    tasks = store.read_tasks()
    taken = {t.id for t in tasks}
    ts = now()

    created: list[Task] = []
    for title in titles:
        task = Task.new(title, description, priority, now=ts, taken_ids=taken)
        taken.add(task.id)
        created.append(task)

    store.save_tasks([*tasks, *created])
    for task in created:
        logger.info("Task added id=%s priority=%s", task.id, task.priority.value)
    return created


def add_task(
    store: TaskRepo,
    title: str,
    description: str | None = None,
    priority: Priority | None = None,
    *,
    now: Clock = utc_now,
) -> Task:
    (task,) = add_tasks(store, [title], description=description, priority=priority, now=now)
    return task


def edit_task(
    store: TaskRepo,
    task_id: str,
    edit: TaskEdit,
    *,
    now: Clock = utc_now,
) -> Task:
    """
    Selectively replace fields of one task.

    Validation happens before anything is mutated. The store is rewritten
    only when at least one field actually changed.
    """
    if edit.title is not None:
        _require_title(edit.title)

    tasks = store.read_tasks()
    found = next((t for t in tasks if t.id == task_id), None)
    if found is None:
        raise NotFoundError(f"Task with this id wasn't found: {task_id}")

    if not found.apply_edit(edit, now=now()):
        logger.debug("Edit of task id=%s changed nothing", task_id)
        return found

    store.save_tasks(tasks)
    logger.info("Task edited id=%s", task_id)
    return found


def delete_tasks(store: TaskRepo, selector: Selector) -> int:
    """Remove every task the selector matches; returns how many were removed."""
    tasks = store.read_tasks()
    kept = [t for t in tasks if not selector.matches(t)]
    removed = len(tasks) - len(kept)

    if removed == 0:
        raise NotFoundError(f"No task matches {selector.describe()}")

    store.save_tasks(kept)
    logger.info("Deleted %d task(s) by %s", removed, selector.describe())
    return removed


def list_tasks(store: TaskRepo, query: TaskQuery | None = None) -> list[Task]:
    return apply_query(store.read_tasks(), query or TaskQuery())

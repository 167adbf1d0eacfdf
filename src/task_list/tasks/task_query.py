# src/task_list/tasks/task_query.py

from __future__ import annotations

"""
Query engine: filter predicates plus one sort axis over a task collection.

Everything here works on already-validated values (Priority, bool, str).
Raw command-line tokens are parsed in cli/values.py before they get here.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from ..errors import ValidationError
from .task_models import Priority, Task


class SortOrder(str, Enum):
    PRIORITY_HIGHEST = "highest"
    PRIORITY_LOWEST = "lowest"
    DATE_LATEST = "latest"
    DATE_EARLIEST = "earliest"

    @property
    def is_priority(self) -> bool:
        return self in (SortOrder.PRIORITY_HIGHEST, SortOrder.PRIORITY_LOWEST)


@dataclass(slots=True, frozen=True)
class TaskFilter:
    """Active predicates intersect; None means the predicate is off."""

    complete: bool | None = None
    priority: Priority | None = None
    title: str | None = None

    def matches(self, task: Task) -> bool:
        if self.complete is not None and task.complete != self.complete:
            return False
        if self.priority is not None and task.priority != self.priority:
            return False
        if self.title is not None and task.title != self.title:
            return False
        return True


@dataclass(slots=True, frozen=True)
class TaskQuery:
    filter: TaskFilter = TaskFilter()
    sort: SortOrder | None = None

    def __post_init__(self) -> None:
        if self.filter.priority is not None and self.sort is not None and self.sort.is_priority:
            raise ValidationError("A priority filter cannot be combined with a priority sort")


def sort_tasks(tasks: Iterable[Task], order: SortOrder | None) -> list[Task]:
    """Stable sort on one axis; ties keep their incoming relative order."""
    out = list(tasks)
    if order is None:
        return out

    if order is SortOrder.PRIORITY_HIGHEST:
        out.sort(key=lambda t: t.priority.order, reverse=True)
    elif order is SortOrder.PRIORITY_LOWEST:
        out.sort(key=lambda t: t.priority.order)
    elif order is SortOrder.DATE_LATEST:
        out.sort(key=lambda t: t.created_at, reverse=True)
    elif order is SortOrder.DATE_EARLIEST:
        out.sort(key=lambda t: t.created_at)
    return out


def apply_query(tasks: Iterable[Task], query: TaskQuery) -> list[Task]:
    """Return a new, filtered and ordered list; the input is left untouched."""
    return sort_tasks((t for t in tasks if query.filter.matches(t)), query.sort)


class SelectorKind(str, Enum):
    ID = "id"
    TITLE = "title"
    PRIORITY = "priority"
    COMPLETION = "completion"


@dataclass(slots=True, frozen=True)
class Selector:
    """
    Removal predicate used by delete.

    Exactly one criterion is set; build it through the by_* constructors.
    """

    kind: SelectorKind
    value: str | Priority | bool

    @classmethod
    def by_id(cls, task_id: str) -> Selector:
        return cls(SelectorKind.ID, task_id)

    @classmethod
    def by_title(cls, title: str) -> Selector:
        return cls(SelectorKind.TITLE, title)

    @classmethod
    def by_priority(cls, priority: Priority) -> Selector:
        return cls(SelectorKind.PRIORITY, priority)

    @classmethod
    def by_completion(cls, complete: bool) -> Selector:
        return cls(SelectorKind.COMPLETION, complete)

    def matches(self, task: Task) -> bool:
        if self.kind is SelectorKind.ID:
            return task.id == self.value
        if self.kind is SelectorKind.TITLE:
            return task.title == self.value
        if self.kind is SelectorKind.PRIORITY:
            return task.priority == self.value
        return task.complete is self.value

    def describe(self) -> str:
        if self.kind is SelectorKind.COMPLETION:
            return "completion " + ("complete" if self.value else "incomplete")
        return f"{self.kind.value} {self.value}"

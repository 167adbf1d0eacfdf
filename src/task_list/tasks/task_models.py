# src/task_list/tasks/task_models.py

from __future__ import annotations

import secrets
import string
from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from ..errors import StorageError, ValidationError

ID_LENGTH = 12
ID_ALPHABET = string.ascii_letters + string.digits
PERSISTED_FIELDS = ("id", "title", "description", "priority", "complete", "createdAt", "updatedAt")


class Priority(StrEnum):
    """
    Closed, ranked priority label.

    Each member carries its rank as `order`; only the label is persisted.
    """

    def __new__(cls, value: str, order: int) -> Priority:
        member = str.__new__(cls, value)
        member._value_ = value
        member.order = order
        return member

    LOW = "low", 1
    MEDIUM = "medium", 2
    HIGH = "high", 3

    @classmethod
    def allowed(cls) -> list[str]:
        return [p.value for p in cls]

    @classmethod
    def parse(cls, text: str) -> Priority:
        try:
            return cls(text)
        except ValueError:
            raise ValidationError(
                f"Wrong option {text!r}: a priority is supposed to be one of "
                f"{', '.join(cls.allowed())}"
            ) from None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_task_id(taken: Collection[str] = ()) -> str:
    while True:
        candidate = "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))
        if candidate not in taken:
            return candidate


def format_timestamp(value: datetime) -> str:
    # Fixed width so that lexical order equals time order in the file.
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(raw: Any) -> datetime:
    """
    Decode a persisted timestamp.

    Accepts ISO-8601 strings (naive values are taken as UTC, which covers the
    older "YYYY-MM-DD HH:MM:SS" form) and integer epoch milliseconds.
    """
    if isinstance(raw, bool):
        raise ValueError(f"not a timestamp: {raw!r}")
    if isinstance(raw, int):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"timestamp out of range: {raw!r}") from exc
    if isinstance(raw, str):
        value = datetime.fromisoformat(raw)
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    raise ValueError(f"not a timestamp: {raw!r}")


@dataclass(slots=True, frozen=True)
class TaskEdit:
    """Selective replacement; None leaves the field as it is."""

    title: str | None = None
    description: str | None = None
    priority: Priority | None = None
    complete: bool | None = None

    def is_empty(self) -> bool:
        return (
            self.title is None
            and self.description is None
            and self.priority is None
            and self.complete is None
        )


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str
    priority: Priority
    complete: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(
        cls,
        title: str,
        description: str | None = None,
        priority: Priority | None = None,
        *,
        now: datetime,
        taken_ids: Collection[str] = (),
    ) -> Task:
        return cls(
            id=new_task_id(taken_ids),
            title=title,
            description=description or "",
            priority=priority or Priority.LOW,
            complete=False,
            created_at=now,
            updated_at=now,
        )

    def apply_edit(self, edit: TaskEdit, *, now: datetime) -> bool:
        """
        Replace every supplied field that differs from the current value.

        Returns True if anything changed; updated_at is refreshed once, and
        only in that case.
        """
        changed = False

        if edit.title is not None and edit.title != self.title:
            self.title = edit.title
            changed = True

        if edit.description is not None and edit.description != self.description:
            self.description = edit.description
            changed = True

        if edit.priority is not None and edit.priority != self.priority:
            self.priority = edit.priority
            changed = True

        if edit.complete is not None and edit.complete != self.complete:
            self.complete = edit.complete
            changed = True

        if changed:
            self.updated_at = max(now, self.created_at)
        return changed

    # ---- persisted form ----

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "complete": self.complete,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Task:
        if not isinstance(data, dict):
            raise StorageError(f"Task record must be an object, got {type(data).__name__}")

        missing = [key for key in PERSISTED_FIELDS if key not in data]
        if missing:
            raise StorageError(f"Task record is missing field(s) {', '.join(missing)}")

        task_id = data["id"]
        title = data["title"]
        description = data["description"]
        complete = data["complete"]
        raw_priority = data["priority"]
        try:
            created_at = parse_timestamp(data["createdAt"])
            updated_at = parse_timestamp(data["updatedAt"])
        except ValueError as exc:
            raise StorageError(f"Task record has a bad timestamp: {exc}") from exc

        if not isinstance(task_id, str) or not task_id:
            raise StorageError(f"Task id must be a non-empty string, got {task_id!r}")
        if not isinstance(title, str):
            raise StorageError(f"Task {task_id} has a non-string title")
        if not isinstance(description, str):
            raise StorageError(f"Task {task_id} has a non-string description")
        if not isinstance(complete, bool):
            raise StorageError(f"Task {task_id} has a non-boolean complete flag")

        try:
            priority = Priority.parse(raw_priority) if isinstance(raw_priority, str) else None
        except ValidationError:
            priority = None
        if priority is None:
            raise StorageError(f"Task {task_id} has an unknown priority {raw_priority!r}")

        if updated_at < created_at:
            raise StorageError(f"Task {task_id} was updated before it was created")

        return cls(
            id=task_id,
            title=title,
            description=description,
            priority=priority,
            complete=complete,
            created_at=created_at,
            updated_at=updated_at,
        )

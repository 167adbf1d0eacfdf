# src/task_list/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from .ports import TaskRepo


@dataclass(slots=True)
class AppState:
    """Per-invocation state handed to the command handlers through click's context."""

    settings: Settings
    task_store: TaskRepo

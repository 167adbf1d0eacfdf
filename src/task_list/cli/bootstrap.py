# src/task_list/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- resolves settings once per invocation,
- configures logging from them,
- wires the concrete JSON store into AppState.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from ..config import Settings
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def resolve_settings(*, store_path: Path | None = None) -> Settings:
    settings = Settings.from_env()
    if store_path is not None:
        settings = dataclasses.replace(settings, store_path=store_path)
    return settings


def configure_logging(settings: Settings) -> None:
    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(console_level, int):
        console_level = logging.WARNING

    log_file = settings.log_path if settings.log_to_file else None
    setup_logging(log_file=log_file, console_level=console_level)


def create_initial_state(*, settings: Settings) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable lets tests point the store at a temp file.
    Nothing on disk is touched here; the store opens its file lazily.
    """
    state = AppState(settings=settings, task_store=TaskStore(settings.store_path))
    logger.debug("%s using store %s", settings.app_name, settings.store_path)
    return state

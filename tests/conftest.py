# tests/conftest.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from click.testing import CliRunner

from task_list.tasks.task_models import Priority, Task
from task_list.tasks.task_store import TaskStore

from .fakes import FakeClock, make_task


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI reconfigures the root logger; put pytest's handlers back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


@pytest.fixture()
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tasks.json"


@pytest.fixture()
def store(store_path: Path) -> TaskStore:
    """A fresh store: the file does not exist yet."""
    return TaskStore(store_path)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sample_tasks() -> list[Task]:
    base = datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)
    return [
        make_task("a", title="Buy milk", priority=Priority.LOW, created_at=base),
        make_task("b", title="File taxes", priority=Priority.HIGH, created_at=base + timedelta(hours=1)),
        make_task(
            "c",
            title="Call mom",
            priority=Priority.MEDIUM,
            complete=True,
            created_at=base + timedelta(hours=2),
        ),
        make_task("d", title="Buy milk", priority=Priority.HIGH, complete=True, created_at=base - timedelta(days=1)),
    ]


@pytest.fixture()
def seeded_store(store: TaskStore, sample_tasks: list[Task]) -> TaskStore:
    store.save_tasks(sample_tasks)
    return store


@pytest.fixture()
def cli_env(tmp_path: Path, store_path: Path) -> dict[str, str]:
    """Environment for CliRunner: isolated data dir, no log file."""
    return {
        "TASKLIST_DATA_DIR": str(tmp_path / "data"),
        "TASKLIST_STORE_PATH": str(store_path),
        "TASKLIST_LOG_TO_FILE": "false",
        "TASKLIST_LOG_LEVEL": "WARNING",
    }


@pytest.fixture()
def runner(cli_env: dict[str, str]) -> CliRunner:
    return CliRunner(env=cli_env)

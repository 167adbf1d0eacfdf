# tests/test_cli.py

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from task_list.cli.main import cli
from task_list.tasks.task_models import Priority, Task
from task_list.tasks.task_store import TaskStore

from .fakes import make_task


def _json(result) -> object:
    return json.loads(result.stdout)


def test_add_then_list(runner: CliRunner, store_path: Path) -> None:
    result = runner.invoke(cli, ["add", "Buy milk"])
    assert result.exit_code == 0, result.stderr
    added = _json(result)
    assert added["title"] == "Buy milk"
    assert added["description"] == ""
    assert added["priority"] == "low"
    assert added["complete"] is False
    assert added["createdAt"] == added["updatedAt"]

    listed = runner.invoke(cli, ["list"])
    assert listed.exit_code == 0
    assert [t["id"] for t in _json(listed)] == [added["id"]]
    assert store_path.exists()


def test_add_several_titles_with_options(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["add", "one", "two", "-d", "shared", "-p", "high"])
    assert result.exit_code == 0, result.stderr
    added = _json(result)
    assert [t["title"] for t in added] == ["one", "two"]
    assert {t["priority"] for t in added} == {"high"}
    assert {t["description"] for t in added} == {"shared"}


def test_add_rejects_unknown_priority(runner: CliRunner, store_path: Path) -> None:
    result = runner.invoke(cli, ["add", "x", "--priority", "urgent"])
    assert result.exit_code == 2
    assert result.stdout == ""
    assert "low, medium, high" in result.stderr
    assert not store_path.exists()


def test_store_option_overrides_settings(runner: CliRunner, tmp_path: Path, store_path: Path) -> None:
    other = tmp_path / "elsewhere.json"
    result = runner.invoke(cli, ["--store", str(other), "add", "x"])
    assert result.exit_code == 0, result.stderr
    assert other.exists()
    assert not store_path.exists()


def test_list_fresh_store_prints_empty_array(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["list"])
    assert result.exit_code == 0
    assert _json(result) == []


def test_list_filters_and_sorts(runner: CliRunner, seeded_store: TaskStore) -> None:
    result = runner.invoke(cli, ["list", "--filter-incomplete", "--sort-priority", "highest"])
    assert result.exit_code == 0, result.stderr
    assert [t["id"] for t in _json(result)] == ["b", "a"]

    result = runner.invoke(cli, ["list", "--filter-priority", "high", "--sort-date", "latest"])
    assert result.exit_code == 0, result.stderr
    assert [t["id"] for t in _json(result)] == ["b", "d"]

    result = runner.invoke(cli, ["list", "--filter-complete", "--sort-date", "earliest"])
    assert [t["id"] for t in _json(result)] == ["d", "c"]


@pytest.mark.parametrize(
    "args",
    [
        ["--filter-complete", "--filter-incomplete"],
        ["--sort-priority", "highest", "--sort-date", "latest"],
        ["--sort-priority", "lowest", "--filter-priority", "low"],
    ],
)
def test_list_conflicting_flags_rejected_before_io(
    runner: CliRunner, store_path: Path, monkeypatch: pytest.MonkeyPatch, args: list[str]
) -> None:
    def no_io(self):
        raise AssertionError("store must not be read")

    monkeypatch.setattr(TaskStore, "read_tasks", no_io)

    result = runner.invoke(cli, ["list", *args])
    assert result.exit_code == 2
    assert result.stdout == ""
    assert "mutually exclusive" in result.stderr
    assert not store_path.exists()


@pytest.mark.parametrize(
    "args",
    [
        ["--filter-priority", "urgent"],
        ["--sort-priority", "up"],
        ["--sort-date", "tomorrow"],
    ],
)
def test_list_rejects_unknown_tokens(runner: CliRunner, args: list[str]) -> None:
    result = runner.invoke(cli, ["list", *args])
    assert result.exit_code == 2
    assert result.stdout == ""


def test_edit_updates_and_prints_task(runner: CliRunner, seeded_store: TaskStore) -> None:
    result = runner.invoke(cli, ["edit", "a", "--title", "Buy oat milk", "--complete", "true"])
    assert result.exit_code == 0, result.stderr
    edited = _json(result)
    assert edited["id"] == "a"
    assert edited["title"] == "Buy oat milk"
    assert edited["complete"] is True
    assert edited["updatedAt"] > edited["createdAt"]

    stored = {t.id: t for t in seeded_store.read_tasks()}
    assert stored["a"].title == "Buy oat milk"


def test_edit_noop_keeps_updated_at(runner: CliRunner, seeded_store: TaskStore) -> None:
    before = {t.id: t for t in seeded_store.read_tasks()}["a"]
    result = runner.invoke(cli, ["edit", "a", "--title", before.title, "--priority", "low"])
    assert result.exit_code == 0, result.stderr
    assert _json(result)["updatedAt"] == before.to_dict()["updatedAt"]


def test_edit_invalid_complete_value(runner: CliRunner, seeded_store: TaskStore, store_path: Path) -> None:
    before = store_path.read_text("utf-8")
    result = runner.invoke(cli, ["edit", "a", "--title", "changed", "--complete", "yes"])
    assert result.exit_code == 2
    assert "'true' or 'false'" in result.stderr
    assert store_path.read_text("utf-8") == before


def test_edit_unknown_id_is_not_found(runner: CliRunner, seeded_store: TaskStore) -> None:
    result = runner.invoke(cli, ["edit", "nope", "--title", "x"])
    assert result.exit_code == 3
    assert result.stdout == ""
    assert result.stderr.startswith("Error:")


def test_delete_by_id(runner: CliRunner, store: TaskStore) -> None:
    store.save_tasks([make_task("a")])
    result = runner.invoke(cli, ["delete", "a"])
    assert result.exit_code == 0, result.stderr
    assert _json(result) == {"removed": 1}
    assert store.read_tasks() == []


def test_delete_missing_id(runner: CliRunner, seeded_store: TaskStore, store_path: Path) -> None:
    before = store_path.read_text("utf-8")
    result = runner.invoke(cli, ["delete", "missing-id"])
    assert result.exit_code == 3
    assert result.stdout == ""
    assert store_path.read_text("utf-8") == before


@pytest.mark.parametrize(
    ("args", "remaining"),
    [
        (["Buy milk", "--title"], ["b", "c"]),
        (["high", "--priority"], ["a", "c"]),
        (["complete", "--completion"], ["a", "b"]),
        (["incomplete", "--completion"], ["c", "d"]),
    ],
)
def test_delete_by_selector_flag(
    runner: CliRunner, seeded_store: TaskStore, args: list[str], remaining: list[str]
) -> None:
    result = runner.invoke(cli, ["delete", *args])
    assert result.exit_code == 0, result.stderr
    assert _json(result) == {"removed": 2}
    assert [t.id for t in seeded_store.read_tasks()] == remaining


@pytest.mark.parametrize(
    "args",
    [
        ["high", "--priority", "--title"],
        ["complete", "--completion", "--priority"],
        ["urgent", "--priority"],
        ["done", "--completion"],
    ],
)
def test_delete_rejects_bad_selectors(
    runner: CliRunner, seeded_store: TaskStore, store_path: Path, args: list[str]
) -> None:
    before = store_path.read_text("utf-8")
    result = runner.invoke(cli, ["delete", *args])
    assert result.exit_code == 2
    assert result.stdout == ""
    assert store_path.read_text("utf-8") == before


def test_malformed_store_is_storage_error(runner: CliRunner, store_path: Path) -> None:
    store_path.parent.mkdir(parents=True)
    store_path.write_text("[{broken", "utf-8")
    result = runner.invoke(cli, ["list"])
    assert result.exit_code == 4
    assert result.stdout == ""
    assert "not valid JSON" in result.stderr


def test_json_output_round_trips_through_task(runner: CliRunner, seeded_store: TaskStore, sample_tasks: list[Task]) -> None:
    result = runner.invoke(cli, ["list"])
    decoded = [Task.from_dict(row) for row in _json(result)]
    assert decoded == sample_tasks
    assert decoded[1].priority is Priority.HIGH


def test_edit_with_empty_values_changes_nothing(
    runner: CliRunner, store: TaskStore, store_path: Path
) -> None:
    store.save_tasks([make_task("a", title="keep title", description="keep me")])
    before = store_path.read_text("utf-8")

    result = runner.invoke(
        cli,
        ["edit", "a", "--title", "", "--description", "", "--priority", "", "--complete", ""],
    )
    assert result.exit_code == 0, result.stderr
    edited = _json(result)
    assert edited["title"] == "keep title"
    assert edited["description"] == "keep me"
    assert edited["updatedAt"] == edited["createdAt"]
    assert store_path.read_text("utf-8") == before


def test_edit_whitespace_title_is_rejected(runner: CliRunner, seeded_store: TaskStore) -> None:
    result = runner.invoke(cli, ["edit", "a", "--title", "   "])
    assert result.exit_code == 2
    assert result.stdout == ""


def test_unwritable_log_path_falls_back_to_stderr(
    runner: CliRunner, seeded_store: TaskStore, tmp_path: Path
) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", "utf-8")
    env = {"TASKLIST_LOG_TO_FILE": "true", "TASKLIST_LOG_PATH": str(blocker / "sub" / "x.log")}

    result = runner.invoke(cli, ["list"], env=env)
    assert result.exit_code == 0, result.stderr
    assert [t["id"] for t in _json(result)] == ["a", "b", "c", "d"]
    assert "not writable" in result.stderr

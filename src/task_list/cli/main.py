# src/task_list/cli/main.py

"""
CLI entrypoint.

`task-list add | edit | delete | list`. Results go to stdout as JSON;
failures go to stderr as "Error: ..." with an exit code per error kind
(2 validation, 3 not found, 4 storage).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from .. import __version__
from ..core.state import AppState
from ..errors import TaskListError
from ..tasks.task_api import add_tasks, delete_tasks, edit_task, list_tasks
from ..tasks.task_models import Priority, Task, TaskEdit
from ..tasks.task_query import Selector, SortOrder, TaskFilter, TaskQuery
from . import values
from .bootstrap import configure_logging, create_initial_state, resolve_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _run_and_handle(fn: Callable[[], T]) -> T:
    try:
        return fn()
    except TaskListError as exc:
        logger.debug("Command failed: %s", exc, exc_info=True)
        click.echo(f"Error: {exc}", err=True)
        raise click.exceptions.Exit(exc.exit_code) from exc


def _emit(payload: Any) -> None:
    click.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _emit_tasks(tasks: list[Task]) -> None:
    _emit([t.to_dict() for t in tasks])


@click.group()
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path of the JSON task store (overrides TASKLIST_STORE_PATH).",
)
@click.version_option(__version__, prog_name="task-list")
@click.pass_context
def cli(ctx: click.Context, store_path: Path | None) -> None:
    """Personal task tracker backed by a single JSON file."""
    settings = resolve_settings(store_path=store_path)
    configure_logging(settings)
    ctx.obj = create_initial_state(settings=settings)


@cli.command()
@click.argument("titles", nargs=-1, required=True, type=values.NON_EMPTY)
@click.option("-d", "--description", default=None, help="What is the task about?")
@click.option("-p", "--priority", type=values.PRIORITY, default=None, help="Task priority (default: low).")
@click.pass_obj
def add(state: AppState, titles: tuple[str, ...], description: str | None, priority: Priority | None) -> None:
    """Add one task per TITLE to the task list."""
    created = _run_and_handle(
        lambda: add_tasks(state.task_store, titles, description=description, priority=priority)
    )
    if len(created) == 1:
        _emit(created[0].to_dict())
    else:
        _emit_tasks(created)


@cli.command()
@click.argument("task_id")
@click.option("--title", type=values.EDIT_TITLE, default=None, help="Set the title of the task.")
@click.option("--description", type=values.EDIT_TEXT, default=None, help="Set the description of the task.")
@click.option("--priority", type=values.EDIT_PRIORITY, default=None, help="Set the priority of the task.")
@click.option("--complete", type=values.EDIT_BOOL, default=None, help="Mark the task complete or not.")
@click.pass_obj
def edit(
    state: AppState,
    task_id: str,
    title: str | None,
    description: str | None,
    priority: Priority | None,
    complete: bool | None,
) -> None:
    """Edit the task with id TASK_ID; only supplied fields are replaced."""
    change = TaskEdit(title=title, description=description, priority=priority, complete=complete)
    task = _run_and_handle(lambda: edit_task(state.task_store, task_id, change))
    _emit(task.to_dict())


@cli.command()
@click.argument("value")
@click.option("--title", "by_title", is_flag=True, help="Delete tasks whose title equals VALUE.")
@click.option("--priority", "by_priority", is_flag=True, help="Delete tasks with priority VALUE.")
@click.option(
    "--completion",
    "by_completion",
    is_flag=True,
    help="Delete tasks by state; VALUE is complete or incomplete.",
)
@click.pass_obj
def delete(state: AppState, value: str, by_title: bool, by_priority: bool, by_completion: bool) -> None:
    """Delete tasks; VALUE is an id unless a selector flag says otherwise."""

    def _select() -> Selector:
        values.require_exclusive(title=by_title, priority=by_priority, completion=by_completion)
        if by_title:
            return Selector.by_title(value)
        if by_priority:
            return Selector.by_priority(values.parse_priority(value))
        if by_completion:
            return Selector.by_completion(values.parse_completion(value))
        return Selector.by_id(value)

    selector = _run_and_handle(_select)
    removed = _run_and_handle(lambda: delete_tasks(state.task_store, selector))
    _emit({"removed": removed})


@cli.command(name="list")
@click.option("--filter-priority", type=values.PRIORITY, default=None, help="Only tasks with this priority.")
@click.option("--filter-complete", is_flag=True, help="Only completed tasks.")
@click.option("--filter-incomplete", is_flag=True, help="Only tasks not yet completed.")
@click.option("--sort-priority", type=values.PRIORITY_SORT, default=None, help="Sort by priority.")
@click.option("--sort-date", type=values.DATE_SORT, default=None, help="Sort by creation date.")
@click.pass_obj
def list_command(
    state: AppState,
    filter_priority: Priority | None,
    filter_complete: bool,
    filter_incomplete: bool,
    sort_priority: SortOrder | None,
    sort_date: SortOrder | None,
) -> None:
    """List tasks, optionally filtered and sorted."""

    def _build_query() -> TaskQuery:
        values.require_exclusive(filter_complete=filter_complete, filter_incomplete=filter_incomplete)
        values.require_exclusive(sort_priority=sort_priority, sort_date=sort_date)
        values.require_exclusive(sort_priority=sort_priority, filter_priority=filter_priority)

        complete: bool | None = None
        if filter_complete:
            complete = True
        elif filter_incomplete:
            complete = False

        return TaskQuery(
            filter=TaskFilter(complete=complete, priority=filter_priority),
            sort=sort_priority or sort_date,
        )

    query = _run_and_handle(_build_query)
    tasks = _run_and_handle(lambda: list_tasks(state.task_store, query))
    _emit_tasks(tasks)


def main() -> None:
    cli(prog_name="task-list")


if __name__ == "__main__":
    main()

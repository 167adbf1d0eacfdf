# src/task_list/errors.py

"""
Error taxonomy shared by the store, the query engine and the CLI.

Each kind carries its own exit code so the CLI can map failures without
inspecting messages.
"""

from __future__ import annotations


class TaskListError(Exception):
    """Base class for every failure surfaced to the command line."""

    exit_code = 1


class ValidationError(TaskListError):
    """Bad user input: unknown priority, malformed boolean, conflicting flags."""

    exit_code = 2


class NotFoundError(TaskListError):
    """A selector (id, title, priority, completion) matched no task."""

    exit_code = 3


class StorageError(TaskListError):
    """The store file could not be read, decoded or written."""

    exit_code = 4

# src/task_list/cli/values.py

from __future__ import annotations

"""
Validated command-line values.

Each field kind is parsed exactly once here, so the store, query and task
layers only ever see Priority / bool / SortOrder / non-empty str.
The click ParamTypes below turn a ValidationError into a usage error
(exit code 2) before any store access happens.
"""

from typing import Any

import click

from ..errors import ValidationError
from ..tasks.task_models import Priority
from ..tasks.task_query import SortOrder

BOOL_VALUES = {"true": True, "false": False}
COMPLETION_VALUES = {"complete": True, "incomplete": False}
PRIORITY_SORTS = (SortOrder.PRIORITY_HIGHEST, SortOrder.PRIORITY_LOWEST)
DATE_SORTS = (SortOrder.DATE_LATEST, SortOrder.DATE_EARLIEST)


def parse_priority(text: str) -> Priority:
    return Priority.parse(text)


def parse_bool(text: str) -> bool:
    try:
        return BOOL_VALUES[text]
    except KeyError:
        raise ValidationError("complete flag must be either 'true' or 'false'") from None


def parse_completion(text: str) -> bool:
    try:
        return COMPLETION_VALUES[text]
    except KeyError:
        raise ValidationError(
            f"Completion must be one of: {', '.join(COMPLETION_VALUES)}"
        ) from None


def parse_non_empty(text: str, name: str = "value") -> str:
    if not text or not text.strip():
        raise ValidationError(f"The {name} is empty")
    return text


def _parse_sort(text: str, allowed: tuple[SortOrder, ...], flag: str) -> SortOrder:
    for order in allowed:
        if order.value == text:
            return order
    raise ValidationError(
        f"The only allowed values for {flag} are {', '.join(o.value for o in allowed)}"
    )


def parse_priority_sort(text: str) -> SortOrder:
    return _parse_sort(text, PRIORITY_SORTS, "sort-priority")


def parse_date_sort(text: str) -> SortOrder:
    return _parse_sort(text, DATE_SORTS, "sort-date")


def require_exclusive(**flags: Any) -> None:
    """Reject a call where more than one of the given flags is set."""
    given = [name for name, value in flags.items() if value not in (None, False)]
    if len(given) > 1:
        names = ", ".join("--" + n.replace("_", "-") for n in given)
        raise ValidationError(f"These flags are mutually exclusive: {names}")


class _ValidatedType(click.ParamType):
    """Adapter from a parse_* function to a click parameter type."""

    def __init__(
        self,
        name: str,
        parse,
        choices: list[str] | None = None,
        *,
        empty_is_unset: bool = False,
    ) -> None:
        self.name = name
        self._parse = parse
        self._choices = choices
        # edit flags: an empty value leaves the field alone
        self._empty_is_unset = empty_is_unset

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if not isinstance(value, str):
            return value
        if value == "" and self._empty_is_unset:
            return None
        try:
            return self._parse(value)
        except ValidationError as exc:
            self.fail(str(exc), param, ctx)

    def get_metavar(self, param: click.Parameter, ctx: click.Context | None = None) -> str | None:
        if self._choices:
            return "[" + "|".join(self._choices) + "]"
        return None


PRIORITY = _ValidatedType("priority", parse_priority, Priority.allowed())
PRIORITY_SORT = _ValidatedType("priority_sort", parse_priority_sort, [o.value for o in PRIORITY_SORTS])
DATE_SORT = _ValidatedType("date_sort", parse_date_sort, [o.value for o in DATE_SORTS])
NON_EMPTY = _ValidatedType("text", parse_non_empty)

EDIT_TITLE = _ValidatedType("title", lambda text: parse_non_empty(text, "title"), empty_is_unset=True)
EDIT_TEXT = _ValidatedType("text", str, empty_is_unset=True)
EDIT_PRIORITY = _ValidatedType("priority", parse_priority, Priority.allowed(), empty_is_unset=True)
EDIT_BOOL = _ValidatedType("bool", parse_bool, list(BOOL_VALUES), empty_is_unset=True)

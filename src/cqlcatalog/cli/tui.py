"""Terminal UI utilities for browsing catalogs interactively."""

from __future__ import annotations

import questionary

from cqlcatalog.cli.common.output import out
from cqlcatalog.core.rows import FunctionRow

_MAX_FUNCTION_NAME_WIDTH = 64


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _function_choice_title(row: FunctionRow, *, name_width: int) -> str:
    """Format one function choice as `<name>  (keyspace: <ks>)` with aligned keyspace column."""
    short_name = _truncate(row.function_name, _MAX_FUNCTION_NAME_WIDTH)
    return f"{short_name.ljust(name_width)}  (keyspace: {row.function_schem})"


def select_function(functions: list[FunctionRow]) -> FunctionRow | None:
    """Display a radio prompt to pick one function from a list.

    Overloads share a name, so they appear once per keyspace.

    Args:
        functions: Function rows to choose from.

    Returns:
        The selected row, or None if cancelled.
    """
    unique: dict[tuple[str, str], FunctionRow] = {}
    for row in functions:
        unique.setdefault((row.function_schem, row.function_name), row)

    shown_names = [
        _truncate(row.function_name, _MAX_FUNCTION_NAME_WIDTH)
        for row in unique.values()
    ]
    name_width = max((len(name) for name in shown_names), default=0)

    choices = [
        questionary.Choice(
            title=_function_choice_title(row, name_width=name_width),
            value=row,
        )
        for row in unique.values()
    ]
    return out.select_one("Select a function:", choices)

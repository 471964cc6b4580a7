"""Output formatting utilities for the CLI."""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import questionary
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from cqlcatalog.cli.common.tui_style import QUESTIONARY_STYLE_SELECT
from cqlcatalog.core.results import MetadataResult

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)
err_console = Console(theme=_THEME, stderr=True)

# Columns that identify a row; highlighted in table output.
_KEY_COLUMNS = {
    "TYPE_NAME",
    "TYPE_SCHEM",
    "FUNCTION_SCHEM",
    "FUNCTION_NAME",
    "COLUMN_NAME",
}


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and catalog results."""

    def _q_try(self, fn, *args, **kwargs):
        """Call questionary prompts and drop unsupported kwargs on older versions."""
        try:
            return fn(*args, **kwargs)
        except TypeError:
            for k in ("pointer", "instruction"):
                kwargs.pop(k, None)
            return fn(*args, **kwargs)

    def info(self, msg: str) -> None:
        """Print an info message."""
        err_console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with err_console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        err_console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        err_console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        err_console.print(f"[err]✗[/] {msg}")

    def select_one(self, message: str, choices: list[Any]) -> Any | None:
        """
        Prompt the user to select a single item from a list (radio list).

        Choices may be plain strings or ``questionary.Choice`` objects.

        Returns:
            The selected value, or None if cancelled.
        """
        if not choices:
            return None

        prompt = self._q_try(
            questionary.select,
            message,
            choices=choices,
            style=QUESTIONARY_STYLE_SELECT,
            qmark="✦",
            instruction="Use ↑/↓ then Enter",
            pointer="❯",
        )
        return prompt.ask()

    def result_table(self, result: MetadataResult, title: str) -> None:
        """
        Render a catalog result as a table.

        Null values are shown dimmed as `null` to keep them apart from
        empty strings.
        """
        t = Table(title=title, show_lines=False)
        for column in result.columns:
            t.add_column(column, style="ok" if column in _KEY_COLUMNS else None)

        for record in result.records():
            t.add_row(
                *(
                    "[meta]null[/]" if value is None else escape(value)
                    for value in record.values()
                )
            )

        console.print(t)

    def result_json(self, result: MetadataResult) -> None:
        """Write the result records to stdout as a JSON array."""
        typer.echo(json.dumps(result.records(), indent=2))


out = Out()

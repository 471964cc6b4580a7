"""Commands for browsing the metadata catalogs."""

from __future__ import annotations

from pathlib import Path

import typer

from cqlcatalog.cli.common.context import (
    CatalogAppContext,
    ConnectionSettings,
    build_catalog_context,
)
from cqlcatalog.cli.common.exits import die, exit_from_exc, warn_exit
from cqlcatalog.cli.common.options import FormatOpt, OutputFormat, SchemaOpt
from cqlcatalog.cli.common.output import out
from cqlcatalog.cli.tui import select_function
from cqlcatalog.core.adapters.snapshot import dump_snapshot
from cqlcatalog.core.catalog import list_types
from cqlcatalog.core.errors import CatalogError
from cqlcatalog.core.results import MetadataResult
from cqlcatalog.core.rows import FunctionRow
from cqlcatalog.core.types import SqlType, default_registry

app = typer.Typer(help="Browse keyspace metadata catalogs.")


def _context(ctx: typer.Context) -> CatalogAppContext:
    """Build the catalog context for this invocation and close it on exit."""
    settings: ConnectionSettings = ctx.obj
    with out.status("Loading schema metadata..."):
        appctx = build_catalog_context(settings)
    ctx.call_on_close(appctx.close)
    return appctx


def _parse_categories(values: list[str]) -> list[int] | None:
    """Translate --category values (names or numeric codes) into SQL type codes."""
    if not values:
        return None
    codes: list[int] = []
    for raw in values:
        value = raw.strip()
        if value.lstrip("-").isdigit():
            codes.append(int(value))
            continue
        try:
            codes.append(int(SqlType[value.upper()]))
        except KeyError:
            die(
                f"Unknown type category '{raw}' (expected e.g. JAVA_OBJECT or 2000)",
                code=2,
            )
    return codes


def _emit(
    result: MetadataResult, fmt: OutputFormat, *, title: str, empty: str
) -> None:
    """Render a result in the requested format."""
    if fmt is OutputFormat.JSON:
        out.result_json(result)
        return
    if not result:
        warn_exit(empty, code=0)
    out.result_table(result, title=title)
    out.info(f"Rows: {len(result)}")


@app.command("types")
def types_(fmt: OutputFormat = FormatOpt):
    """List every CQL type supported by the catalog."""
    try:
        result = list_types(default_registry())
    except CatalogError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    _emit(result, fmt, title="Types", empty="No types found.")


@app.command("udts")
def udts(
    ctx: typer.Context,
    schema: str | None = SchemaOpt,
    name: str | None = typer.Option(
        None, "--name", help="Type name (case-insensitive) or keyspace.type"
    ),
    category: list[str] = typer.Option(
        [],
        "--category",
        help="Accepted category (JAVA_OBJECT, STRUCT, DISTINCT or a code). Repeatable.",
        show_default=False,
    ),
    fmt: OutputFormat = FormatOpt,
):
    """List user-defined types."""
    categories = _parse_categories(category)
    appctx = _context(ctx)
    try:
        result = appctx.catalog.list_user_defined_types(schema, name, categories)
    except CatalogError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    _emit(
        result, fmt, title="User-defined types", empty="No user-defined types found."
    )


@app.command("functions")
def functions(
    ctx: typer.Context,
    schema: str | None = SchemaOpt,
    name: str | None = typer.Option(
        None, "--name", help="Function name (case-insensitive), % for all"
    ),
    fmt: OutputFormat = FormatOpt,
):
    """List functions."""
    appctx = _context(ctx)
    try:
        result = appctx.catalog.list_functions(schema, name)
    except CatalogError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    _emit(result, fmt, title="Functions", empty="No functions found.")


@app.command("function-columns")
def function_columns(
    ctx: typer.Context,
    schema: str | None = SchemaOpt,
    function: str | None = typer.Option(
        None, "--function", help="Function name (case-insensitive), % for all"
    ),
    column: str | None = typer.Option(
        None, "--column", help="Parameter name (case-sensitive), % for all"
    ),
    pick: bool = typer.Option(
        False, "--pick", help="Choose the function interactively"
    ),
    fmt: OutputFormat = FormatOpt,
):
    """List function return values and parameters."""
    appctx = _context(ctx)
    try:
        if pick:
            candidates = appctx.catalog.list_functions(schema, function)
            if not candidates:
                warn_exit("No functions found.", code=0)
            chosen: FunctionRow | None = select_function(list(candidates))
            if chosen is None:
                warn_exit("No function selected.", code=0)
            schema, function = chosen.function_schem, chosen.function_name
        result = appctx.catalog.list_function_columns(schema, function, column)
    except CatalogError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    _emit(result, fmt, title="Function columns", empty="No function columns found.")


@app.command("snapshot")
def snapshot(
    ctx: typer.Context,
    output: Path = typer.Argument(..., help="Path of the JSON snapshot to write"),
):
    """Save the current schema to a JSON snapshot file."""
    appctx = _context(ctx)
    try:
        schema = appctx.source.snapshot()
        dump_snapshot(schema, output)
    except CatalogError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    out.success(f"Saved {len(schema.keyspaces)} keyspace(s) to {output}")

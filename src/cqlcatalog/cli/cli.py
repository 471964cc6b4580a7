"""CLI application for keyspace metadata catalogs."""

import logging
from pathlib import Path

import typer
from rich.logging import RichHandler

from cqlcatalog.cli.commands.catalog import app as catalog_app
from cqlcatalog.cli.common.context import ConnectionSettings
from cqlcatalog.cli.common.options import (
    ContactPointsOpt,
    PasswordOpt,
    PortOpt,
    SnapshotOpt,
    UsernameOpt,
    VerboseOpt,
)
from cqlcatalog.cli.common.output import err_console

app = typer.Typer(
    help="cqlcatalog - catalog views over Cassandra keyspace metadata",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # the driver is chatty at debug level
    logging.getLogger("cassandra").setLevel(
        logging.INFO if verbose else logging.WARNING
    )


@app.callback()
def _init(
    ctx: typer.Context,
    contact_points: str | None = ContactPointsOpt,
    port: int | None = PortOpt,
    username: str | None = UsernameOpt,
    password: str | None = PasswordOpt,
    snapshot: Path | None = SnapshotOpt,
    verbose: bool = VerboseOpt,
):
    """Collect connection settings; the schema is loaded by each command."""
    _configure_logging(verbose)
    ctx.obj = ConnectionSettings(
        contact_points=contact_points,
        port=port,
        username=username,
        password=password,
        snapshot=snapshot,
    )


app.add_typer(catalog_app)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()

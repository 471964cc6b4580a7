"""Common CLI options for the CLI."""

from enum import Enum

import typer


class OutputFormat(str, Enum):
    """Supported output formats."""

    TABLE = "table"
    JSON = "json"


ContactPointsOpt = typer.Option(
    None,
    "--contact-points",
    "-c",
    envvar="CQLCATALOG_CONTACT_POINTS",
    help="Comma separated cluster contact points",
)

PortOpt = typer.Option(
    None,
    "--port",
    envvar="CQLCATALOG_PORT",
    help="Native protocol port (default 9042)",
)

UsernameOpt = typer.Option(
    None,
    "--username",
    "-u",
    envvar="CQLCATALOG_USERNAME",
    help="Username for password authentication",
)

PasswordOpt = typer.Option(
    None,
    "--password",
    envvar="CQLCATALOG_PASSWORD",
    help="Password for password authentication",
    show_default=False,
)

SnapshotOpt = typer.Option(
    None,
    "--snapshot",
    "-s",
    envvar="CQLCATALOG_SNAPSHOT",
    help="Read the schema from a JSON snapshot file instead of a live cluster",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Enable debug logging",
)

FormatOpt = typer.Option(
    OutputFormat.TABLE,
    "--format",
    "-f",
    help="Output format: table or json",
)

SchemaOpt = typer.Option(
    None,
    "--schema",
    help="Keyspace name, or % for all keyspaces",
)

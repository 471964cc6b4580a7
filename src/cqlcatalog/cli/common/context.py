"""Application context management for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cassandra.cluster import Cluster

from cqlcatalog.cli.common.exits import exit_from_exc
from cqlcatalog.core.adapters.cassandra import CassandraSchemaAdapter
from cqlcatalog.core.adapters.snapshot import SnapshotFileAdapter
from cqlcatalog.core.catalog import MetadataCatalog
from cqlcatalog.core.connect import get_cluster
from cqlcatalog.core.errors import ConnectError
from cqlcatalog.core.schema import SchemaSource


@dataclass
class ConnectionSettings:
    """Connection settings collected from CLI options and the environment."""

    contact_points: str | None = None
    port: int | None = None
    username: str | None = None
    password: str | None = None
    snapshot: Path | None = None


@dataclass
class CatalogAppContext:
    """Application context holding the schema source and the catalog service."""

    source: SchemaSource
    catalog: MetadataCatalog
    cluster: Cluster | None = None

    def close(self) -> None:
        """Release the cluster connection, if one was opened."""
        if self.cluster is not None:
            self.cluster.shutdown()
            self.cluster = None


def build_catalog_context(settings: ConnectionSettings) -> CatalogAppContext:
    """Build the application context from a snapshot file or a live cluster.

    Args:
        settings: Connection settings; a snapshot path wins over the cluster.

    Returns:
        CatalogAppContext: Context with a schema source and catalog service.
    """
    if settings.snapshot is not None:
        source = SnapshotFileAdapter(settings.snapshot)
        return CatalogAppContext(source=source, catalog=MetadataCatalog(source))

    try:
        cluster = get_cluster(
            settings.contact_points,
            settings.port,
            settings.username,
            settings.password,
        )
    except ConnectError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    source = CassandraSchemaAdapter(cluster)
    return CatalogAppContext(
        source=source, catalog=MetadataCatalog(source), cluster=cluster
    )

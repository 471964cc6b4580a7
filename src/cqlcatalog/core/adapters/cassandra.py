from __future__ import annotations

import logging

from cassandra.cluster import Cluster

from cqlcatalog.core.schema import (
    FunctionMetadata,
    FunctionSignature,
    Keyspace,
    SchemaSnapshot,
    UserType,
)

logger = logging.getLogger(__name__)


class CassandraSchemaAdapter:
    """Adapter around the cassandra-driver cluster metadata (keyspaces/types/functions)."""

    def __init__(self, cluster: Cluster) -> None:
        self.cluster = cluster

    def _user_types(self, ks_name: str, ks_meta) -> dict[str, UserType]:
        out: dict[str, UserType] = {}
        for name, t in (getattr(ks_meta, "user_types", None) or {}).items():
            type_name = getattr(t, "name", None) or name
            out[type_name] = UserType(
                keyspace=ks_name,
                name=type_name,
                field_names=tuple(getattr(t, "field_names", None) or ()),
                field_types=tuple(
                    str(ft) for ft in getattr(t, "field_types", None) or ()
                ),
            )
        return out

    def _functions(
        self, ks_name: str, ks_meta
    ) -> dict[FunctionSignature, FunctionMetadata]:
        out: dict[FunctionSignature, FunctionMetadata] = {}
        for f in (getattr(ks_meta, "functions", None) or {}).values():
            name = getattr(f, "name", None)
            if not name:
                continue
            # Function exposes argument_types / argument_names as parallel lists
            signature = FunctionSignature(
                keyspace=ks_name,
                name=name,
                parameter_types=tuple(
                    str(t) for t in getattr(f, "argument_types", None) or ()
                ),
            )
            out[signature] = FunctionMetadata(
                return_type=str(getattr(f, "return_type", "")),
                parameter_names=tuple(getattr(f, "argument_names", None) or ()),
                language=getattr(f, "language", None),
                called_on_null_input=bool(getattr(f, "called_on_null_input", False)),
            )
        return out

    def snapshot(self) -> SchemaSnapshot:
        """Copy the driver's current schema metadata into an immutable snapshot."""
        metadata = self.cluster.metadata
        keyspaces: dict[str, Keyspace] = {}
        for ks_name, ks_meta in list(metadata.keyspaces.items()):
            keyspaces[ks_name] = Keyspace(
                name=ks_name,
                user_types=self._user_types(ks_name, ks_meta),
                functions=self._functions(ks_name, ks_meta),
            )
        logger.debug(
            "Snapshot of cluster %r: %d keyspace(s)",
            getattr(metadata, "cluster_name", None),
            len(keyspaces),
        )
        return SchemaSnapshot(
            catalog=getattr(metadata, "cluster_name", None),
            keyspaces=keyspaces,
        )

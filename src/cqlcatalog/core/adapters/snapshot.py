"""Schema snapshots persisted as JSON documents.

A snapshot file lets the catalogs be browsed without a live cluster (for
example on a laptop, or in tests). The document layout is::

    {
      "catalog": "Test Cluster",
      "keyspaces": {
        "shop": {
          "user_types": {"address": {"field_names": [...], "field_types": [...]}},
          "functions": [
            {"name": "f", "argument_names": ["a"], "argument_types": ["int"],
             "return_type": "boolean", "language": "java",
             "called_on_null_input": false}
          ]
        }
      }
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from cqlcatalog.core.errors import SnapshotError
from cqlcatalog.core.schema import (
    FunctionMetadata,
    FunctionSignature,
    Keyspace,
    SchemaSnapshot,
    UserType,
)

logger = logging.getLogger(__name__)


def _parse_keyspace(name: str, payload: Any) -> Keyspace:
    """Build a Keyspace from its JSON representation."""
    if not isinstance(payload, dict):
        raise SnapshotError(f"Keyspace '{name}' must be a JSON object.")

    raw_types = payload.get("user_types") or {}
    if not isinstance(raw_types, dict):
        raise SnapshotError(f"User types of keyspace '{name}' must be a JSON object.")

    user_types: dict[str, UserType] = {}
    for type_name, item in raw_types.items():
        try:
            item = item or {}
            user_types[type_name] = UserType(
                keyspace=name,
                name=type_name,
                field_names=tuple(item.get("field_names") or ()),
                field_types=tuple(item.get("field_types") or ()),
            )
        except (TypeError, AttributeError) as exc:
            raise SnapshotError(
                f"Invalid user type entry '{type_name}' in keyspace '{name}': {item!r}"
            ) from exc

    functions: dict[FunctionSignature, FunctionMetadata] = {}
    for item in payload.get("functions") or []:
        try:
            signature = FunctionSignature(
                keyspace=name,
                name=str(item["name"]),
                parameter_types=tuple(item.get("argument_types") or ()),
            )
            functions[signature] = FunctionMetadata(
                return_type=str(item["return_type"]),
                parameter_names=tuple(item.get("argument_names") or ()),
                language=item.get("language"),
                called_on_null_input=bool(item.get("called_on_null_input", False)),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise SnapshotError(
                f"Invalid function entry in keyspace '{name}': {item!r}"
            ) from exc

    return Keyspace(name=name, user_types=user_types, functions=functions)


def load_snapshot(path: Path) -> SchemaSnapshot:
    """
    Read a schema snapshot from a JSON file.

    Raises:
        SnapshotError: If the file cannot be read or is not a valid snapshot.
    """
    try:
        payload = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Cannot read schema snapshot '{path}': {exc}") from exc

    if not isinstance(payload, dict) or not isinstance(
        payload.get("keyspaces", {}), dict
    ):
        raise SnapshotError(f"Schema snapshot '{path}' has an unexpected layout.")

    keyspaces = {
        name: _parse_keyspace(name, item)
        for name, item in payload.get("keyspaces", {}).items()
    }
    logger.debug("Loaded snapshot %s: %d keyspace(s)", path, len(keyspaces))
    return SchemaSnapshot(catalog=payload.get("catalog"), keyspaces=keyspaces)


def snapshot_to_dict(snapshot: SchemaSnapshot) -> dict[str, Any]:
    """Return the JSON representation of a snapshot."""
    keyspaces: dict[str, Any] = {}
    for name, ks in snapshot.keyspaces.items():
        keyspaces[name] = {
            "user_types": {
                t.name: {
                    "field_names": list(t.field_names),
                    "field_types": list(t.field_types),
                }
                for t in ks.user_types.values()
            },
            "functions": [
                {
                    "name": sig.name,
                    "argument_names": list(meta.parameter_names),
                    "argument_types": list(sig.parameter_types),
                    "return_type": meta.return_type,
                    "language": meta.language,
                    "called_on_null_input": meta.called_on_null_input,
                }
                for sig, meta in ks.functions.items()
            ],
        }
    return {"catalog": snapshot.catalog, "keyspaces": keyspaces}


def dump_snapshot(snapshot: SchemaSnapshot, path: Path) -> None:
    """Persist a snapshot to disk as JSON."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(snapshot_to_dict(snapshot), indent=2))
    except OSError as exc:
        raise SnapshotError(f"Cannot write schema snapshot '{path}': {exc}") from exc


class SnapshotFileAdapter:
    """Schema source backed by a JSON snapshot file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def snapshot(self) -> SchemaSnapshot:
        """Read the file; every call sees the file's current content."""
        return load_snapshot(self.path)

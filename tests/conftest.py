from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from cqlcatalog.core.schema import (  # noqa: E402
    FunctionMetadata,
    FunctionSignature,
    Keyspace,
    SchemaSnapshot,
    StaticSchemaSource,
    UserType,
)


def make_function(
    keyspace: str,
    name: str,
    params: list[tuple[str, str]],
    return_type: str,
) -> tuple[FunctionSignature, FunctionMetadata]:
    """Build a (signature, metadata) pair from (name, type) parameter pairs."""
    signature = FunctionSignature(
        keyspace=keyspace,
        name=name,
        parameter_types=tuple(t for _, t in params),
    )
    metadata = FunctionMetadata(
        return_type=return_type,
        parameter_names=tuple(n for n, _ in params),
        language="java",
    )
    return signature, metadata


@pytest.fixture
def shop_schema() -> SchemaSnapshot:
    """Two keyspaces, deliberately discovered in non-alphabetical order."""
    shop = Keyspace(
        name="shop",
        user_types={
            "address": UserType(
                keyspace="shop",
                name="address",
                field_names=("street", "zip"),
                field_types=("text", "int"),
            )
        },
        functions=dict(
            [make_function("shop", "f", [("a", "int"), ("b", "text")], "boolean")]
        ),
    )
    billing = Keyspace(
        name="billing",
        user_types={"invoice_line": UserType(keyspace="billing", name="invoice_line")},
        functions=dict(
            [make_function("billing", "total", [("amount", "decimal")], "decimal")]
        ),
    )
    return SchemaSnapshot(
        catalog="Test Cluster", keyspaces={"shop": shop, "billing": billing}
    )


@pytest.fixture
def shop_source(shop_schema: SchemaSnapshot) -> StaticSchemaSource:
    return StaticSchemaSource(shop_schema)

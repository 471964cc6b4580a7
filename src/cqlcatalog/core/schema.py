"""Core domain models for the schema of a cluster.

These models represent keyspaces, user-defined types and functions in a
simple, immutable form. They are intentionally free of driver types and
UI/CLI concerns so that the catalog engine can run against any source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Protocol


@dataclass(frozen=True)
class UserType:
    """A user-defined type declared in a keyspace."""

    keyspace: str
    name: str
    field_names: tuple[str, ...] = ()
    field_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class FunctionSignature:
    """
    Identity of a function within a keyspace.

    Attributes:
        keyspace: Keyspace the function is declared in.
        name: Name used to invoke the function.
        parameter_types: CQL types of the parameters, in call order.
    """

    keyspace: str
    name: str
    parameter_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class FunctionMetadata:
    """
    Descriptive part of a function.

    Attributes:
        return_type: CQL type returned by the function.
        parameter_names: Parameter names, bound by position to the
            signature's parameter types.
        language: Implementation language, when known.
        called_on_null_input: Whether the function runs on null input.
    """

    return_type: str
    parameter_names: tuple[str, ...] = ()
    language: str | None = None
    called_on_null_input: bool = False


@dataclass(frozen=True)
class Keyspace:
    """A keyspace with its user-defined types and functions."""

    name: str
    user_types: Mapping[str, UserType] = field(default_factory=dict)
    functions: Mapping[FunctionSignature, FunctionMetadata] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "user_types", MappingProxyType(dict(self.user_types)))
        object.__setattr__(self, "functions", MappingProxyType(dict(self.functions)))


@dataclass(frozen=True)
class SchemaSnapshot:
    """
    Point-in-time view of a cluster schema.

    Attributes:
        catalog: Catalog identifier (the cluster name), if available.
        keyspaces: Keyspaces by name, in discovery order.
    """

    catalog: str | None
    keyspaces: Mapping[str, Keyspace] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keyspaces", MappingProxyType(dict(self.keyspaces)))


class SchemaSource(Protocol):
    """Interface for schema lookups used by the catalog engine."""

    def snapshot(self) -> SchemaSnapshot:
        """Return a consistent snapshot of the current schema."""
        ...


@dataclass(frozen=True)
class StaticSchemaSource:
    """Schema source that always returns the same snapshot."""

    schema: SchemaSnapshot

    def snapshot(self) -> SchemaSnapshot:
        return self.schema

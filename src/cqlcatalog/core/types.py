"""CQL type universe and its mapping onto SQL type codes.

This module defines the fixed set of CQL types the catalog reports
(DECLARED_TYPES), the descriptor attached to each of them and the registry
used to look descriptors up by canonical name. It also knows how to reduce
a CQL type expression found in a schema (``frozen<list<int>>``,
``'org.example.MyType'``, ``shop.address``) to a registry key.
"""

from __future__ import annotations

import decimal
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping

from cqlcatalog.core.errors import ConsistencyError

logger = logging.getLogger(__name__)

MAX_LENGTH = 2147483647
DEFAULT_SCALE = 0


class SqlType(int, Enum):
    """
    SQL type codes, as used by standard catalog-introspection APIs.

    Only the codes this catalog can report are listed.
    """

    BIT = -7
    TINYINT = -6
    BIGINT = -5
    BINARY = -2
    NUMERIC = 2
    DECIMAL = 3
    INTEGER = 4
    SMALLINT = 5
    FLOAT = 6
    DOUBLE = 8
    VARCHAR = 12
    BOOLEAN = 16
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    OTHER = 1111
    JAVA_OBJECT = 2000
    DISTINCT = 2001
    STRUCT = 2002
    ARRAY = 2003


def _decimal_precision(value: Any) -> int | None:
    if value is None:
        return None
    digits = decimal.Decimal(value).as_tuple().digits
    return len(digits)


def _decimal_scale(value: Any) -> int | None:
    if value is None:
        return None
    exponent = decimal.Decimal(value).as_tuple().exponent
    return max(-int(exponent), 0)


def _varint_precision(value: Any) -> int | None:
    if value is None:
        return None
    return len(str(abs(int(value))))


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Describes how a CQL type is presented to catalog consumers.

    Attributes:
        name: Canonical (lowercase) CQL type name.
        sql_type: SQL type code reported for the type.
        precision: Precision reported when no value is available.
        scale: Scale reported when no value is available.
        signed: Whether numeric values of the type are signed.
        case_sensitive: Whether textual comparisons are case-sensitive.
        needs_quotes: Whether literals must be quoted in CQL.
        currency: Whether the type is a money type.
        precision_fn: Optional value-dependent precision calculation.
        scale_fn: Optional value-dependent scale calculation.
    """

    name: str
    sql_type: SqlType
    precision: int = 0
    scale: int = DEFAULT_SCALE
    signed: bool = False
    case_sensitive: bool = False
    needs_quotes: bool = False
    currency: bool = False
    precision_fn: Callable[[Any], int | None] | None = None
    scale_fn: Callable[[Any], int | None] | None = None

    def precision_of(self, value: Any = None) -> int:
        """Return the precision for a value, or the type default."""
        if self.precision_fn is not None:
            measured = self.precision_fn(value)
            if measured is not None:
                return measured
        return self.precision

    def scale_of(self, value: Any = None) -> int:
        """Return the scale for a value, or the type default."""
        if self.scale_fn is not None:
            measured = self.scale_fn(value)
            if measured is not None:
                return measured
        return self.scale


class TypeRegistry:
    """Exact-key lookup of type descriptors by canonical CQL type name."""

    def __init__(self, descriptors: Iterable[TypeDescriptor]):
        self._by_name: dict[str, TypeDescriptor] = {}
        for d in descriptors:
            self._by_name[d.name.lower()] = d

    def __contains__(self, type_name: object) -> bool:
        return isinstance(type_name, str) and type_name.lower() in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def lookup(self, type_name: str) -> TypeDescriptor:
        """
        Return the descriptor registered for a type name.

        Raises:
            ConsistencyError: If the type is unknown to the registry.
        """
        try:
            return self._by_name[type_name.lower()]
        except KeyError:
            raise ConsistencyError(
                f"No type descriptor registered for CQL type '{type_name}'."
            ) from None

    def names(self) -> list[str]:
        """Return registered type names, in registration order."""
        return list(self._by_name)


# Every type the types catalog reports, in declaration order.
DECLARED_TYPES: tuple[str, ...] = (
    "ascii",
    "bigint",
    "blob",
    "boolean",
    "counter",
    "custom",
    "date",
    "decimal",
    "double",
    "duration",
    "float",
    "inet",
    "int",
    "list",
    "map",
    "set",
    "smallint",
    "text",
    "time",
    "timestamp",
    "timeuuid",
    "tinyint",
    "tuple",
    "udt",
    "uuid",
    "varchar",
    "varint",
    "vector",
)

_DEFAULT_DESCRIPTORS: tuple[TypeDescriptor, ...] = (
    TypeDescriptor(
        "ascii",
        SqlType.VARCHAR,
        precision=MAX_LENGTH,
        case_sensitive=True,
        needs_quotes=True,
    ),
    TypeDescriptor("bigint", SqlType.BIGINT, precision=19, signed=True),
    TypeDescriptor("blob", SqlType.BINARY, precision=MAX_LENGTH),
    TypeDescriptor("boolean", SqlType.BOOLEAN, precision=1),
    TypeDescriptor("counter", SqlType.BIGINT, precision=19, signed=True),
    TypeDescriptor("custom", SqlType.OTHER, precision=MAX_LENGTH, needs_quotes=True),
    TypeDescriptor("date", SqlType.DATE, precision=10, needs_quotes=True),
    TypeDescriptor(
        "decimal",
        SqlType.DECIMAL,
        signed=True,
        precision_fn=_decimal_precision,
        scale_fn=_decimal_scale,
    ),
    TypeDescriptor("double", SqlType.DOUBLE, precision=300, scale=40, signed=True),
    TypeDescriptor("duration", SqlType.OTHER, precision=MAX_LENGTH),
    TypeDescriptor("float", SqlType.FLOAT, precision=7, scale=40, signed=True),
    TypeDescriptor("inet", SqlType.OTHER, precision=39, needs_quotes=True),
    TypeDescriptor("int", SqlType.INTEGER, precision=10, signed=True),
    TypeDescriptor("list", SqlType.ARRAY, precision=MAX_LENGTH),
    TypeDescriptor("map", SqlType.OTHER, precision=MAX_LENGTH),
    TypeDescriptor("set", SqlType.OTHER, precision=MAX_LENGTH),
    TypeDescriptor("smallint", SqlType.SMALLINT, precision=5, signed=True),
    TypeDescriptor(
        "text",
        SqlType.VARCHAR,
        precision=MAX_LENGTH,
        case_sensitive=True,
        needs_quotes=True,
    ),
    TypeDescriptor("time", SqlType.TIME, precision=18, needs_quotes=True),
    TypeDescriptor("timestamp", SqlType.TIMESTAMP, precision=31, needs_quotes=True),
    TypeDescriptor("timeuuid", SqlType.OTHER, precision=36),
    TypeDescriptor("tinyint", SqlType.TINYINT, precision=3, signed=True),
    TypeDescriptor("tuple", SqlType.OTHER, precision=MAX_LENGTH),
    TypeDescriptor("udt", SqlType.JAVA_OBJECT, precision=MAX_LENGTH),
    TypeDescriptor("uuid", SqlType.OTHER, precision=36),
    TypeDescriptor(
        "varchar",
        SqlType.VARCHAR,
        precision=MAX_LENGTH,
        case_sensitive=True,
        needs_quotes=True,
    ),
    TypeDescriptor(
        "varint", SqlType.NUMERIC, signed=True, precision_fn=_varint_precision
    ),
    TypeDescriptor("vector", SqlType.ARRAY, precision=MAX_LENGTH),
)


def default_registry() -> TypeRegistry:
    """Return a registry covering every declared CQL type."""
    return TypeRegistry(_DEFAULT_DESCRIPTORS)


@dataclass(frozen=True)
class ResolvedType:
    """A CQL type expression resolved against the registry."""

    type_name: str
    descriptor: TypeDescriptor


def _unwrap_frozen(cql_type: str) -> str:
    t = cql_type.strip()
    while t.lower().startswith("frozen<") and t.endswith(">"):
        t = t[len("frozen<") : -1].strip()
    return t


def _unquote(identifier: str) -> str:
    if len(identifier) >= 2 and identifier[0] == identifier[-1] == '"':
        return identifier[1:-1].replace('""', '"')
    return identifier


def resolve_cql_type(
    cql_type: str,
    registry: TypeRegistry,
    *,
    keyspace: str,
    user_types: Mapping[str, Any] | None = None,
) -> ResolvedType:
    """
    Resolve a CQL type expression to its registry descriptor.

    - ``frozen<...>`` wrappers are removed.
    - Parameterized types resolve by their base name (``list<int>`` -> list).
    - Quoted class names resolve to the ``custom`` descriptor.
    - Qualified names, and names of user types of ``keyspace``, resolve to the
      ``udt`` descriptor; the reported type name is then ``keyspace.name``.
    - Double-quoted (case-sensitive) identifiers are unquoted first.

    Raises:
        ConsistencyError: If the type cannot be found in the registry.
    """
    t = _unwrap_frozen(cql_type)

    if t.startswith("'"):
        return ResolvedType(type_name=t, descriptor=registry.lookup("custom"))

    base = t.split("<", 1)[0].strip()
    if base in registry:
        return ResolvedType(type_name=t, descriptor=registry.lookup(base))

    name = _unquote(base)
    if user_types is not None and name in user_types:
        logger.debug("Resolved '%s' as user type of keyspace '%s'", name, keyspace)
        return ResolvedType(
            type_name=f"{keyspace}.{name}", descriptor=registry.lookup("udt")
        )
    if "." in base:
        qualified = ".".join(_unquote(piece) for piece in base.split(".", 1))
        return ResolvedType(type_name=qualified, descriptor=registry.lookup("udt"))

    # Raises ConsistencyError for anything the registry does not know.
    return ResolvedType(type_name=t, descriptor=registry.lookup(base))

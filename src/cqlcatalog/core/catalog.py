"""Metadata catalog builders.

This module turns a schema snapshot into the four standard catalog views:
supported types, user-defined types, functions and function columns. It is
intentionally free of CLI concerns and of any driver types; schema access
goes through a SchemaSource and type information through a TypeRegistry,
both passed in explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from cqlcatalog.core.errors import ConsistencyError
from cqlcatalog.core.results import MetadataResult, assemble
from cqlcatalog.core.rows import (
    FUNCTION_COLUMN_IN,
    FUNCTION_NO_TABLE,
    FUNCTION_RETURN,
    TYPE_NULLABLE,
    TYPE_PRED_BASIC,
    YES,
    CatalogKind,
    FunctionColumnRow,
    FunctionRow,
    TypeRow,
    UdtRow,
)
from cqlcatalog.core.schema import (
    FunctionMetadata,
    FunctionSignature,
    Keyspace,
    SchemaSnapshot,
    SchemaSource,
)
from cqlcatalog.core.selectors import (
    NameSelector,
    SchemaPatternSelector,
    object_name_selector,
    parameter_name_selector,
    resolve_qualified_pattern,
    udt_name_selector,
)
from cqlcatalog.core.types import (
    DECLARED_TYPES,
    DEFAULT_SCALE,
    MAX_LENGTH,
    SqlType,
    TypeRegistry,
    default_registry,
    resolve_cql_type,
)

logger = logging.getLogger(__name__)

UDT_CLASS_NAME = "cassandra.cqltypes.UserType"
UDT_CATEGORY = SqlType.JAVA_OBJECT
LITERAL_QUOTE = "'"


def list_types(
    registry: TypeRegistry, declared: Iterable[str] = DECLARED_TYPES
) -> MetadataResult:
    """
    Build the catalog of all supported scalar types.

    Args:
        registry: Type registry used to describe each declared type.
        declared: Type names to report; defaults to the full CQL universe.

    Returns:
        One row per declared type, ordered by SQL type code.

    Raises:
        ConsistencyError: If a declared type has no registry descriptor.
    """
    rows: list[TypeRow] = []
    for type_name in declared:
        d = registry.lookup(type_name)
        quote = LITERAL_QUOTE if d.needs_quotes else None
        rows.append(
            TypeRow(
                type_name=type_name,
                data_type=int(d.sql_type),
                precision=d.precision_of(),
                literal_prefix=quote,
                literal_suffix=quote,
                create_params=None,
                nullable=TYPE_NULLABLE,
                case_sensitive=d.case_sensitive,
                searchable=TYPE_PRED_BASIC,
                unsigned_attribute=not d.signed,
                fixed_prec_scale=not d.currency,
                auto_increment=False,
                local_type_name=None,
                minimum_scale=DEFAULT_SCALE,
                maximum_scale=d.scale_of(),
                sql_data_type=None,
                sql_datetime_sub=None,
                num_prec_radix=d.precision_of(),
            )
        )
    logger.debug("Types catalog: %d row(s)", len(rows))
    return assemble(rows, CatalogKind.TYPES)


def _keyspaces(snapshot: SchemaSnapshot, selector: NameSelector) -> Iterator[Keyspace]:
    """Yield the snapshot's keyspaces accepted by the selector, in order."""
    for name, keyspace in snapshot.keyspaces.items():
        if selector.matches(name):
            yield keyspace


def _functions(
    snapshot: SchemaSnapshot,
    schema_pattern: str | None,
    function_name_pattern: str | None,
) -> Iterator[tuple[Keyspace, FunctionSignature, FunctionMetadata]]:
    """Yield (keyspace, signature, metadata) for every matching function."""
    schema, name = resolve_qualified_pattern(schema_pattern, function_name_pattern)
    schema_sel = SchemaPatternSelector(schema)
    name_sel = object_name_selector(name)
    logger.debug("Function filters: schema=%r name=%r", schema_sel, name_sel)

    for keyspace in _keyspaces(snapshot, schema_sel):
        for signature, metadata in keyspace.functions.items():
            if name_sel.matches(signature.name):
                yield keyspace, signature, metadata


def list_user_defined_types(
    source: SchemaSource,
    schema_pattern: str | None = None,
    type_name_pattern: str | None = None,
    types: Iterable[int] | None = None,
) -> MetadataResult:
    """
    Build the catalog of user-defined types.

    All user-defined types are reported under the JAVA_OBJECT category.

    Args:
        source: Schema source to snapshot.
        schema_pattern: Keyspace name, ``%`` or None for all keyspaces; an
            empty string selects nothing.
        type_name_pattern: Type name (case-insensitive, exact) or a
            ``keyspace.type`` qualified name, whose keyspace then overrides
            ``schema_pattern``. None selects all types.
        types: Acceptable SQL type codes, or None for all. Sets without
            JAVA_OBJECT always produce an empty result.

    Returns:
        Matching types ordered by keyspace then type name.
    """
    schema, name = resolve_qualified_pattern(schema_pattern, type_name_pattern)
    if types is not None and UDT_CATEGORY not in {int(t) for t in types}:
        logger.debug("UDT catalog: category filter excludes JAVA_OBJECT")
        return assemble([], CatalogKind.UDTS)

    snapshot = source.snapshot()
    schema_sel = SchemaPatternSelector(schema)
    name_sel = udt_name_selector(name)

    rows: list[UdtRow] = []
    for keyspace in _keyspaces(snapshot, schema_sel):
        for udt in keyspace.user_types.values():
            if not name_sel.matches(udt.name):
                continue
            rows.append(
                UdtRow(
                    type_cat=snapshot.catalog,
                    type_schem=keyspace.name,
                    type_name=udt.name,
                    class_name=UDT_CLASS_NAME,
                    data_type=int(UDT_CATEGORY),
                    remarks="",
                    base_type=None,
                )
            )
    logger.debug(
        "UDT catalog: schema=%r name=%r -> %d row(s)", schema_sel, name_sel, len(rows)
    )
    return assemble(rows, CatalogKind.UDTS)


def list_functions(
    source: SchemaSource,
    schema_pattern: str | None = None,
    function_name_pattern: str | None = None,
) -> MetadataResult:
    """
    Build the catalog of functions.

    Overloaded functions are not distinguished: each signature produces its
    own row and the specific name is always the plain function name.

    Args:
        source: Schema source to snapshot.
        schema_pattern: Keyspace name, ``%`` or None for all keyspaces.
        function_name_pattern: Function name (case-insensitive), ``%`` or
            None for all functions; may be qualified as ``keyspace.name``.

    Returns:
        Matching functions ordered by keyspace then function name.
    """
    snapshot = source.snapshot()
    rows = [
        FunctionRow(
            function_cat=snapshot.catalog,
            function_schem=keyspace.name,
            function_name=signature.name,
            remarks="",
            function_type=FUNCTION_NO_TABLE,
            specific_name=signature.name,
        )
        for keyspace, signature, _ in _functions(
            snapshot, schema_pattern, function_name_pattern
        )
    ]
    logger.debug("Functions catalog: %d row(s)", len(rows))
    return assemble(rows, CatalogKind.FUNCTIONS)


def _function_column_row(
    catalog: str | None,
    keyspace: Keyspace,
    signature: FunctionSignature,
    registry: TypeRegistry,
    *,
    column_name: str,
    column_type: int,
    cql_type: str,
    ordinal: int,
) -> FunctionColumnRow:
    resolved = resolve_cql_type(
        cql_type, registry, keyspace=keyspace.name, user_types=keyspace.user_types
    )
    d = resolved.descriptor
    return FunctionColumnRow(
        function_cat=catalog,
        function_schem=keyspace.name,
        function_name=signature.name,
        column_name=column_name,
        column_type=column_type,
        data_type=int(d.sql_type),
        type_name=resolved.type_name,
        precision=d.precision_of(),
        length=MAX_LENGTH,
        scale=d.scale_of(),
        radix=d.precision_of(),
        nullable=TYPE_NULLABLE,
        remarks="",
        char_octet_length=None,
        ordinal_position=ordinal,
        is_nullable=YES,
        specific_name=signature.name,
    )


def list_function_columns(
    source: SchemaSource,
    registry: TypeRegistry,
    schema_pattern: str | None = None,
    function_name_pattern: str | None = None,
    column_name_pattern: str | None = None,
) -> MetadataResult:
    """
    Build the catalog of function return values and parameters.

    For every matching function the return value comes first (ordinal 0,
    empty column name), followed by the parameters matching
    ``column_name_pattern`` in call order (ordinals starting at 1).

    Args:
        source: Schema source to snapshot.
        registry: Type registry used to describe return and parameter types.
        schema_pattern: Keyspace name, ``%`` or None for all keyspaces.
        function_name_pattern: Function name (case-insensitive), ``%`` or
            None for all functions; may be qualified as ``keyspace.name``.
        column_name_pattern: Parameter name (case-sensitive), ``%`` or None
            for all parameters.

    Raises:
        ConsistencyError: If a function's parameter names and types differ
            in length, or a type is unknown to the registry.
    """
    snapshot = source.snapshot()
    column_sel = parameter_name_selector(column_name_pattern)

    rows: list[FunctionColumnRow] = []
    for keyspace, signature, metadata in _functions(
        snapshot, schema_pattern, function_name_pattern
    ):
        names = metadata.parameter_names
        param_types = signature.parameter_types
        if len(names) != len(param_types):
            raise ConsistencyError(
                f"Function '{keyspace.name}.{signature.name}' declares "
                f"{len(names)} parameter name(s) but {len(param_types)} type(s)."
            )

        rows.append(
            _function_column_row(
                snapshot.catalog,
                keyspace,
                signature,
                registry,
                column_name="",
                column_type=FUNCTION_RETURN,
                cql_type=metadata.return_type,
                ordinal=0,
            )
        )
        for position, (param_name, param_type) in enumerate(
            zip(names, param_types), start=1
        ):
            if not column_sel.matches(param_name):
                continue
            rows.append(
                _function_column_row(
                    snapshot.catalog,
                    keyspace,
                    signature,
                    registry,
                    column_name=param_name,
                    column_type=FUNCTION_COLUMN_IN,
                    cql_type=param_type,
                    ordinal=position,
                )
            )
    logger.debug("Function columns catalog: %d row(s)", len(rows))
    return assemble(rows, CatalogKind.FUNCTION_COLUMNS)


@dataclass(frozen=True)
class MetadataCatalog:
    """Binds a schema source and a type registry to the catalog builders."""

    source: SchemaSource
    registry: TypeRegistry = field(default_factory=default_registry)

    def list_types(self) -> MetadataResult:
        return list_types(self.registry)

    def list_user_defined_types(
        self,
        schema_pattern: str | None = None,
        type_name_pattern: str | None = None,
        types: Iterable[int] | None = None,
    ) -> MetadataResult:
        return list_user_defined_types(
            self.source, schema_pattern, type_name_pattern, types
        )

    def list_functions(
        self,
        schema_pattern: str | None = None,
        function_name_pattern: str | None = None,
    ) -> MetadataResult:
        return list_functions(self.source, schema_pattern, function_name_pattern)

    def list_function_columns(
        self,
        schema_pattern: str | None = None,
        function_name_pattern: str | None = None,
        column_name_pattern: str | None = None,
    ) -> MetadataResult:
        return list_function_columns(
            self.source,
            self.registry,
            schema_pattern,
            function_name_pattern,
            column_name_pattern,
        )

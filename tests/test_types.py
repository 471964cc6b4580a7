from decimal import Decimal

import pytest

from cqlcatalog.core.errors import ConsistencyError
from cqlcatalog.core.types import (
    DECLARED_TYPES,
    SqlType,
    TypeDescriptor,
    TypeRegistry,
    default_registry,
    resolve_cql_type,
)


def test_default_registry_covers_declared_types():
    registry = default_registry()

    for name in DECLARED_TYPES:
        assert name in registry


def test_lookup_is_case_insensitive_and_exact():
    registry = default_registry()

    assert registry.lookup("INT").sql_type is SqlType.INTEGER
    with pytest.raises(ConsistencyError, match="integer"):
        registry.lookup("integer")


def test_decimal_precision_and_scale_depend_on_value():
    d = default_registry().lookup("decimal")

    assert d.precision_of(Decimal("123.45")) == 5
    assert d.scale_of(Decimal("123.45")) == 2
    assert d.precision_of() == 0
    assert d.scale_of() == 0


def test_varint_precision_depends_on_value():
    d = default_registry().lookup("varint")

    assert d.precision_of(-12345) == 5
    assert d.precision_of() == 0


def test_resolve_unwraps_frozen_and_parameterized_types():
    registry = default_registry()

    resolved = resolve_cql_type("frozen<list<int>>", registry, keyspace="shop")

    assert resolved.descriptor.name == "list"
    assert resolved.type_name == "list<int>"


def test_resolve_quoted_class_name_as_custom():
    resolved = resolve_cql_type(
        "'org.apache.cassandra.db.marshal.DynamicCompositeType'",
        default_registry(),
        keyspace="shop",
    )

    assert resolved.descriptor.sql_type is SqlType.OTHER
    assert resolved.descriptor.name == "custom"


def test_resolve_user_type_reports_qualified_name():
    registry = default_registry()

    local = resolve_cql_type(
        "frozen<address>", registry, keyspace="shop", user_types={"address": object()}
    )
    qualified = resolve_cql_type("billing.invoice_line", registry, keyspace="shop")

    assert local.type_name == "shop.address"
    assert local.descriptor.sql_type is SqlType.JAVA_OBJECT
    assert qualified.type_name == "billing.invoice_line"
    assert qualified.descriptor.sql_type is SqlType.JAVA_OBJECT


def test_resolve_unknown_type_is_a_consistency_error():
    with pytest.raises(ConsistencyError):
        resolve_cql_type("address", default_registry(), keyspace="shop", user_types={})


def test_custom_registry_only_knows_its_descriptors():
    registry = TypeRegistry([TypeDescriptor("int", SqlType.INTEGER, precision=10)])

    assert len(registry) == 1
    assert registry.names() == ["int"]
    with pytest.raises(ConsistencyError):
        registry.lookup("text")


def test_resolve_quoted_user_type_identifiers():
    registry = default_registry()

    local = resolve_cql_type(
        'frozen<"Address">', registry, keyspace="shop", user_types={"Address": object()}
    )
    qualified = resolve_cql_type('"Billing"."Line"', registry, keyspace="shop")

    assert local.type_name == "shop.Address"
    assert local.descriptor.sql_type is SqlType.JAVA_OBJECT
    assert qualified.type_name == "Billing.Line"
    assert qualified.descriptor.sql_type is SqlType.JAVA_OBJECT

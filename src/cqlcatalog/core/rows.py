"""Typed rows for the four metadata catalogs.

Each catalog kind has a fixed record type whose fields are declared in
column order. The column names and their order are the wire contract seen
by consumers of the catalogs; the generic name -> value view is only built
at the serialization boundary through ``as_record()``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import ClassVar

# Standard catalog-API constants.
TYPE_NULLABLE = 1
TYPE_PRED_BASIC = 2
FUNCTION_NO_TABLE = 1
FUNCTION_COLUMN_IN = 1
FUNCTION_RETURN = 4
YES = "YES"


class CatalogKind(str, Enum):
    """
    The catalogs this engine can build.

    Values:
        TYPES: Supported scalar types.
        UDTS: User-defined types.
        FUNCTIONS: Functions.
        FUNCTION_COLUMNS: Function return values and parameters.
    """

    TYPES = "types"
    UDTS = "udts"
    FUNCTIONS = "functions"
    FUNCTION_COLUMNS = "function_columns"


def _render(value: object) -> str | None:
    """Render a field value the way the catalog wire format expects it."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class MetadataRow:
    """Base class of all catalog rows."""

    KIND: ClassVar[CatalogKind]
    COLUMNS: ClassVar[tuple[str, ...]]

    def as_record(self) -> dict[str, str | None]:
        """Return the row as an ordered column -> nullable string mapping."""
        return {
            column: _render(getattr(self, f.name))
            for column, f in zip(self.COLUMNS, fields(self))
        }


@dataclass(frozen=True)
class TypeRow(MetadataRow):
    """One supported scalar type."""

    KIND: ClassVar[CatalogKind] = CatalogKind.TYPES
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "TYPE_NAME",
        "DATA_TYPE",
        "PRECISION",
        "LITERAL_PREFIX",
        "LITERAL_SUFFIX",
        "CREATE_PARAMS",
        "NULLABLE",
        "CASE_SENSITIVE",
        "SEARCHABLE",
        "UNSIGNED_ATTRIBUTE",
        "FIXED_PREC_SCALE",
        "AUTO_INCREMENT",
        "LOCAL_TYPE_NAME",
        "MINIMUM_SCALE",
        "MAXIMUM_SCALE",
        "SQL_DATA_TYPE",
        "SQL_DATETIME_SUB",
        "NUM_PREC_RADIX",
    )

    type_name: str
    data_type: int
    precision: int
    literal_prefix: str | None
    literal_suffix: str | None
    create_params: str | None
    nullable: int
    case_sensitive: bool
    searchable: int
    unsigned_attribute: bool
    fixed_prec_scale: bool
    auto_increment: bool
    local_type_name: str | None
    minimum_scale: int
    maximum_scale: int
    sql_data_type: int | None
    sql_datetime_sub: int | None
    num_prec_radix: int


@dataclass(frozen=True)
class UdtRow(MetadataRow):
    """One user-defined type."""

    KIND: ClassVar[CatalogKind] = CatalogKind.UDTS
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "TYPE_CAT",
        "TYPE_SCHEM",
        "TYPE_NAME",
        "CLASS_NAME",
        "DATA_TYPE",
        "REMARKS",
        "BASE_TYPE",
    )

    type_cat: str | None
    type_schem: str
    type_name: str
    class_name: str
    data_type: int
    remarks: str
    base_type: int | None


@dataclass(frozen=True)
class FunctionRow(MetadataRow):
    """One function signature."""

    KIND: ClassVar[CatalogKind] = CatalogKind.FUNCTIONS
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "FUNCTION_CAT",
        "FUNCTION_SCHEM",
        "FUNCTION_NAME",
        "REMARKS",
        "FUNCTION_TYPE",
        "SPECIFIC_NAME",
    )

    function_cat: str | None
    function_schem: str
    function_name: str
    remarks: str
    function_type: int
    specific_name: str


@dataclass(frozen=True)
class FunctionColumnRow(MetadataRow):
    """The return value or one parameter of a function."""

    KIND: ClassVar[CatalogKind] = CatalogKind.FUNCTION_COLUMNS
    COLUMNS: ClassVar[tuple[str, ...]] = (
        "FUNCTION_CAT",
        "FUNCTION_SCHEM",
        "FUNCTION_NAME",
        "COLUMN_NAME",
        "COLUMN_TYPE",
        "DATA_TYPE",
        "TYPE_NAME",
        "PRECISION",
        "LENGTH",
        "SCALE",
        "RADIX",
        "NULLABLE",
        "REMARKS",
        "CHAR_OCTET_LENGTH",
        "ORDINAL_POSITION",
        "IS_NULLABLE",
        "SPECIFIC_NAME",
    )

    function_cat: str | None
    function_schem: str
    function_name: str
    column_name: str
    column_type: int
    data_type: int
    type_name: str
    precision: int
    length: int
    scale: int
    radix: int
    nullable: int
    remarks: str
    char_octet_length: int | None
    ordinal_position: int
    is_nullable: str
    specific_name: str


ROW_TYPES: dict[CatalogKind, type[MetadataRow]] = {
    CatalogKind.TYPES: TypeRow,
    CatalogKind.UDTS: UdtRow,
    CatalogKind.FUNCTIONS: FunctionRow,
    CatalogKind.FUNCTION_COLUMNS: FunctionColumnRow,
}

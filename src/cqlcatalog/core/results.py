"""Sorting and packaging of catalog rows into immutable results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator

from cqlcatalog.core.errors import ResultConstructionError
from cqlcatalog.core.rows import (
    ROW_TYPES,
    CatalogKind,
    FunctionColumnRow,
    FunctionRow,
    MetadataRow,
    TypeRow,
    UdtRow,
)


def _type_key(row: TypeRow) -> tuple[int]:
    return (row.data_type,)


def _udt_key(row: UdtRow) -> tuple[str, str]:
    return (row.type_schem, row.type_name)


def _function_key(row: FunctionRow) -> tuple[str, str]:
    return (row.function_schem, row.function_name)


def _function_column_key(row: FunctionColumnRow) -> tuple[str, str, str, int]:
    return (
        row.function_schem,
        row.function_name,
        row.specific_name,
        row.ordinal_position,
    )


SORT_KEYS: dict[CatalogKind, Callable[[Any], tuple]] = {
    CatalogKind.TYPES: _type_key,
    CatalogKind.UDTS: _udt_key,
    CatalogKind.FUNCTIONS: _function_key,
    CatalogKind.FUNCTION_COLUMNS: _function_column_key,
}


@dataclass(frozen=True)
class MetadataResult:
    """
    Immutable, ordered result of one catalog call.

    Attributes:
        kind: Catalog the rows belong to.
        rows: Rows in their final order.
    """

    kind: CatalogKind
    rows: tuple[MetadataRow, ...]

    @property
    def columns(self) -> tuple[str, ...]:
        """Column names shared by every row, in contract order."""
        return ROW_TYPES[self.kind].COLUMNS

    def __iter__(self) -> Iterator[MetadataRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> MetadataRow:
        return self.rows[index]

    def records(self) -> list[dict[str, str | None]]:
        """Return all rows as column -> nullable string mappings."""
        return [row.as_record() for row in self.rows]


def assemble(rows: Iterable[MetadataRow], kind: CatalogKind) -> MetadataResult:
    """
    Sort rows with the catalog's key and wrap them into a MetadataResult.

    The sort is stable, so rows with equal keys keep their discovery order.

    Raises:
        ResultConstructionError: If a row does not belong to the catalog.
    """
    expected = ROW_TYPES[kind]
    materialized = list(rows)
    for row in materialized:
        if type(row) is not expected:
            raise ResultConstructionError(
                f"Cannot build a {kind.value} result from a {type(row).__name__}."
            )
    ordered = sorted(materialized, key=SORT_KEYS[kind])
    return MetadataResult(kind=kind, rows=tuple(ordered))

"""Name selector abstractions and implementations.

This module defines the selectors used by the catalog builders to decide
whether a keyspace, type, function or parameter name satisfies a caller
supplied pattern. Patterns follow catalog-API conventions:

- ``None`` means the filter is not used and everything matches.
- The single wildcard ``%`` matches everything. There is no partial
  (``LIKE``) matching: ``sh%`` is a literal.
- Any other value is compared exactly. Keyspace and parameter names are
  compared case-sensitively, type and function names case-insensitively.

Selectors are pure, side-effect-free objects and are intended to be
reusable across the different catalog builders and tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

WILDCARD = "%"
QUALIFIER_SEPARATOR = "."


class NameSelector(ABC):
    """
    Abstract base class for all name selectors.

    A NameSelector encapsulates a single piece of matching logic that
    determines whether a schema object name satisfies a pattern.
    """

    @abstractmethod
    def matches(self, name: str) -> bool:
        """
        Determine whether the given name matches this selector.

        Args:
            name: Name of the schema object to evaluate.

        Returns:
            True if the name matches the selector criteria, False otherwise.
        """
        ...


class AnyNameSelector(NameSelector):
    """Selector that matches every name (absent filter or wildcard)."""

    def matches(self, name: str) -> bool:
        return True

    def __repr__(self) -> str:
        return "AnyNameSelector()"


class ExactNameSelector(NameSelector):
    """
    Selector that matches one exact name.
    """

    def __init__(self, value: str, *, case_sensitive: bool):
        """
        Create an exact-name selector.

        Args:
            value: Name to match.
            case_sensitive: If False, names are compared case-insensitively.
        """
        self.value = value
        self.case_sensitive = case_sensitive

    def matches(self, name: str) -> bool:
        if self.case_sensitive:
            return name == self.value
        return name.casefold() == self.value.casefold()

    def __repr__(self) -> str:
        return (
            f"ExactNameSelector({self.value!r}, case_sensitive={self.case_sensitive})"
        )


class SchemaPatternSelector(NameSelector):
    """
    Selector for keyspace (schema) names.

    The wildcard is resolved against each candidate keyspace, i.e. it is
    replaced by the keyspace's own name before the comparison, which makes
    it equivalent to an unrestricted filter. An empty pattern selects the
    objects without a keyspace, of which there are none.
    """

    def __init__(self, pattern: str | None):
        self.pattern = pattern

    def matches(self, name: str) -> bool:
        if self.pattern is None:
            return True
        effective = name if self.pattern == WILDCARD else self.pattern
        return effective == name

    def __repr__(self) -> str:
        return f"SchemaPatternSelector({self.pattern!r})"


def object_name_selector(pattern: str | None) -> NameSelector:
    """Build a case-insensitive selector for type or function names."""
    if pattern is None or pattern == WILDCARD:
        return AnyNameSelector()
    return ExactNameSelector(pattern, case_sensitive=False)


def udt_name_selector(pattern: str | None) -> NameSelector:
    """
    Build a selector for user-defined type names.

    UDT names are matched exactly and case-insensitively; the wildcard has
    no special meaning here.
    """
    if pattern is None:
        return AnyNameSelector()
    return ExactNameSelector(pattern, case_sensitive=False)


def parameter_name_selector(pattern: str | None) -> NameSelector:
    """Build a case-sensitive selector for function parameter names."""
    if pattern is None or pattern == WILDCARD:
        return AnyNameSelector()
    return ExactNameSelector(pattern, case_sensitive=True)


def split_qualified_name(pattern: str) -> tuple[str | None, str]:
    """
    Split ``schema.name`` into (schema, name).

    Only the first two dot-separated pieces are used, so
    ``shop.address.extra`` splits like ``shop.address``. An empty schema
    piece is reported as None and a missing name piece as an empty string.
    Patterns without a dot are returned as (None, pattern).
    """
    if QUALIFIER_SEPARATOR not in pattern:
        return None, pattern
    parts = pattern.split(QUALIFIER_SEPARATOR)
    schema = parts[0] or None
    name = parts[1] if len(parts) > 1 else ""
    return schema, name


def resolve_qualified_pattern(
    schema_pattern: str | None, name_pattern: str | None
) -> tuple[str | None, str | None]:
    """
    Return the effective (schema, name) patterns for a possibly qualified name.

    A schema found in the name pattern overrides the separately supplied
    schema pattern.
    """
    if name_pattern is None:
        return schema_pattern, None
    schema, name = split_qualified_name(name_pattern)
    if schema is not None:
        return schema, name
    return schema_pattern, name

"""Error types raised by the metadata catalog engine and its collaborators.

All of them derive from CatalogError so frontends can catch a single type.
None of these are retried: they describe an inconsistent schema snapshot,
a registry gap or a broken input file, not a transient condition.
"""


class CatalogError(RuntimeError):
    """Base class for all catalog failures."""


class ConsistencyError(CatalogError):
    """Raised when a schema snapshot and the type registry disagree.

    Typical causes are a declared type with no registry descriptor, or a
    function whose parameter names and parameter types differ in length.
    """


class ResultConstructionError(CatalogError):
    """Raised when a row sequence cannot be packaged into a result."""


class ConnectError(CatalogError):
    """Raised when connecting to the cluster fails."""


class SnapshotError(CatalogError):
    """Raised when a schema snapshot file cannot be read or written."""

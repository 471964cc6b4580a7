"""Connection helpers for Cassandra clusters.

This module centralizes creation of a cassandra-driver Cluster and applies
small normalization rules to the configured contact points so the same
values work from the environment, the CLI and tests.
"""

import logging
import os

from cassandra import AuthenticationFailed
from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import Cluster, NoHostAvailable

from cqlcatalog.core.errors import ConnectError

logger = logging.getLogger(__name__)

CONTACT_POINTS_ENV = "CQLCATALOG_CONTACT_POINTS"
PORT_ENV = "CQLCATALOG_PORT"
USERNAME_ENV = "CQLCATALOG_USERNAME"
PASSWORD_ENV = "CQLCATALOG_PASSWORD"
DEFAULT_CONTACT_POINT = "127.0.0.1"
DEFAULT_PORT = 9042


def parse_contact_points(raw: str | None) -> list[str]:
    """
    Normalize a comma separated list of contact points.

    - Splits on commas and strips whitespace
    - Drops empty entries
    - Falls back to the local node when nothing is left
    """
    if not raw:
        return [DEFAULT_CONTACT_POINT]
    points = [p.strip() for p in raw.split(",")]
    return [p for p in points if p] or [DEFAULT_CONTACT_POINT]


def _port_from_env() -> int:
    """Return the native protocol port, honoring env override."""
    raw = os.getenv(PORT_ENV)
    if raw is None:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        return DEFAULT_PORT


def get_cluster(
    contact_points: str | None = None,
    port: int | None = None,
    username: str | None = None,
    password: str | None = None,
) -> Cluster:
    """
    Create a Cluster, connect it once and return it.

    Connecting populates the driver's schema metadata, which is what the
    catalog adapters read. Unset arguments are taken from the environment.
    The caller owns the returned cluster and should call ``shutdown()``.

    Raises:
        ConnectError: If no host is reachable or authentication fails.
    """
    points = parse_contact_points(contact_points or os.getenv(CONTACT_POINTS_ENV))
    port = port or _port_from_env()
    username = username or os.getenv(USERNAME_ENV)
    password = password or os.getenv(PASSWORD_ENV)

    auth = PlainTextAuthProvider(username, password) if username else None
    cluster = Cluster(points, port=port, auth_provider=auth)
    logger.debug("Connecting to %s:%d", ",".join(points), port)
    try:
        cluster.connect()
    except AuthenticationFailed as exc:
        cluster.shutdown()
        raise ConnectError(f"Authentication failed: {exc}") from exc
    except NoHostAvailable as exc:
        cluster.shutdown()
        raise ConnectError(
            f"Could not reach any of {', '.join(points)} on port {port}."
        ) from exc
    return cluster

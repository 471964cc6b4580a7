import pytest
from cassandra import AuthenticationFailed
from cassandra.cluster import NoHostAvailable

from cqlcatalog.core import connect
from cqlcatalog.core.errors import ConnectError


class _ClusterStub:
    instances: list["_ClusterStub"] = []
    fail_with: Exception | None = None

    def __init__(self, contact_points, port, auth_provider):
        self.contact_points = contact_points
        self.port = port
        self.auth_provider = auth_provider
        self.shut_down = False
        _ClusterStub.instances.append(self)

    def connect(self):
        if _ClusterStub.fail_with is not None:
            raise _ClusterStub.fail_with

    def shutdown(self):
        self.shut_down = True


@pytest.fixture
def cluster_stub(monkeypatch):
    _ClusterStub.instances = []
    _ClusterStub.fail_with = None
    monkeypatch.setattr(connect, "Cluster", _ClusterStub)
    for env in (
        connect.CONTACT_POINTS_ENV,
        connect.PORT_ENV,
        connect.USERNAME_ENV,
        connect.PASSWORD_ENV,
    ):
        monkeypatch.delenv(env, raising=False)
    return _ClusterStub


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, ["127.0.0.1"]),
        ("", ["127.0.0.1"]),
        (" a , b ,", ["a", "b"]),
        (",", ["127.0.0.1"]),
    ],
)
def test_parse_contact_points(raw, expected):
    assert connect.parse_contact_points(raw) == expected


def test_get_cluster_uses_environment(cluster_stub, monkeypatch):
    monkeypatch.setenv(connect.CONTACT_POINTS_ENV, "node1,node2")
    monkeypatch.setenv(connect.PORT_ENV, "19042")

    cluster = connect.get_cluster()

    assert cluster.contact_points == ["node1", "node2"]
    assert cluster.port == 19042
    assert cluster.auth_provider is None


def test_get_cluster_invalid_port_env_falls_back(cluster_stub, monkeypatch):
    monkeypatch.setenv(connect.PORT_ENV, "not-a-port")

    assert connect.get_cluster().port == connect.DEFAULT_PORT


def test_get_cluster_builds_auth_provider(cluster_stub):
    cluster = connect.get_cluster("db", 9042, "cassandra", "secret")

    assert cluster.auth_provider.username == "cassandra"
    assert cluster.auth_provider.password == "secret"


def test_get_cluster_wraps_unreachable_hosts(cluster_stub):
    cluster_stub.fail_with = NoHostAvailable("Unable to connect", {})

    with pytest.raises(ConnectError, match="Could not reach"):
        connect.get_cluster("db")

    assert cluster_stub.instances[0].shut_down is True


def test_get_cluster_wraps_authentication_failures(cluster_stub):
    cluster_stub.fail_with = AuthenticationFailed("bad credentials")

    with pytest.raises(ConnectError, match="Authentication failed"):
        connect.get_cluster("db", username="me", password="wrong")

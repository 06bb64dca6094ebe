"""Tests for connectivity checkers."""

from netconnection._internal import connectivity
from netconnection._internal.connectivity import (
    RouteConnectivityChecker,
    StaticConnectivityChecker,
)


class FakeSocket:
    """Stand-in for socket.socket reporting a fixed local address."""

    def __init__(self, local_address=None, error=None):
        self._local_address = local_address
        self._error = error
        self.connected_to = None

    def __call__(self, family, kind):
        return self

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def connect(self, address):
        if self._error is not None:
            raise self._error
        self.connected_to = address

    def getsockname(self):
        return (self._local_address, 40000)


class TestRouteConnectivityChecker:
    """Tests for RouteConnectivityChecker."""

    def test_routed_address_is_connected(self, monkeypatch):
        """A non-loopback local address should count as connected."""
        fake = FakeSocket("192.168.1.20")
        monkeypatch.setattr(connectivity.socket, "socket", fake)

        assert RouteConnectivityChecker().is_network_connected() is True
        assert fake.connected_to == ("8.8.8.8", 53)

    def test_loopback_is_not_connected(self, monkeypatch):
        """A loopback local address means no external route."""
        monkeypatch.setattr(connectivity.socket, "socket", FakeSocket("127.0.0.1"))

        assert RouteConnectivityChecker().is_network_connected() is False

    def test_os_error_is_not_connected(self, monkeypatch):
        """An unreachable network should report False."""
        fake = FakeSocket(error=OSError(101, "Network is unreachable"))
        monkeypatch.setattr(connectivity.socket, "socket", fake)

        assert RouteConnectivityChecker().is_network_connected() is False

    def test_custom_probe(self, monkeypatch):
        """Should probe the configured host and port."""
        fake = FakeSocket("10.0.0.2")
        monkeypatch.setattr(connectivity.socket, "socket", fake)

        RouteConnectivityChecker("1.1.1.1", 443).is_network_connected()
        assert fake.connected_to == ("1.1.1.1", 443)


class TestStaticConnectivityChecker:
    """Tests for StaticConnectivityChecker."""

    def test_defaults_to_connected(self):
        assert StaticConnectivityChecker().is_network_connected() is True

    def test_state_can_change(self):
        """Should reflect updates to the connected flag."""
        checker = StaticConnectivityChecker(False)
        assert checker.is_network_connected() is False
        checker.connected = True
        assert checker.is_network_connected() is True

"""Network reachability checks used before a request is built."""

import ipaddress
import socket
from typing import Protocol

DEFAULT_PROBE_HOST = "8.8.8.8"
DEFAULT_PROBE_PORT = 53


class ConnectivityChecker(Protocol):
    """Reports whether an active network interface is connected."""

    def is_network_connected(self) -> bool: ...


class RouteConnectivityChecker:
    """Checks for a usable route to a public address.

    Connecting a UDP socket sends no packets; it only asks the OS to pick
    a route and a local address. A non-loopback local address means some
    interface is up and routed.
    """

    def __init__(
        self,
        probe_host: str = DEFAULT_PROBE_HOST,
        probe_port: int = DEFAULT_PROBE_PORT,
    ) -> None:
        self._probe = (probe_host, probe_port)

    def is_network_connected(self) -> bool:
        family = socket.AF_INET6 if ":" in self._probe[0] else socket.AF_INET
        try:
            with socket.socket(family, socket.SOCK_DGRAM) as sock:
                sock.connect(self._probe)
                local_address = sock.getsockname()[0]
        except OSError:
            return False
        return not ipaddress.ip_address(local_address).is_loopback


class StaticConnectivityChecker:
    """Fixed answer, for hosts that track connectivity themselves."""

    def __init__(self, connected: bool = True) -> None:
        self.connected = connected

    def is_network_connected(self) -> bool:
        return self.connected

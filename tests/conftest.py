"""
Shared fixtures: loopback listening sockets and fast-retry client factories.
"""

import socket
import time
from typing import Any, Callable, Iterator, List

import pytest

from tcplink.infrastructure.clients.tcp import ClientConfig, TCPClient


@pytest.fixture
def server() -> Iterator[socket.socket]:
    """Listening loopback socket; connections queue in the backlog until accepted."""
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    srv.bind(("127.0.0.1", 0))
    srv.listen(5)
    srv.settimeout(5.0)
    yield srv
    srv.close()


@pytest.fixture
def server_port(server: socket.socket) -> int:
    return server.getsockname()[1]


@pytest.fixture
def closed_port() -> int:
    """A loopback port nothing listens on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def make_client() -> Iterator[Callable[..., TCPClient]]:
    """Factory for clients with short retry intervals, closed on teardown."""
    clients: List[TCPClient] = []

    def factory(port: int, **overrides: Any) -> TCPClient:
        settings = {
            "host": "127.0.0.1",
            "port": port,
            "retry_interval": 0.01,
            "connect_timeout": 1.0,
            "max_reconnect_attempts": 3,
        }
        settings.update(overrides)
        client = TCPClient(ClientConfig(**settings))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


def _poll_until(client: TCPClient, condition: Callable[[], bool],
                timeout: float = 2.0, max_bytes: Any = None) -> bytes:
    received = bytearray()
    deadline = time.monotonic() + timeout
    while not condition():
        if time.monotonic() > deadline:
            raise AssertionError("Condition not met before timeout")
        received += client.poll(max_bytes)
        time.sleep(0.002)
    return bytes(received)


@pytest.fixture
def poll_until() -> Callable[..., bytes]:
    """Poll a client until a condition holds, returning every byte read."""
    return _poll_until

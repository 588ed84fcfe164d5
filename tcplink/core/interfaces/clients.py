"""
Client interface for the managed TCP connection.

This module defines the contract a connection manager implements and the
status values it moves between.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional
from enum import Enum

from ..domain.results import OperationResult


class ClientStatus(Enum):
    """Client connection status."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ITCPClient(ABC):
    """Interface for a single managed client-to-server stream connection."""

    @abstractmethod
    def connect(self, host: Optional[str] = None, port: Optional[int] = None) -> OperationResult:
        """Establish the connection, retrying up to the configured budget."""
        pass

    @abstractmethod
    def send(self, data: bytes) -> OperationResult:
        """Write bytes to the server without blocking."""
        pass

    @abstractmethod
    def poll(self, max_bytes: Optional[int] = None) -> bytes:
        """Read whatever bytes are available without blocking."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Safe to call repeatedly."""
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if client is connected."""
        pass

    @abstractmethod
    def get_status(self) -> ClientStatus:
        """Get current client status."""
        pass

    @abstractmethod
    def add_callback(self, event: str, callback: Callable[[Any], Any]) -> None:
        """Register a callback for a client event."""
        pass

    @abstractmethod
    def remove_callback(self, event: str, callback: Callable[[Any], Any]) -> None:
        """Unregister a previously registered callback."""
        pass

"""
tcplink - managed TCP client with bounded reconnection and non-blocking polling.

A ``TCPClient`` owns one outbound connection, retries connection
establishment a bounded number of times, and hands incoming bytes and
disconnect notifications to registered callbacks each time the host polls it.
"""

__version__ = "0.1.0"

from .core.domain.events import ClientEvents, DataReceived, RemoteDisconnected, InboundEvent
from .core.domain.results import OperationResult
from .core.exceptions import ErrorCode, TCPLinkError, ConfigError, InvalidOperationError
from .core.interfaces.clients import ClientStatus, ITCPClient
from .infrastructure.clients.tcp import TCPClient, ClientConfig, ReceivePoller
from .application.service import PollingService

__all__ = [
    "ClientEvents",
    "DataReceived",
    "RemoteDisconnected",
    "InboundEvent",
    "OperationResult",
    "ErrorCode",
    "TCPLinkError",
    "ConfigError",
    "InvalidOperationError",
    "ClientStatus",
    "ITCPClient",
    "TCPClient",
    "ClientConfig",
    "ReceivePoller",
    "PollingService",
]

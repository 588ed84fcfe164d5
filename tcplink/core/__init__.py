"""
Core module containing domain models, error taxonomy and interfaces.

Nothing here touches sockets; the infrastructure layer implements these
contracts.
"""

from .interfaces.clients import ClientStatus, ITCPClient
from .interfaces.lifecycle import IStartable, IStoppable, IHealthCheckable
from .domain.events import ClientEvents, DataReceived, RemoteDisconnected, InboundEvent
from .domain.results import OperationResult
from .exceptions import ErrorCode, TCPLinkError, ConfigError, InvalidOperationError

__all__ = [
    "ClientStatus",
    "ITCPClient",
    "IStartable",
    "IStoppable",
    "IHealthCheckable",
    "ClientEvents",
    "DataReceived",
    "RemoteDisconnected",
    "InboundEvent",
    "OperationResult",
    "ErrorCode",
    "TCPLinkError",
    "ConfigError",
    "InvalidOperationError",
]

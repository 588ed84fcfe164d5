"""
Domain models: inbound events and operation results.
"""

from .events import ClientEvents, DataReceived, RemoteDisconnected, InboundEvent
from .results import OperationResult

__all__ = [
    "ClientEvents",
    "DataReceived",
    "RemoteDisconnected",
    "InboundEvent",
    "OperationResult",
]

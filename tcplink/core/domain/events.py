"""
Inbound event models emitted by the TCP client.

Events are immutable and delivered at most once to every registered
callback; nothing is persisted or replayed.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Union


class ClientEvents:
    """Constants for client event names."""

    DATA_RECEIVED = "tcp.data_received"
    SERVER_DISCONNECTED = "tcp.server_disconnected"

    @classmethod
    def all(cls) -> FrozenSet[str]:
        return frozenset({cls.DATA_RECEIVED, cls.SERVER_DISCONNECTED})


@dataclass(frozen=True)
class DataReceived:
    """Bytes read from the remote peer in a single poll."""

    data: bytes
    timestamp: float = field(default_factory=time.time)

    name = ClientEvents.DATA_RECEIVED

    def __post_init__(self) -> None:
        if not self.data:
            raise ValueError("DataReceived requires a non-empty payload")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'size': len(self.data),
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class RemoteDisconnected:
    """The remote peer closed the connection in an orderly way."""

    host: str
    port: int
    timestamp: float = field(default_factory=time.time)

    name = ClientEvents.SERVER_DISCONNECTED

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'host': self.host,
            'port': self.port,
            'timestamp': self.timestamp,
        }


InboundEvent = Union[DataReceived, RemoteDisconnected]

"""
Lifecycle contracts for host adapters that drive a TCP client.

A host adapter owns the scheduling side of a client: it opens the
connection, polls it on a fixed cadence and closes it again on shutdown.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class IStartable(ABC):
    """Adapter that begins driving its client when started."""

    @abstractmethod
    async def start(self) -> None:
        """Begin polling, connecting first if the adapter is configured to.

        A failed initial connect must not prevent polling from starting.
        """


class IStoppable(ABC):
    """Adapter that can release its client."""

    @abstractmethod
    async def stop(self) -> None:
        """Stop polling and close the client connection. Idempotent."""


class IHealthCheckable(ABC):
    """Adapter that reports the state of the connection it drives."""

    @abstractmethod
    async def check_health(self) -> Dict[str, Any]:
        """Report connection health.

        Returns:
            ``healthy`` (connected and running), ``status`` (the client
            status value) and ``details`` (adapter counters), e.g.
            ``{'healthy': True, 'status': 'connected',
            'details': {'running': True, 'polls': 120}}``
        """

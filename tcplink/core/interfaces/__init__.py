"""
Core interfaces defining the contracts for the client and its host adapter.
"""

from .lifecycle import IStartable, IStoppable, IHealthCheckable
from .clients import ITCPClient, ClientStatus

__all__ = [
    "IStartable",
    "IStoppable",
    "IHealthCheckable",
    "ITCPClient",
    "ClientStatus",
]

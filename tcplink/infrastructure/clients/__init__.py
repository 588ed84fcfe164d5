"""
Client implementations.

This module provides the managed TCP client and its receive poller.
"""

from .tcp import TCPClient, ClientConfig, ReceivePoller, ConnectionStats

__all__ = [
    "TCPClient",
    "ClientConfig",
    "ReceivePoller",
    "ConnectionStats",
]

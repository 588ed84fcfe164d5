from .client import TCPClient
from .config import ClientConfig, DEFAULT_MAX_RECONNECT_ATTEMPTS
from .poller import ReceivePoller
from .state import ConnectionStats

__all__ = [
    'TCPClient',
    'ClientConfig',
    'DEFAULT_MAX_RECONNECT_ATTEMPTS',
    'ReceivePoller',
    'ConnectionStats',
]

"""
Error taxonomy and exception hierarchy.

Operational failures of the TCP client (refused connections, failed sends,
receive errors) are reported as ``OperationResult`` values tagged with an
``ErrorCode``. Exceptions are reserved for misuse: invalid configuration or
operations attempted in the wrong state.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """Error codes for client operations."""
    ALREADY_CONNECTED = "already_connected"
    NOT_CONNECTED = "not_connected"
    ADDRESS_RESOLUTION_FAILED = "address_resolution_failed"
    SOCKET_CREATE_FAILED = "socket_create_failed"
    NON_BLOCKING_MODE_FAILED = "non_blocking_mode_failed"
    CONNECT_REFUSED_OR_TIMED_OUT = "connect_refused_or_timed_out"
    SEND_FAILED = "send_failed"
    RECEIVE_TRANSIENT_EMPTY = "receive_transient_empty"
    REMOTE_CLOSED = "remote_closed"
    RECEIVE_ERROR = "receive_error"
    INVALID_CONFIG = "invalid_config"
    INVALID_OPERATION = "invalid_operation"


class TCPLinkError(Exception):
    """Base exception for the package."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigError(TCPLinkError):
    """Invalid configuration value."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(ErrorCode.INVALID_CONFIG, message, details)


class InvalidOperationError(TCPLinkError):
    """Operation not allowed in the current client state."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(ErrorCode.INVALID_OPERATION, message, details)

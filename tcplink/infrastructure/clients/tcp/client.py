import errno
import os
import selectors
import socket
import threading
import time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from loguru import logger

from ....core.domain.events import ClientEvents, DataReceived, InboundEvent, RemoteDisconnected
from ....core.domain.results import OperationResult
from ....core.exceptions import ErrorCode, InvalidOperationError, TCPLinkError
from ....core.interfaces.clients import ClientStatus, ITCPClient
from .config import ClientConfig
from .poller import ReceivePoller
from .state import ConnectionStats

# errno values reported by a non-blocking connect that has not completed yet
_CONNECT_PENDING = frozenset({
    errno.EINPROGRESS,
    errno.EALREADY,
    errno.EWOULDBLOCK,
    errno.EAGAIN,
})

_SockAddr = Tuple[Any, ...]
# (family, proto, sockaddr) of one getaddrinfo entry
_Endpoint = Tuple[int, int, _SockAddr]


class TCPClient(ITCPClient):
    """Managed TCP client owning exactly one outbound connection.

    The client keeps a single non-blocking socket to the remote endpoint,
    retries connection establishment up to a bounded number of attempts and
    optionally reconnects after the server closes the connection. Incoming
    bytes are drained by calling :meth:`poll` from the host's scheduling loop.

    All public operations are serialized by a re-entrant lock so the client
    can also be driven from a worker thread.
    """

    def __init__(self, config: Optional[ClientConfig] = None, name: Optional[str] = None):
        """Initialize the TCP client

        Args:
            config: Client configuration, defaults to ``ClientConfig()``
            name: Client name used in log messages
        """
        self._config = config or ClientConfig()
        self._config.validate()
        self._name = name or self.__class__.__name__

        self._status = ClientStatus.DISCONNECTED
        self._socket: Optional[socket.socket] = None
        self._host = self._config.host
        self._port = self._config.port

        self._stats = ConnectionStats()
        self._last_error: Optional[OperationResult] = None
        self._callbacks: Dict[str, List[Callable[[Any], Any]]] = {
            event: [] for event in ClientEvents.all()
        }
        self._lock = threading.RLock()
        self._poller = ReceivePoller(
            on_data=self._on_data,
            on_closed=self._handle_remote_closure,
            on_error=self._on_receive_error,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._name

    @property
    def host(self) -> str:
        """Host of the current (or last) connection target"""
        return self._host

    @property
    def port(self) -> int:
        """Port of the current (or last) connection target"""
        return self._port

    @property
    def last_error(self) -> Optional[OperationResult]:
        """Most recent failed operation, if any"""
        return self._last_error

    def connect(self, host: Optional[str] = None, port: Optional[int] = None) -> OperationResult:
        """Connect to the server

        Resolves the target and tries to establish the connection up to
        ``max_reconnect_attempts`` times, sleeping ``retry_interval`` seconds
        between attempts. Every attempt walks the resolved addresses in order
        on a fresh non-blocking socket each and fails only when all of them
        do. Blocks the calling thread for the whole retry sequence.

        Args:
            host: Server host, defaults to the configured host
            port: Server port, defaults to the configured port

        Returns:
            Successful result once connected, failed result otherwise

        Raises:
            ConfigError: If host or port is invalid
        """
        with self._lock:
            if self._status == ClientStatus.CONNECTED:
                logger.warning(
                    f"{self._name}: already connected to {self._host}:{self._port}")
                return self._fail(ErrorCode.ALREADY_CONNECTED,
                                  f"Already connected to {self._host}:{self._port}")

            host = self._config.host if host is None else host
            port = self._config.port if port is None else port
            replace(self._config, host=host, port=port).validate()

            # Drop any stale handle from a previous lifecycle
            self._release_socket()
            self._host = host
            self._port = port

            try:
                endpoints = self._resolve(host, port)
            except (OSError, UnicodeError) as e:
                # UnicodeError: host name the idna codec cannot encode
                logger.error(f"{self._name}: failed to resolve {host}:{port}: {e}")
                return self._fail(ErrorCode.ADDRESS_RESOLUTION_FAILED,
                                  f"Failed to resolve {host}:{port}: {e}")

            self._update_status(ClientStatus.CONNECTING)
            total_attempts = self._config.total_attempts
            attempt = 0

            while attempt < total_attempts:
                try:
                    pending, error = self._attempt_endpoints(endpoints)
                except TCPLinkError as e:
                    self._release_socket()
                    return self._fail(e.code, e.message)

                attempt += 1
                self._stats.connect_attempts += 1
                if error is None:
                    self._update_status(ClientStatus.CONNECTED)
                    self._stats.record_connected()
                    self._register_reconnect_hook()
                    logger.info(
                        f"{self._name}: connected to {host}:{port} on attempt {attempt}")
                    return OperationResult.ok(
                        f"Connected to {host}:{port}", attempts=attempt)

                self._stats.errors += 1
                if pending:
                    logger.info(f"{self._name}: connection in progress... ({error})")
                else:
                    logger.error(
                        f"{self._name}: failed to connect to {host}:{port}, error: {error}")
                    if not self._config.auto_reconnect:
                        break

                if attempt >= total_attempts:
                    break

                time.sleep(self._config.retry_interval)

            self._release_socket()
            logger.error(
                f"{self._name}: giving up on {host}:{port} after {attempt} attempt(s)")
            return self._fail(ErrorCode.CONNECT_REFUSED_OR_TIMED_OUT,
                              f"Failed to connect to {host}:{port} after {attempt} attempt(s)",
                              attempts=attempt)

    def send(self, data: bytes) -> OperationResult:
        """Send data to the server if connected

        Performs a single non-blocking write. Partial writes are not retried:
        the result reports how many bytes were accepted so the caller can
        resend the remainder.
        """
        with self._lock:
            sock = self._socket
            if sock is None or self._status != ClientStatus.CONNECTED:
                logger.error(f"{self._name}: not connected to server")
                return self._fail(ErrorCode.NOT_CONNECTED, "Not connected to server")

            payload = bytes(data)
            if not payload:
                return OperationResult.ok("Nothing to send", bytes_sent=0)

            try:
                sent = sock.send(payload)
            except BlockingIOError:
                logger.warning(f"{self._name}: send buffer full, data not sent")
                self._stats.errors += 1
                return self._fail(ErrorCode.SEND_FAILED, "Send would block",
                                  bytes_sent=0)
            except OSError as e:
                logger.error(f"{self._name}: failed to send data: {e}")
                self._stats.errors += 1
                return self._fail(ErrorCode.SEND_FAILED, f"Failed to send data: {e}",
                                  bytes_sent=0)

            self._stats.record_sent(sent)
            if sent < len(payload):
                logger.warning(
                    f"{self._name}: partial send, {sent}/{len(payload)} bytes written")
                return self._fail(ErrorCode.SEND_FAILED,
                                  f"Partial send: {sent}/{len(payload)} bytes",
                                  bytes_sent=sent)

            return OperationResult.ok(bytes_sent=sent)

    def poll(self, max_bytes: Optional[int] = None) -> bytes:
        """Drain available bytes without blocking, see :class:`ReceivePoller`

        Args:
            max_bytes: Read limit, defaults to ``receive_buffer_size``

        Returns:
            Bytes read, or ``b""`` when not connected or nothing was available
        """
        with self._lock:
            sock = self._socket
            if sock is None or self._status != ClientStatus.CONNECTED:
                return b""
            size = self._config.receive_buffer_size if max_bytes is None else max_bytes
            return self._poller.poll(sock, size)

    def is_connected(self) -> bool:
        """Check if client is connected."""
        return self._status == ClientStatus.CONNECTED and self._socket is not None

    def get_status(self) -> ClientStatus:
        """Get current client status."""
        return self._status

    def get_stats(self) -> Dict[str, Any]:
        return self._stats.to_dict()

    def close(self) -> None:
        """Close the connection. No-op when there is nothing to close."""
        with self._lock:
            if self._socket is None:
                return
            self._release_socket()
            logger.info(f"{self._name}: connection closed by client")

    def update_config(self, **changes: Any) -> ClientConfig:
        """Replace configuration values between connection lifecycles

        Raises:
            InvalidOperationError: If a connection is active or being established
            ConfigError: If the resulting configuration is invalid
        """
        with self._lock:
            if self._status != ClientStatus.DISCONNECTED:
                raise InvalidOperationError(
                    f"Cannot change configuration while {self._status.value}")
            config = replace(self._config, **changes)
            config.validate()
            self._config = config
            self._host = config.host
            self._port = config.port
            return config

    def health_check(self) -> Dict[str, Any]:
        """Report connection health."""
        return {
            "healthy": self.is_connected(),
            "status": self._status.value,
            "details": {
                "host": self._host,
                "port": self._port,
                "auto_reconnect": self._config.auto_reconnect,
                "last_error": self._last_error.to_dict() if self._last_error else None,
            },
            "stats": self._stats.to_dict(),
        }

    def add_callback(self, event: str, callback: Callable[[Any], Any]) -> None:
        """Add event callback."""
        if event not in self._callbacks:
            logger.warning(f"Unknown event: {event}")
            return
        with self._lock:
            self._callbacks[event].append(callback)

    def remove_callback(self, event: str, callback: Callable[[Any], Any]) -> None:
        """Remove event callback."""
        with self._lock:
            try:
                self._callbacks[event].remove(callback)
            except (KeyError, ValueError):
                logger.warning(f"Callback not found for event {event}")

    def _emit(self, event: InboundEvent) -> None:
        for callback in list(self._callbacks[event.name]):
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Callback error for event {event.name}: {e}")

    def _handle_remote_closure(self) -> None:
        """Release the handle and announce the disconnect exactly once."""
        if self._socket is None:
            return
        host, port = self._host, self._port
        self._release_socket()
        logger.info(f"{self._name}: connection closed by server {host}:{port}")
        self._emit(RemoteDisconnected(host=host, port=port))

    def _on_data(self, data: bytes) -> None:
        self._stats.record_received(len(data))
        self._emit(DataReceived(data))

    def _on_receive_error(self, error: OSError) -> None:
        logger.error(f"{self._name}: failed to receive data from server, error: {error}")
        self._stats.errors += 1
        self._fail(ErrorCode.RECEIVE_ERROR, f"Failed to receive data: {error}")
        if self._config.close_on_receive_error:
            self._handle_remote_closure()

    def _register_reconnect_hook(self) -> None:
        callbacks = self._callbacks[ClientEvents.SERVER_DISCONNECTED]
        registered = self._reconnect_on_disconnect in callbacks
        if self._config.auto_reconnect and not registered:
            callbacks.append(self._reconnect_on_disconnect)
        elif not self._config.auto_reconnect and registered:
            callbacks.remove(self._reconnect_on_disconnect)

    def _reconnect_on_disconnect(self, event: RemoteDisconnected) -> None:
        if not self._config.auto_reconnect:
            return
        logger.info(f"{self._name}: reconnecting to {event.host}:{event.port}")
        self._stats.reconnects += 1
        result = self.connect(event.host, event.port)
        if not result:
            logger.error(f"{self._name}: reconnect failed: {result.message}")

    def _resolve(self, host: str, port: int) -> List[_Endpoint]:
        infos = socket.getaddrinfo(host, port, socket.AF_UNSPEC, socket.SOCK_STREAM)
        return [(family, proto, address) for family, _, proto, _, address in infos]

    def _new_socket(self, family: int, proto: int) -> socket.socket:
        return socket.socket(family, socket.SOCK_STREAM, proto)

    def _open_socket(self, family: int, proto: int) -> socket.socket:
        """Swap the current handle for a fresh non-blocking socket.

        Raises:
            TCPLinkError: ``SOCKET_CREATE_FAILED`` or ``NON_BLOCKING_MODE_FAILED``
        """
        if self._socket is not None:
            self._close_handle(self._socket)
            self._socket = None

        try:
            sock = self._new_socket(family, proto)
        except OSError as e:
            logger.error(f"{self._name}: failed to create socket: {e}")
            raise TCPLinkError(ErrorCode.SOCKET_CREATE_FAILED,
                               f"Failed to create socket: {e}") from e

        try:
            sock.setblocking(False)
        except OSError as e:
            logger.error(f"{self._name}: could not set socket to non-blocking: {e}")
            self._close_handle(sock)
            raise TCPLinkError(ErrorCode.NON_BLOCKING_MODE_FAILED,
                               f"Could not set socket to non-blocking: {e}") from e

        self._socket = sock
        return sock

    def _attempt_endpoints(self, endpoints: List[_Endpoint]) -> Tuple[bool, Optional[str]]:
        """Run one connect attempt over every resolved address, in order.

        Each address gets a fresh socket, as ``socket.create_connection`` does.
        An address whose socket cannot be set up is skipped.

        Returns:
            ``(pending, error)`` of the last address tried; ``error`` is None
            as soon as one address connects

        Raises:
            TCPLinkError: If no socket could be set up for any address
        """
        setup_error: Optional[TCPLinkError] = None
        tried = False
        pending: bool = False
        error: Optional[str] = "no address to connect to"

        for family, proto, address in endpoints:
            # A failed socket cannot be reused portably, start fresh
            try:
                sock = self._open_socket(family, proto)
            except TCPLinkError as e:
                setup_error = e
                continue

            tried = True
            pending, error = self._attempt_connect(sock, address)
            if error is None:
                return False, None
            logger.debug(f"{self._name}: connect to {address[0]} failed: {error}")

        if not tried and setup_error is not None:
            raise setup_error
        return pending, error

    def _attempt_connect(self, sock: socket.socket,
                         address: _SockAddr) -> Tuple[bool, Optional[str]]:
        """Run one connect on one address.

        Returns:
            ``(pending, error)``; ``error`` is None on success and ``pending``
            tells whether the attempt was still in progress when abandoned
        """
        code = sock.connect_ex(address)
        if code in (0, errno.EISCONN):
            return False, None
        if code not in _CONNECT_PENDING:
            return False, os.strerror(code)

        with selectors.DefaultSelector() as selector:
            selector.register(sock, selectors.EVENT_WRITE)
            ready = selector.select(self._config.connect_timeout)

        if not ready:
            return True, "connect did not complete within " \
                f"{self._config.connect_timeout}s"

        code = sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)
        if code != 0:
            return False, os.strerror(code)
        return False, None

    def _release_socket(self) -> None:
        if self._socket is not None:
            self._close_handle(self._socket)
            self._socket = None
        if self._status == ClientStatus.CONNECTED:
            self._stats.record_disconnected()
        self._update_status(ClientStatus.DISCONNECTED)

    def _close_handle(self, sock: socket.socket) -> None:
        try:
            sock.close()
        except OSError as e:
            logger.debug(f"{self._name}: error closing socket: {e}")

    def _fail(self, error: ErrorCode, message: str, **details: Any) -> OperationResult:
        result = OperationResult.fail(error, message, **details)
        self._last_error = result
        return result

    def _update_status(self, status: ClientStatus) -> None:
        old_status = self._status
        self._status = status

        if old_status != status:
            logger.debug(
                f"Client {self._name} status changed: {old_status.value} -> {status.value}")

    def __enter__(self) -> 'TCPClient':
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

import socket
from typing import Callable


class ReceivePoller:
    """Non-blocking receive side of a :class:`TCPClient`.

    Each :meth:`poll` performs exactly one ``recv`` on the socket it is given
    and maps the outcome onto the handlers supplied by the owner:

    - bytes available: ``on_data`` is called and the bytes returned
    - would block: empty result, nothing reported
    - end of stream: ``on_closed`` is called
    - any other OS error: ``on_error`` is called with the exception

    The poller never owns the socket; the client passes its current handle
    on every call while holding its lock.
    """

    def __init__(self,
                 on_data: Callable[[bytes], None],
                 on_closed: Callable[[], None],
                 on_error: Callable[[OSError], None]):
        self._on_data = on_data
        self._on_closed = on_closed
        self._on_error = on_error

    def poll(self, sock: socket.socket, size: int) -> bytes:
        """Read up to ``size`` bytes from ``sock``

        Returns:
            Bytes read, or ``b""`` when nothing was available, the read
            failed or the connection just closed
        """
        # recv(0) returns b"" which would be indistinguishable from closure
        if size <= 0:
            return b""

        try:
            data = sock.recv(size)
        except BlockingIOError:
            return b""
        except OSError as e:
            self._on_error(e)
            return b""

        if not data:
            self._on_closed()
            return b""

        self._on_data(data)
        return data

"""
Asyncio host adapter driving a TCP client.

The client itself is synchronous and single-threaded. ``PollingService``
plays the role of the hosting scheduler: it polls the client on a fixed
interval from a background task and runs every client call, including the
blocking connect sequence, on one dedicated worker thread so the event loop
is never stalled.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional, TypeVar

from loguru import logger

from ..core.domain.results import OperationResult
from ..core.interfaces.clients import ITCPClient
from ..core.interfaces.lifecycle import IHealthCheckable, IStartable, IStoppable
from ..infrastructure.config.models import ServiceConfig

T = TypeVar('T')


class PollingService(IStartable, IStoppable, IHealthCheckable):
    """Polls a client on a fixed cadence and proxies its operations."""

    def __init__(self, client: ITCPClient, config: Optional[ServiceConfig] = None):
        """
        Initialize the polling service.

        Args:
            client: Client to drive
            config: Service configuration
        """
        self._client = client
        self._config = config or ServiceConfig()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._poll_task: Optional[asyncio.Task[None]] = None
        self._running = False
        self._polls = 0

    @property
    def client(self) -> ITCPClient:
        return self._client

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start polling, connecting first when configured to."""
        if self._running:
            return

        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="tcplink")
        self._running = True

        if self._config.connect_on_start:
            result = await self.connect()
            if not result:
                logger.warning(f"Initial connect failed: {result.message}")

        self._poll_task = asyncio.create_task(self._poll_worker())
        logger.info("Polling service started")

    async def stop(self) -> None:
        """Stop polling and close the connection."""
        if not self._running:
            return

        self._running = False

        if self._poll_task and not self._poll_task.done():
            self._poll_task.cancel()
            try:
                await self._poll_task
            except asyncio.CancelledError:
                pass
        self._poll_task = None

        await self._run(self._client.close)

        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

        logger.info("Polling service stopped")

    async def connect(self, host: Optional[str] = None, port: Optional[int] = None) -> OperationResult:
        """Connect off the event loop."""
        return await self._run(self._client.connect, host, port)

    async def send(self, data: bytes) -> OperationResult:
        return await self._run(self._client.send, data)

    async def close(self) -> None:
        await self._run(self._client.close)

    async def check_health(self) -> Dict[str, Any]:
        """Check service and connection health."""
        status = self._client.get_status()
        return {
            'healthy': self._running and self._client.is_connected(),
            'status': status.value,
            'details': {
                'running': self._running,
                'polls': self._polls,
                'poll_interval': self._config.poll_interval,
            }
        }

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        if self._executor is None:
            raise RuntimeError("Polling service is not running")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, func, *args)

    async def _poll_worker(self) -> None:
        """Poll worker task."""
        while self._running:
            try:
                await self._run(self._client.poll)
                self._polls += 1
                await asyncio.sleep(self._config.poll_interval)
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Poll error: {e}")
                await asyncio.sleep(self._config.poll_interval)

# stripe_rest/api/transport.py
# Created: 2026-10-17 11:40:06

"""
Request transports.

Transports are asynchronous inside and blocking outside: ``send`` hands the
request to an event loop running on a background thread and waits for the
fully buffered response.
"""

from typing import Awaitable, Optional, Protocol, TypeVar, Union
from abc import ABC, abstractmethod
from concurrent.futures import CancelledError as FutureCancelledError
from enum import Enum
import asyncio
import logging
import ssl
import threading
import aiohttp
import certifi
from .errors import TransportError
from .models import Request, Response

T = TypeVar('T')
logger = logging.getLogger(__name__)

class TlsBackend(Enum):
    """Source of trusted CA certificates"""
    CERTIFI = "certifi"   # Mozilla bundle shipped with certifi
    SYSTEM = "system"     # Platform trust store

def build_ssl_context(
    backend: Union[TlsBackend, str] = TlsBackend.CERTIFI,
    verify_ssl: bool = True
) -> Union[ssl.SSLContext, bool]:
    """Build the SSL setting handed to the aiohttp connector"""
    if not verify_ssl:
        return False
    backend = TlsBackend(backend)
    if backend is TlsBackend.CERTIFI:
        return ssl.create_default_context(cafile=certifi.where())
    return ssl.create_default_context()

class Transport(Protocol):
    """Anything that can send a request and block until its response"""

    def send(self, request: Request) -> Response:
        ...

    def close(self) -> None:
        ...

class EventLoopThread:
    """An asyncio event loop running on a daemon thread"""

    def __init__(self, name: str = "stripe-rest-transport"):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> asyncio.AbstractEventLoop:
        """Start the loop thread if needed and return its loop"""
        with self._lock:
            if self.running:
                return self._loop
            loop = asyncio.new_event_loop()
            started = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(loop, started),
                name=self.name,
                daemon=True
            )
            thread.start()
            started.wait()
            self._loop = loop
            self._thread = thread
            return loop

    @staticmethod
    def _run(loop: asyncio.AbstractEventLoop, started: threading.Event) -> None:
        asyncio.set_event_loop(loop)
        loop.call_soon(started.set)
        try:
            loop.run_forever()
        finally:
            try:
                loop.run_until_complete(loop.shutdown_asyncgens())
            finally:
                loop.close()

    def run(self, coro: Awaitable[T]) -> T:
        """Run a coroutine on the loop and block until it finishes"""
        loop = self.start()
        if threading.current_thread() is self._thread:
            if asyncio.iscoroutine(coro):
                coro.close()
            raise RuntimeError("EventLoopThread.run() called from its own loop thread")
        future = asyncio.run_coroutine_threadsafe(coro, loop)
        return future.result()

    def stop(self) -> None:
        """
        Stop the loop and wait for its thread to exit.

        Work still pending on the loop is cancelled first, so threads blocked
        in ``run`` get a ``CancelledError`` instead of waiting forever.
        """
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
        if loop is None or thread is None or not thread.is_alive():
            return
        if thread is threading.current_thread():
            loop.stop()
            return
        asyncio.run_coroutine_threadsafe(self._cancel_pending(), loop).result()
        loop.call_soon_threadsafe(loop.stop)
        thread.join()

    @staticmethod
    async def _cancel_pending() -> None:
        current = asyncio.current_task()
        tasks = [task for task in asyncio.all_tasks() if task is not current]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

class AsyncTransport(ABC):
    """
    Base class for transports built on asyncio.

    Subclasses implement ``dispatch``; callers use the blocking ``send``.
    Concurrent ``send`` calls from different threads run concurrently on the
    shared loop.
    """

    def __init__(self, runner: Optional[EventLoopThread] = None):
        self._runner = runner or EventLoopThread()

    @abstractmethod
    async def dispatch(self, request: Request) -> Response:
        """Send one request and return its fully read response"""
        ...

    async def aclose(self) -> None:
        """Release async resources held by the transport"""
        return None

    def send(self, request: Request) -> Response:
        try:
            return self._runner.run(self.dispatch(request))
        except (asyncio.CancelledError, FutureCancelledError) as e:
            raise TransportError(
                f"{request.method.value} {request.url} was cancelled",
                details={"url": str(request.url)}
            ) from e

    def close(self) -> None:
        if self._runner.running:
            self._runner.run(self.aclose())
        self._runner.stop()

class AiohttpTransport(AsyncTransport):
    """
    Transport backed by a shared ``aiohttp.ClientSession``.

    The session and its connection pool are created on first use inside the
    loop thread and reused by every request sent through this transport.
    """

    def __init__(
        self,
        timeout: float = 80.0,
        max_connections: int = 100,
        tls_backend: Union[TlsBackend, str] = TlsBackend.CERTIFI,
        verify_ssl: bool = True,
        runner: Optional[EventLoopThread] = None
    ):
        super().__init__(runner)
        self.timeout = timeout
        self.max_connections = max_connections
        self.tls_backend = TlsBackend(tls_backend)
        self._ssl = build_ssl_context(self.tls_backend, verify_ssl)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(limit=self.max_connections, ssl=self._ssl),
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def dispatch(self, request: Request) -> Response:
        session = await self._get_session()
        try:
            async with session.request(
                request.method.value,
                request.url,
                headers=request.headers,
                data=request.body
            ) as response:
                body = await response.read()
                return Response(
                    status=response.status,
                    body=body,
                    headers=dict(response.headers)
                )
        except asyncio.TimeoutError as e:
            logger.error(f"Request timed out: {request.method.value} {request.url}")
            raise TransportError(
                f"{request.method.value} {request.url} timed out after {self.timeout}s",
                details={"url": str(request.url)}
            ) from e
        except (aiohttp.ClientError, OSError) as e:
            logger.error(f"Request failed: {request.method.value} {request.url}: {str(e)}")
            raise TransportError(
                f"{request.method.value} {request.url} failed: {str(e)}",
                details={"url": str(request.url)}
            ) from e

    async def aclose(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

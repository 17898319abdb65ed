"""
SSE Transport
=============

Server-Sent Events broadcast transport.

Fans every emitted event out to all connected clients, keeps a bounded
replay buffer for reconnecting clients, and sends periodic comment-only
heartbeats so intermediaries keep idle streams open. Clients whose write
fails are pruned after each broadcast pass.

Everything runs on one asyncio event loop: writes are non-blocking puts into
per-client bounded queues, so no operation here suspends on I/O.

Event IDs have the form ``<epoch_ms>-<sequence>``, where ``epoch_ms`` is the
transport's creation time. IDs from an earlier process never match the
buffer of a new one, so a client reconnecting after a restart gets the whole
buffer instead of skipping events.
"""

from typing import (
    Any,
    AsyncIterator,
    Callable,
    Deque,
    Iterable,
    List,
    Optional,
    Set,
    TYPE_CHECKING,
)
import asyncio
import time
from collections import deque
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.params import Depends
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.types import Receive, Scope, Send

from mcp_control.config.logging import get_logger
from mcp_control.exceptions import ClientWriteError, TransportAlreadyAttachedError
from mcp_control.models.schemas import ControlResponse

from .events import HEARTBEAT_CHUNK, format_retry, format_sse_event
from .models import ReplayEntry, SSETransportStats

if TYPE_CHECKING:
    from mcp_control.config.settings import Settings

logger = get_logger(__name__)

DEFAULT_SSE_PATH = "/mcp/sse"


class SSEClient:
    """
    Outbound chunk stream for one connected client.

    The HTTP layer consumes :meth:`stream`; the transport writes with
    :meth:`write`, which never blocks and raises :class:`ClientWriteError`
    once the client is closed or too far behind.
    """

    def __init__(self, queue_size: int = 1000) -> None:
        self._queue: "asyncio.Queue[Optional[str]]" = asyncio.Queue(maxsize=queue_size)
        self._closed = False
        self.connected_at = datetime.now(timezone.utc)
        self.chunks_written = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, chunk: str) -> bool:
        """Queue a chunk for delivery."""
        if self._closed:
            raise ClientWriteError("Client stream is closed")
        try:
            self._queue.put_nowait(chunk)
        except asyncio.QueueFull as e:
            raise ClientWriteError(
                f"Client is not reading ({self._queue.maxsize} chunks pending)"
            ) from e
        self.chunks_written += 1
        return True

    def drain(self) -> List[str]:
        """Remove and return every chunk not yet streamed."""
        chunks: List[str] = []
        while not self._queue.empty():
            chunk = self._queue.get_nowait()
            if chunk is not None:
                chunks.append(chunk)
        return chunks

    def close(self) -> None:
        """End the stream. Pending chunks are discarded."""
        if self._closed:
            return
        self._closed = True
        self.drain()
        self._queue.put_nowait(None)

    async def stream(self) -> AsyncIterator[str]:
        """Yield chunks until the client is closed."""
        while True:
            chunk = await self._queue.get()
            if chunk is None:
                return
            yield chunk


class SSEStreamResponse(StreamingResponse):
    """
    Event stream response that releases its client when the response ends.

    The body generator's own cleanup only runs once iteration has started;
    this also covers responses that fail before the first body chunk.
    """

    def __init__(self, content: AsyncIterator[str], on_close: Callable[[], None], **kwargs: Any):
        super().__init__(content, **kwargs)
        self._on_close = on_close

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            self._on_close()


class SSETransport:
    """
    Server-Sent Events transport.

    Handles:
    - Route registration on a FastAPI application (once per instance)
    - Client registration, close notification and pruning of failed clients
    - Event broadcast with a bounded FIFO replay buffer
    - Heartbeat keepalive
    """

    def __init__(
        self,
        max_buffer_size: int = 100,
        heartbeat_interval: int = 25000,
        path: str = DEFAULT_SSE_PATH,
        retry_interval: int = 3000,
        max_clients: int = 100,
        client_queue_size: int = 1000,
    ) -> None:
        """
        Initialize the transport.

        Args:
            max_buffer_size: Number of events kept for replay
            heartbeat_interval: Keepalive interval in milliseconds
            path: Streaming endpoint path
            retry_interval: Reconnection delay suggested to clients, in milliseconds
            max_clients: Connection limit enforced by the route handler
            client_queue_size: Live chunks allowed to pend per client before it is
                dropped; each queue also has room for a full replay backlog
        """
        if max_buffer_size < 0:
            raise ValueError("Buffer size cannot be negative")
        if heartbeat_interval <= 0:
            raise ValueError("Heartbeat interval must be positive")

        self.path = path
        self.retry_interval = retry_interval
        self.max_clients = max_clients
        self.client_queue_size = client_queue_size
        self._heartbeat_interval = heartbeat_interval

        self._clients: Set[SSEClient] = set()
        self._replay_buffer: Deque[ReplayEntry] = deque(maxlen=max_buffer_size)
        self._epoch = int(time.time() * 1000)
        self._sequence = 0
        self._last_event_id: Optional[str] = None

        self._heartbeat_task: Optional[asyncio.Task[None]] = None
        self._attached = False
        self._closed = False

        self._total_events_emitted = 0
        self._total_heartbeats_sent = 0
        self._total_clients_dropped = 0

        self.logger: Any = logger.bind(component="sse_transport", path=path)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SSETransport":
        """Build a transport from application settings."""
        return cls(
            max_buffer_size=settings.sse_max_buffer_size,
            heartbeat_interval=settings.sse_heartbeat_interval,
            path=settings.sse_path,
            retry_interval=settings.sse_retry_interval,
            max_clients=settings.sse_max_clients,
            client_queue_size=settings.sse_client_queue_size,
        )

    @property
    def heartbeat_interval(self) -> int:
        return self._heartbeat_interval

    @property
    def max_buffer_size(self) -> int:
        return self._replay_buffer.maxlen or 0

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def heartbeat_running(self) -> bool:
        return self._heartbeat_task is not None and not self._heartbeat_task.done()

    # Route binding

    def attach(self, app: FastAPI, dependencies: Optional[Iterable[Depends]] = None) -> None:
        """
        Register the streaming route on a FastAPI application.

        Args:
            app: Application to register ``GET <path>`` on
            dependencies: Optional FastAPI dependencies guarding the route

        Raises:
            TransportAlreadyAttachedError: If this transport was attached before
        """
        if self._attached:
            raise TransportAlreadyAttachedError(self.path)

        app.add_api_route(
            self.path,
            self.handle_stream,
            methods=["GET"],
            dependencies=list(dependencies or []),
            tags=["SSE"],
            include_in_schema=False,
        )
        self._attached = True
        self.logger.info("SSE transport attached")

        # Without a running loop the heartbeat starts with the first
        # connection or from the application lifespan.
        self.start_heartbeat()

    async def handle_stream(self, request: Request) -> Response:
        """Route handler: open one long-lived event stream."""
        if self._closed:
            return JSONResponse(
                status_code=503,
                content=ControlResponse(
                    success=False, message="SSE transport is shut down"
                ).model_dump(exclude_none=True),
            )

        if len(self._clients) >= self.max_clients:
            self.logger.warning(
                "SSE client limit reached",
                max_clients=self.max_clients,
                client_host=request.client.host if request.client else "unknown",
            )
            return JSONResponse(
                status_code=503,
                content=ControlResponse(
                    success=False,
                    message=f"Maximum number of SSE clients ({self.max_clients}) reached",
                ).model_dump(exclude_none=True),
            )

        client = self.open_client(request.headers.get("last-event-id"))
        if client.closed:
            return JSONResponse(
                status_code=503,
                content=ControlResponse(
                    success=False, message="SSE client could not be initialized"
                ).model_dump(exclude_none=True),
            )
        self.start_heartbeat()

        return SSEStreamResponse(
            self._event_stream(client),
            on_close=lambda: self.remove_client(client),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable Nginx buffering
            },
        )

    async def _event_stream(self, client: SSEClient) -> AsyncIterator[str]:
        try:
            async for chunk in client.stream():
                yield chunk
        finally:
            # Runs when the client disconnects and Starlette cancels the stream
            self.remove_client(client)

    # Client registry

    def open_client(self, last_event_id: Optional[str] = None) -> SSEClient:
        """
        Create and register a client stream.

        Writes the reconnection hint, registers the client and, when
        ``last_event_id`` is given, replays the buffered events after it.
        An ID the buffer does not hold (evicted, or issued before a restart)
        replays the whole buffer. A client whose replay fails is returned
        closed and unregistered.
        """
        # Room for the retry directive and a full backlog on top of live traffic
        client = SSEClient(queue_size=self.client_queue_size + self.max_buffer_size + 1)
        client.write(format_retry(self.retry_interval))
        self.register_client(client)

        if last_event_id:
            self._replay(client, last_event_id.strip())

        return client

    def register_client(self, client: SSEClient) -> None:
        """Add a client to the broadcast set."""
        self._clients.add(client)
        self.logger.info("SSE client connected", clients=len(self._clients))

    def remove_client(self, client: SSEClient) -> None:
        """Close notification; removing an unknown client is a no-op."""
        if client not in self._clients:
            return
        self._clients.discard(client)
        client.close()
        self.logger.info("SSE client disconnected", clients=len(self._clients))

    def get_client_count(self) -> int:
        return len(self._clients)

    def _replay(self, client: SSEClient, after_id: str) -> None:
        entries = list(self._replay_buffer)
        ids = [entry.event_id for entry in entries]
        if after_id in ids:
            entries = entries[ids.index(after_id) + 1 :]
        else:
            self.logger.info("Unknown Last-Event-ID, replaying whole buffer", after_id=after_id)

        replayed = 0
        for entry in entries:
            try:
                client.write(entry.data)
            except Exception as e:
                self.logger.warning("Error replaying to SSE client", error=str(e))
                self._drop_client(client)
                return
            replayed += 1

        self.logger.info("Replayed missed events", after_id=after_id, replayed=replayed)

    # Broadcast

    def emit_event(self, event_name: str, payload: Any) -> str:
        """
        Broadcast a JSON payload under ``event_name`` to every client.

        An empty ``event_name`` omits the ``event:`` line. Per-client failures
        are isolated; the call returns normally however many clients fail.

        Returns:
            The event ID assigned to this event

        Raises:
            TypeError: If the payload is not JSON serializable
            ValueError: If the payload contains NaN or infinite floats
        """
        event_id = f"{self._epoch}-{self._sequence + 1}"
        data = format_sse_event(event_name, payload, event_id)

        self._sequence += 1
        self._last_event_id = event_id
        self._replay_buffer.append(
            ReplayEntry(event_id=event_id, event_name=event_name, payload=payload, data=data)
        )
        self._total_events_emitted += 1

        self._broadcast(data)
        return event_id

    def _broadcast(self, chunk: str) -> None:
        failed: List[SSEClient] = []

        for client in self._clients:
            try:
                if client.write(chunk) is False:
                    failed.append(client)
            except Exception as e:
                failed.append(client)
                self.logger.warning(
                    "Error broadcasting to SSE client",
                    error_type=type(e).__name__,
                    error=str(e),
                )

        for client in failed:
            self._drop_client(client)

    def _drop_client(self, client: SSEClient) -> None:
        if client not in self._clients:
            return
        self._clients.discard(client)
        self._total_clients_dropped += 1
        try:
            client.close()
        except Exception as e:
            self.logger.debug("Error closing dropped SSE client", error=str(e))
        self.logger.info("Dropped failed SSE client", clients=len(self._clients))

    # Heartbeat

    def start_heartbeat(self) -> bool:
        """
        Start the heartbeat task if it is not running.

        Returns:
            True if the heartbeat is running after the call
        """
        if self._closed:
            return False
        if self.heartbeat_running:
            return True

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return False

        self._heartbeat_task = loop.create_task(self._heartbeat_loop())
        self.logger.debug("Heartbeat started", interval_ms=self._heartbeat_interval)
        return True

    async def _heartbeat_loop(self) -> None:
        interval = self._heartbeat_interval / 1000
        while True:
            await asyncio.sleep(interval)
            self.send_heartbeat()

    def send_heartbeat(self) -> None:
        """Broadcast one keepalive comment. Not recorded for replay."""
        self._total_heartbeats_sent += 1
        self._broadcast(HEARTBEAT_CHUNK)

    # Replay buffer

    def get_replay_buffer_size(self) -> int:
        return len(self._replay_buffer)

    def get_replay_entries(self) -> List[ReplayEntry]:
        """Buffered events, oldest first."""
        return list(self._replay_buffer)

    def clear_replay_buffer(self) -> None:
        self._replay_buffer.clear()

    def set_max_buffer_size(self, max_size: int) -> None:
        """
        Resize the replay buffer, dropping the oldest events when shrinking.

        Raises:
            ValueError: If ``max_size`` is negative
        """
        if max_size < 0:
            raise ValueError("Buffer size cannot be negative")
        self._replay_buffer = deque(self._replay_buffer, maxlen=max_size)

    # Lifecycle

    def get_stats(self) -> SSETransportStats:
        return SSETransportStats(
            path=self.path,
            attached=self._attached,
            heartbeat_running=self.heartbeat_running,
            heartbeat_interval=self._heartbeat_interval,
            connected_clients=len(self._clients),
            max_clients=self.max_clients,
            replay_buffer_size=len(self._replay_buffer),
            max_buffer_size=self.max_buffer_size,
            last_event_id=self._last_event_id,
            total_events_emitted=self._total_events_emitted,
            total_heartbeats_sent=self._total_heartbeats_sent,
            total_clients_dropped=self._total_clients_dropped,
        )

    def close(self) -> None:
        """
        Stop the heartbeat and release every client stream.

        Safe to call more than once. The route stays registered; new
        connections are refused.
        """
        if self._heartbeat_task is not None:
            self._heartbeat_task.cancel()
            self._heartbeat_task = None

        for client in list(self._clients):
            client.close()
        self._clients.clear()

        if not self._closed:
            self._closed = True
            self.logger.info("SSE transport closed")

"""
CDP session channel: one websocket per command, correlated by request id.

Each request gets the next integer id and a single-resolution future. The
reader task resolves futures as responses arrive, in arrival order. Frames
whose id is not pending (events, late replies) are dropped. Closing the
channel, or losing the connection, fails every request still pending.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from antigravity_remote.errors import (
    ConnectionFailed,
    NoControlAddress,
    RemoteError,
    RequestTimeout,
    SessionClosed,
)
from antigravity_remote.models.target import Target
from antigravity_remote.transport.envelope import build_request, parse_response

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_OPEN_TIMEOUT = 10.0
MAX_MESSAGE_SIZE = 64 * 1024 * 1024  # full-frame screenshots arrive as one base64 frame

Connector = Callable[..., Awaitable[Any]]


class PendingRequest:
    __slots__ = ("id", "method", "future")

    def __init__(self, id: int, method: str, future: "asyncio.Future[dict[str, Any]]"):
        self.id = id
        self.method = method
        self.future = future

    def resolve(self, result: dict[str, Any]) -> None:
        if not self.future.done():
            self.future.set_result(result)

    def fail(self, exc: BaseException) -> None:
        if not self.future.done():
            self.future.set_exception(exc)

    def __repr__(self) -> str:
        return f"PendingRequest(id={self.id!r}, method={self.method!r})"


class SessionChannel:
    def __init__(
        self,
        address: str,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        open_timeout: float = DEFAULT_OPEN_TIMEOUT,
        connect: Optional[Connector] = None,
    ):
        self._address = address
        self._request_timeout = request_timeout
        self._open_timeout = open_timeout
        self._connect = connect or websockets.connect
        self._ws: Any = None
        self._reader: Optional[asyncio.Task[None]] = None
        self._next_id = 1
        self._pending: dict[int, PendingRequest] = {}
        self._closed = False

    @property
    def address(self) -> str:
        return self._address

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def open(self) -> "SessionChannel":
        if self._ws is not None:
            return self
        if self._closed:
            raise SessionClosed("Cannot reopen a closed session channel")
        try:
            self._ws = await self._connect(
                self._address,
                max_size=MAX_MESSAGE_SIZE,
                open_timeout=self._open_timeout,
            )
        except (OSError, asyncio.TimeoutError, WebSocketException) as e:
            self._closed = True
            raise ConnectionFailed(
                f"Could not open control channel {self._address}: {e}",
                details={"address": self._address},
            ) from e
        self._reader = asyncio.get_running_loop().create_task(self._read_loop())
        logger.debug("Opened control channel %s", self._address)
        return self

    async def send(
        self,
        method: str,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> dict[str, Any]:
        """Issue one correlated request and wait for its result."""
        if self._closed or self._ws is None:
            raise SessionClosed(f"Cannot send {method}: session channel is not open")

        request_id = self._next_id
        self._next_id += 1
        pending = PendingRequest(request_id, method, asyncio.get_running_loop().create_future())
        self._pending[request_id] = pending

        try:
            await self._ws.send(build_request(request_id, method, params))
        except (ConnectionClosed, OSError) as e:
            self._pending.pop(request_id, None)
            raise SessionClosed(f"Connection lost while sending {method}: {e}") from e

        deadline = self._request_timeout if timeout is None else timeout
        try:
            return await asyncio.wait_for(pending.future, timeout=deadline)
        except asyncio.TimeoutError:
            raise RequestTimeout(
                f"No response to {method} (id={request_id}) after {deadline}s",
                details={"id": request_id, "method": method},
            ) from None
        finally:
            self._pending.pop(request_id, None)

    async def _read_loop(self) -> None:
        try:
            async for raw in self._ws:
                self._dispatch(raw)
        except ConnectionClosed as e:
            logger.debug("Control channel %s dropped: %s", self._address, e)
        finally:
            self._fail_pending(SessionClosed("Control channel closed with requests pending"))
            self._closed = True

    def _dispatch(self, raw: Any) -> None:
        envelope = parse_response(raw)
        if envelope is None:
            logger.debug("Ignoring malformed frame on %s", self._address)
            return
        if envelope.is_event:
            return
        pending = self._pending.pop(envelope.id, None)  # type: ignore[arg-type]
        if pending is None:
            logger.debug("Ignoring response with unknown id %s", envelope.id)
            return
        if envelope.error is not None:
            pending.fail(RemoteError(
                envelope.error.message or f"{pending.method} failed",
                details={"code": envelope.error.code, "method": pending.method, "data": envelope.error.data},
            ))
        else:
            pending.resolve(envelope.result or {})

    def _fail_pending(self, exc: Exception) -> None:
        pending, self._pending = self._pending, {}
        for request in pending.values():
            request.fail(exc)

    async def close(self) -> None:
        """Close the channel. Safe to call more than once."""
        if self._closed and self._reader is None:
            return
        self._closed = True
        reader, self._reader = self._reader, None
        try:
            if self._ws is not None:
                await self._ws.close()
        finally:
            if reader is not None and not reader.done():
                reader.cancel()
                try:
                    await reader
                except asyncio.CancelledError:
                    pass
            self._fail_pending(SessionClosed("Control channel closed with requests pending"))
            logger.debug("Closed control channel %s", self._address)

    async def __aenter__(self) -> "SessionChannel":
        return await self.open()

    async def __aexit__(self, *_exc: Any) -> None:
        await self.close()


async def open_channel(
    target: Target,
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    open_timeout: float = DEFAULT_OPEN_TIMEOUT,
    connect: Optional[Connector] = None,
) -> SessionChannel:
    """Open a control channel to a target's webSocketDebuggerUrl."""
    if not target.web_socket_debugger_url:
        raise NoControlAddress(f"No WebSocket URL for target {target.id or target.title!r}")
    channel = SessionChannel(
        target.web_socket_debugger_url,
        request_timeout=request_timeout,
        open_timeout=open_timeout,
        connect=connect,
    )
    return await channel.open()

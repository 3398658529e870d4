"""Test doubles: an in-memory CDP websocket and a mock discovery endpoint."""

import asyncio
import json
from typing import Any, Callable, Optional

import httpx

from antigravity_remote.client import AsyncAntigravity

WS_URL = "ws://localhost:9222/devtools/page/EDITOR"


class FakeConnection:
    """Stands in for a websockets client connection."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.close_calls = 0
        self._inbox: asyncio.Queue[Optional[str]] = asyncio.Queue()

    async def send(self, data: str) -> None:
        self.sent.append(json.loads(data))

    def push(self, message: Any) -> None:
        self._inbox.put_nowait(message if isinstance(message, str) else json.dumps(message))

    def drop(self) -> None:
        self._inbox.put_nowait(None)

    def __aiter__(self) -> "FakeConnection":
        return self

    async def __anext__(self) -> str:
        item = await self._inbox.get()
        if item is None:
            raise StopAsyncIteration
        return item

    async def close(self) -> None:
        self.close_calls += 1
        self._inbox.put_nowait(None)


class ScriptedConnection(FakeConnection):
    """Answers every request through `handler(method, params)`.

    The handler returns a result dict, or {"__error__": {...}} to answer
    with a protocol error.
    """

    def __init__(self, handler: Callable[[str, dict[str, Any]], dict[str, Any]]):
        super().__init__()
        self._handler = handler

    async def send(self, data: str) -> None:
        await super().send(data)
        request = self.sent[-1]
        reply = self._handler(request["method"], request.get("params") or {})
        if "__error__" in reply:
            self.push({"id": request["id"], "error": reply["__error__"]})
        else:
            self.push({"id": request["id"], "result": reply})


class Connector:
    """Records every connection opened through it."""

    def __init__(self, factory: Callable[[], FakeConnection]):
        self._factory = factory
        self.connections: list[FakeConnection] = []
        self.addresses: list[str] = []

    async def __call__(self, address: str, **_kwargs: Any) -> FakeConnection:
        self.addresses.append(address)
        connection = self._factory()
        self.connections.append(connection)
        return connection


def editor_targets() -> list[dict[str, Any]]:
    return [
        {
            "id": "LAUNCH",
            "type": "page",
            "title": "Antigravity - Launchpad",
            "url": "vscode-file://vscode-app/launchpad.html",
            "webSocketDebuggerUrl": "ws://localhost:9222/devtools/page/LAUNCH",
        },
        {
            "id": "EDITOR",
            "type": "page",
            "title": "MyProject - Antigravity - index.ts",
            "url": "vscode-file://vscode-app/workbench.html",
            "webSocketDebuggerUrl": WS_URL,
        },
    ]


def discovery_transport(
    targets: Optional[list[dict[str, Any]]] = None,
    version: Optional[dict[str, Any]] = None,
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/json/list":
            return httpx.Response(200, json=editor_targets() if targets is None else targets)
        if request.url.path == "/json/version":
            return httpx.Response(200, json=version or {"Browser": "Chrome/128.0.6613.186"})
        return httpx.Response(404, text="not found")

    return httpx.MockTransport(handler)


def refused_transport() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(handler)


def make_client(handler: Callable[[str, dict[str, Any]], dict[str, Any]], **kwargs: Any):
    connector = Connector(lambda: ScriptedConnection(handler))
    kwargs.setdefault("transport", discovery_transport())
    client = AsyncAntigravity(connect=connector, request_timeout=2.0, **kwargs)
    return client, connector


def evaluate_returning(value: Any) -> Callable[[str, dict[str, Any]], dict[str, Any]]:
    """Handler answering Runtime.evaluate with `value` and everything else with {}."""

    def handler(method: str, params: dict[str, Any]) -> dict[str, Any]:
        if method == "Runtime.evaluate":
            return {"result": {"type": "object", "value": value}}
        return {}

    return handler

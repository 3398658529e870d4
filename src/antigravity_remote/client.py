"""
Antigravity / AsyncAntigravity: remote-control clients for the editor.

Every command discovers the editor target, opens its own control channel,
issues its requests and closes the channel on every exit path. Commands
never share a channel, so concurrent commands are independent.
"""

import asyncio
import base64
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx

from antigravity_remote.errors import NoEditorTarget
from antigravity_remote.extraction.pipeline import ExtractionPipeline
from antigravity_remote.extraction.snippets import WORKSPACE_SOURCES_SNIPPET
from antigravity_remote.input import InputEngine
from antigravity_remote.models.conversation import (
    Availability,
    ChatMessages,
    ConversationText,
    FocusResult,
    InjectResult,
    PanelContent,
)
from antigravity_remote.models.target import Target, VersionInfo
from antigravity_remote.runtime import evaluate
from antigravity_remote.targets import PRODUCT_NAME, select_editor_target
from antigravity_remote.transport.channel import (
    DEFAULT_OPEN_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    Connector,
    SessionChannel,
    open_channel,
)
from antigravity_remote.transport.http import DEFAULT_HOST, DEFAULT_PORT, DiscoveryClient
from antigravity_remote.workspace import find_file_path, project_name_from_title, resolve_workspace_root

logger = logging.getLogger(__name__)


class AsyncAntigravity:
    """Async remote-control client (primary)."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        product_name: str = PRODUCT_NAME,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        open_timeout: float = DEFAULT_OPEN_TIMEOUT,
        http_timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        connect: Optional[Connector] = None,
    ):
        self._product_name = product_name
        self._request_timeout = request_timeout
        self._open_timeout = open_timeout
        self._connect = connect
        self.discovery = DiscoveryClient(host=host, port=port, timeout=http_timeout, transport=transport)

    async def list_targets(self) -> list[Target]:
        return await self.discovery.list_targets()

    async def get_version(self) -> VersionInfo:
        return await self.discovery.get_version()

    async def find_editor_target(self) -> Target:
        return select_editor_target(await self.discovery.list_targets(), self._product_name)

    @asynccontextmanager
    async def session(self, target: Optional[Target] = None) -> AsyncIterator[SessionChannel]:
        """Open a channel to the editor (or `target`) and always close it."""
        if target is None:
            target = await self.find_editor_target()
        channel = await open_channel(
            target,
            request_timeout=self._request_timeout,
            open_timeout=self._open_timeout,
            connect=self._connect,
        )
        try:
            yield channel
        finally:
            await channel.close()

    async def is_available(self) -> Availability:
        """Probe /json/version. Reports failure instead of raising."""
        try:
            version = await self.discovery.get_version()
        except Exception as e:
            return Availability(available=False, error=str(e))
        return Availability(available=True, browser=version.browser)

    async def screenshot(self, format: str = "png", quality: int = 80) -> str:
        """Capture the editor window. Returns base64 image data."""
        async with self.session() as channel:
            result = await channel.send("Page.captureScreenshot", {
                "format": format,
                "quality": quality,
                "captureBeyondViewport": False,
            })
        return result.get("data", "")

    async def screenshot_bytes(self, format: str = "png", quality: int = 80) -> bytes:
        return base64.b64decode(await self.screenshot(format=format, quality=quality))

    async def layout_metrics(self) -> dict[str, Any]:
        async with self.session() as channel:
            return await channel.send("Page.getLayoutMetrics")

    async def inject_text(self, text: str) -> InjectResult:
        """Type `text` one key at a time. Slow; prefer inject_and_submit()."""
        async with self.session() as channel:
            return await InputEngine(channel).type_text(text)

    async def inject_and_submit(self, text: str) -> InjectResult:
        """Insert `text` in one request and press Enter."""
        async with self.session() as channel:
            return await InputEngine(channel).insert_and_submit(text)

    async def focus_input(self) -> FocusResult:
        async with self.session() as channel:
            return await InputEngine(channel).focus()

    async def get_chat_messages(self) -> ChatMessages:
        async with self.session() as channel:
            return await ExtractionPipeline(channel).chat_messages()

    async def get_agent_panel_content(self) -> PanelContent:
        async with self.session() as channel:
            return await ExtractionPipeline(channel).panel_content()

    async def get_conversation_text(self) -> ConversationText:
        async with self.session() as channel:
            return await ExtractionPipeline(channel).conversation_text()

    async def get_workspace_path(self) -> Optional[str]:
        """Best-guess project root of the open workspace, or None."""
        try:
            target = await self.find_editor_target()
        except NoEditorTarget:
            logger.info("No editor target; workspace path unknown")
            return None

        project_name = project_name_from_title(target.title, self._product_name)
        logger.debug("Target title %r, project name %r", target.title, project_name)

        async with self.session(target) as channel:
            sources = await evaluate(channel, WORKSPACE_SOURCES_SNIPPET)

        found = find_file_path(sources)
        if found is None:
            logger.info("No file path found in tab labels or data-uri attributes")
            return None
        root = resolve_workspace_root(found.path, found.is_windows, project_name)
        logger.info("Workspace path %r (from %s %r)", root, found.source, found.path)
        return root or None

    async def close(self) -> None:
        await self.discovery.close()

    async def __aenter__(self) -> "AsyncAntigravity":
        return self

    async def __aexit__(self, *_exc: Any) -> None:
        await self.close()


class Antigravity:
    """Sync wrapper around AsyncAntigravity. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncAntigravity(**kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    def list_targets(self) -> list[Target]:
        return self._run(self._async.list_targets())

    def is_available(self) -> Availability:
        return self._run(self._async.is_available())

    def screenshot(self, format: str = "png", quality: int = 80) -> str:
        return self._run(self._async.screenshot(format=format, quality=quality))

    def screenshot_bytes(self, format: str = "png", quality: int = 80) -> bytes:
        return self._run(self._async.screenshot_bytes(format=format, quality=quality))

    def layout_metrics(self) -> dict[str, Any]:
        return self._run(self._async.layout_metrics())

    def inject_text(self, text: str) -> InjectResult:
        return self._run(self._async.inject_text(text))

    def inject_and_submit(self, text: str) -> InjectResult:
        return self._run(self._async.inject_and_submit(text))

    def focus_input(self) -> FocusResult:
        return self._run(self._async.focus_input())

    def get_chat_messages(self) -> ChatMessages:
        return self._run(self._async.get_chat_messages())

    def get_agent_panel_content(self) -> PanelContent:
        return self._run(self._async.get_agent_panel_content())

    def get_conversation_text(self) -> ConversationText:
        return self._run(self._async.get_conversation_text())

    def get_workspace_path(self) -> Optional[str]:
        return self._run(self._async.get_workspace_path())

    def close(self) -> None:
        try:
            self._run(self._async.close())
        finally:
            self._loop.close()

"""Command facade against a scripted editor."""

import asyncio
import base64

import pytest

from antigravity_remote import Antigravity, AsyncAntigravity
from antigravity_remote.errors import NoControlAddress, NoEditorTarget, RemoteError
from antigravity_remote.input import FOCUS_SNIPPET, INPUT_FOCUS_SNIPPET

from fakes import (
    WS_URL,
    Connector,
    ScriptedConnection,
    discovery_transport,
    evaluate_returning,
    make_client,
    refused_transport,
)

PNG = b"\x89PNG\r\n\x1a\nfake"


class TestAvailability:
    @pytest.mark.asyncio
    async def test_available(self):
        client = AsyncAntigravity(transport=discovery_transport(version={"Browser": "Chrome/128.0"}))
        result = await client.is_available()
        assert result.available is True
        assert result.browser == "Chrome/128.0"
        await client.close()

    @pytest.mark.asyncio
    async def test_unreachable_reports_instead_of_raising(self):
        client = AsyncAntigravity(transport=refused_transport())
        result = await client.is_available()
        assert result.available is False
        assert "unreachable" in result.error
        await client.close()


class TestCommands:
    @pytest.mark.asyncio
    async def test_screenshot(self):
        encoded = base64.b64encode(PNG).decode()
        client, connector = make_client(lambda method, params: {"data": encoded})
        assert await client.screenshot() == encoded
        assert await client.screenshot_bytes(format="jpeg", quality=50) == PNG

        first, second = (c.sent[0] for c in connector.connections)
        assert first == {
            "id": 1,
            "method": "Page.captureScreenshot",
            "params": {"format": "png", "quality": 80, "captureBeyondViewport": False},
        }
        assert second["params"]["format"] == "jpeg"
        assert second["params"]["quality"] == 50
        assert connector.addresses == [WS_URL, WS_URL]
        assert all(c.close_calls == 1 for c in connector.connections)
        await client.close()

    @pytest.mark.asyncio
    async def test_layout_metrics(self):
        metrics = {"cssLayoutViewport": {"clientWidth": 1280, "clientHeight": 800}}
        client, connector = make_client(lambda method, params: metrics)
        assert await client.layout_metrics() == metrics
        assert connector.connections[0].sent[0]["method"] == "Page.getLayoutMetrics"
        await client.close()

    @pytest.mark.asyncio
    async def test_inject_text_types_each_character(self, fast_settle):
        client, connector = make_client(evaluate_returning({"found": True, "selector": "textarea"}))
        result = await client.inject_text("hi!")
        assert result.success and result.text == "hi!"

        sent = connector.connections[0].sent
        assert sent[0]["method"] == "Runtime.evaluate"
        assert sent[0]["params"]["expression"] == INPUT_FOCUS_SNIPPET
        assert sent[0]["params"]["returnByValue"] is True
        keys = [m["params"] for m in sent[1:]]
        assert [(k["type"], k["key"]) for k in keys] == [
            ("keyDown", "h"), ("keyUp", "h"),
            ("keyDown", "i"), ("keyUp", "i"),
            ("keyDown", "!"), ("keyUp", "!"),
        ]
        assert keys[0]["code"] == "KeyH" and keys[0]["text"] == "h"
        assert "code" not in keys[4]
        await client.close()

    @pytest.mark.asyncio
    async def test_inject_and_submit(self, fast_settle):
        client, connector = make_client(lambda method, params: {})
        result = await client.inject_and_submit("run the tests")
        assert result.submitted

        sent = connector.connections[0].sent
        assert [m["method"] for m in sent] == ["Input.insertText", "Input.dispatchKeyEvent", "Input.dispatchKeyEvent"]
        assert sent[0]["params"] == {"text": "run the tests"}
        assert sent[1]["params"]["type"] == "keyDown"
        assert sent[2]["params"]["type"] == "keyUp"
        assert sent[1]["params"]["windowsVirtualKeyCode"] == 13
        await client.close()

    @pytest.mark.asyncio
    async def test_focus_input(self):
        client, connector = make_client(evaluate_returning({"method": "contenteditable", "success": True}))
        result = await client.focus_input()
        assert result.method == "contenteditable"
        assert result.success
        assert connector.connections[0].sent[0]["params"]["expression"] == FOCUS_SNIPPET
        await client.close()

    @pytest.mark.asyncio
    async def test_focus_input_snippet_exception(self):
        def handler(method, params):
            return {
                "result": {"type": "object", "subtype": "error"},
                "exceptionDetails": {"text": "Uncaught", "exception": {"description": "TypeError: x"}},
            }

        client, _ = make_client(handler)
        result = await client.focus_input()
        assert result.success is False
        await client.close()


class TestTeardown:
    @pytest.mark.asyncio
    async def test_channel_closed_when_request_fails(self):
        client, connector = make_client(
            lambda method, params: {"__error__": {"code": -32000, "message": "Not allowed"}}
        )
        with pytest.raises(RemoteError):
            await client.screenshot()
        assert connector.connections[0].close_calls == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_channel_closed_when_caller_code_raises(self):
        client, connector = make_client(lambda method, params: {})
        with pytest.raises(KeyError):
            async with client.session() as channel:
                await channel.send("Page.getLayoutMetrics")
                raise KeyError("caller bug")
        assert connector.connections[0].close_calls == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_concurrent_commands_use_separate_channels(self):
        client, connector = make_client(lambda method, params: {"data": "AAAA"})
        await asyncio.gather(client.screenshot(), client.layout_metrics(), client.screenshot())
        assert len(connector.connections) == 3
        assert all(c.sent[0]["id"] == 1 for c in connector.connections)
        assert all(c.close_calls == 1 for c in connector.connections)
        await client.close()


class TestTargetErrors:
    @pytest.mark.asyncio
    async def test_no_page_targets(self):
        client, connector = make_client(
            lambda method, params: {},
            transport=discovery_transport(targets=[{"id": "w", "type": "service_worker", "title": "sw"}]),
        )
        with pytest.raises(NoEditorTarget):
            await client.screenshot()
        assert connector.connections == []
        await client.close()

    @pytest.mark.asyncio
    async def test_target_without_control_address(self):
        client, _ = make_client(
            lambda method, params: {},
            transport=discovery_transport(targets=[{"id": "p", "type": "page", "title": "x - Antigravity"}]),
        )
        with pytest.raises(NoControlAddress):
            await client.layout_metrics()
        await client.close()


class TestExtraction:
    @pytest.mark.asyncio
    async def test_chat_messages(self):
        groups = [
            {"selector": ".conversation-content", "candidates": []},
            {"selector": ".agent-response", "candidates": [
                {"text": "Submit", "className": "button"},
                {"text": "I updated the parser so that empty files no longer crash it.", "className": "agent-response"},
            ]},
        ]
        client, _ = make_client(evaluate_returning({"groups": groups}))
        result = await client.get_chat_messages()
        assert result.count == 1
        assert result.messages[0].role == "agent"
        assert result.selector == ".agent-response"
        await client.close()

    @pytest.mark.asyncio
    async def test_chat_messages_empty_page(self):
        client, _ = make_client(evaluate_returning(None))
        result = await client.get_chat_messages()
        assert result.messages == []
        assert result.count == 0
        await client.close()

    @pytest.mark.asyncio
    async def test_panel_content(self):
        client, _ = make_client(evaluate_returning({
            "found": True, "selector": ".agent-panel", "content": "Agent\nHello there", "html": "<div>...</div>",
        }))
        result = await client.get_agent_panel_content()
        assert result.found and result.selector == ".agent-panel"
        assert result.content.endswith("Hello there")
        await client.close()

    @pytest.mark.asyncio
    async def test_conversation_text(self):
        client, _ = make_client(evaluate_returning({
            "found": True, "source": "markdown", "lines": ["A rendered markdown paragraph with enough text."],
        }))
        result = await client.get_conversation_text()
        assert result.found and result.source == "markdown"
        assert result.raw_text == ""
        assert len(result.lines) == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_conversation_text_not_found(self):
        client, _ = make_client(evaluate_returning({"found": False}))
        assert (await client.get_conversation_text()).found is False
        await client.close()


class TestWorkspace:
    @pytest.mark.asyncio
    async def test_resolves_project_root_from_tab_label(self):
        sources = {"labels": ["/Users/alice/MyProject/src/index.ts - MyProject"], "uris": []}
        client, _ = make_client(evaluate_returning(sources))
        assert await client.get_workspace_path() == "/Users/alice/MyProject"
        await client.close()

    @pytest.mark.asyncio
    async def test_no_path_returns_none(self):
        client, connector = make_client(evaluate_returning({"labels": ["Welcome", "Settings"], "uris": []}))
        assert await client.get_workspace_path() is None
        assert connector.connections[0].close_calls == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_no_editor_returns_none(self):
        client, connector = make_client(
            evaluate_returning({}),
            transport=discovery_transport(targets=[]),
        )
        assert await client.get_workspace_path() is None
        assert connector.connections == []
        await client.close()


def test_sync_wrapper():
    connector = Connector(lambda: ScriptedConnection(lambda method, params: {"data": "AAAA"}))
    client = Antigravity(transport=discovery_transport(), connect=connector)
    try:
        assert client.is_available().available
        assert [t.id for t in client.list_targets()] == ["LAUNCH", "EDITOR"]
        assert client.screenshot() == "AAAA"
    finally:
        client.close()

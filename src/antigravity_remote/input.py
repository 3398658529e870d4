"""
Synthetic input: focus the agent input box and type into it.

Two paths:
- type_text: one keyDown/keyUp pair per character. O(len) round-trips, slow.
- insert_and_submit: one Input.insertText, short settle, then Enter. Preferred.
"""

import asyncio
from typing import Any, Optional

from antigravity_remote.models.conversation import FocusResult, InjectResult
from antigravity_remote.runtime import evaluate
from antigravity_remote.transport.channel import SessionChannel

FOCUS_SETTLE_S = 0.1
SUBMIT_SETTLE_S = 0.05

ENTER_KEY = {
    "key": "Enter",
    "code": "Enter",
    "windowsVirtualKeyCode": 13,
    "nativeVirtualKeyCode": 13,
}

# Explicit input area first, then generic editable markup, then a click.
INPUT_FOCUS_SNIPPET = """
(function() {
    const selectors = [
        'textarea.inputarea',
        'textarea[aria-label*="input"]',
        'div[contenteditable="true"]',
        '.monaco-inputbox textarea',
        'textarea'
    ];
    for (const sel of selectors) {
        const el = document.querySelector(sel);
        if (el) {
            el.focus();
            return { found: true, selector: sel };
        }
    }
    const inputArea = document.querySelector('.input-area, .chat-input, [class*="input"]');
    if (inputArea) {
        inputArea.click();
        return { found: true, clicked: true };
    }
    return { found: false };
})()
"""

FOCUS_SNIPPET = """
(function() {
    const textarea = document.querySelector('textarea');
    if (textarea) {
        textarea.focus();
        textarea.click();
        return { method: 'textarea', success: true };
    }
    const editable = document.querySelector('[contenteditable="true"]');
    if (editable) {
        editable.focus();
        editable.click();
        return { method: 'contenteditable', success: true };
    }
    document.body.dispatchEvent(new KeyboardEvent('keydown', {
        key: 'l',
        code: 'KeyL',
        ctrlKey: true,
        bubbles: true
    }));
    return { method: 'keyboard_shortcut', success: true };
})()
"""


def key_code(char: str) -> Optional[str]:
    """DOM `code` for a character, where one exists on a US layout."""
    if char.isascii() and char.isalpha():
        return f"Key{char.upper()}"
    if char.isascii() and char.isdigit():
        return f"Digit{char}"
    if char == " ":
        return "Space"
    return None


def char_key_events(char: str) -> tuple[dict[str, Any], dict[str, Any]]:
    down: dict[str, Any] = {"type": "keyDown", "text": char, "key": char}
    up: dict[str, Any] = {"type": "keyUp", "key": char}
    code = key_code(char)
    if code:
        down["code"] = code
        up["code"] = code
    return down, up


def enter_key_events() -> tuple[dict[str, Any], dict[str, Any]]:
    return {"type": "keyDown", **ENTER_KEY}, {"type": "keyUp", **ENTER_KEY}


class InputEngine:
    def __init__(self, channel: SessionChannel):
        self._channel = channel

    async def _press(self, events: tuple[dict[str, Any], dict[str, Any]]) -> None:
        for event in events:
            await self._channel.send("Input.dispatchKeyEvent", event)

    async def focus_for_typing(self) -> dict[str, Any]:
        value = await evaluate(self._channel, INPUT_FOCUS_SNIPPET)
        return value if isinstance(value, dict) else {"found": False}

    async def type_text(self, text: str) -> InjectResult:
        await self.focus_for_typing()
        await asyncio.sleep(FOCUS_SETTLE_S)
        for char in text:
            await self._press(char_key_events(char))
        return InjectResult(success=True, text=text)

    async def insert_and_submit(self, text: str) -> InjectResult:
        await self._channel.send("Input.insertText", {"text": text})
        await asyncio.sleep(SUBMIT_SETTLE_S)
        await self._press(enter_key_events())
        return InjectResult(success=True, text=text, submitted=True)

    async def focus(self) -> FocusResult:
        value = await evaluate(self._channel, FOCUS_SNIPPET)
        if not isinstance(value, dict):
            return FocusResult(success=False)
        return FocusResult.model_validate(value)

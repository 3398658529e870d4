"""
Command and extraction results handed to collaborators.
"""

from typing import Optional
from pydantic import BaseModel


class ConversationRecord(BaseModel):
    role: str  # "user" | "agent"
    content: str
    timestamp: str


class ChatMessages(BaseModel):
    messages: list[ConversationRecord] = []
    count: int = 0
    selector: Optional[str] = None
    note: str = "Best-effort DOM scrape; empty when the editor markup changes"


class PanelContent(BaseModel):
    found: bool = False
    selector: Optional[str] = None
    content: str = ""
    html: str = ""


class ConversationText(BaseModel):
    found: bool = False
    source: Optional[str] = None  # "panel" | "markdown"
    raw_text: str = ""
    lines: list[str] = []


class FocusResult(BaseModel):
    method: Optional[str] = None  # "textarea" | "contenteditable" | "keyboard_shortcut"
    success: bool = False


class InjectResult(BaseModel):
    success: bool
    text: str
    submitted: bool = False


class Availability(BaseModel):
    available: bool
    browser: Optional[str] = None
    error: Optional[str] = None

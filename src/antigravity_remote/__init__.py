"""
antigravity-remote: remote control for the Antigravity editor.

Drives a running editor over the Chrome DevTools Protocol: target
discovery, screenshots, synthetic input and chat scraping.
"""

from antigravity_remote.client import Antigravity, AsyncAntigravity
from antigravity_remote.errors import (
    AntigravityError,
    ConnectionFailed,
    DiscoveryUnavailable,
    NoControlAddress,
    NoEditorTarget,
    RemoteError,
    RequestTimeout,
    SessionClosed,
)
from antigravity_remote.models.conversation import Availability, ChatMessages, ConversationRecord
from antigravity_remote.models.target import Target
from antigravity_remote.transport.channel import SessionChannel

__version__ = "0.1.0"
__all__ = [
    "Antigravity",
    "AsyncAntigravity",
    "AntigravityError",
    "ConnectionFailed",
    "DiscoveryUnavailable",
    "NoControlAddress",
    "NoEditorTarget",
    "RemoteError",
    "RequestTimeout",
    "SessionClosed",
    "Availability",
    "ChatMessages",
    "ConversationRecord",
    "Target",
    "SessionChannel",
]

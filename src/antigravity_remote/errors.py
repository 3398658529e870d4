"""
Antigravity remote-control error types.
"""

from typing import Any, Optional


class AntigravityError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class DiscoveryUnavailable(AntigravityError):
    """The CDP discovery endpoint could not be reached."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("discovery_unavailable", message, details)


class NoEditorTarget(AntigravityError):
    def __init__(self, message: str = "No editor target found"):
        super().__init__("no_editor_target", message)


class NoControlAddress(AntigravityError):
    def __init__(self, message: str = "No WebSocket URL for target"):
        super().__init__("no_control_address", message)


class ConnectionFailed(AntigravityError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("connection_failed", message, details)


class RemoteError(AntigravityError):
    """The controlled process answered a request with a protocol error."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("remote_error", message, details)


class RequestTimeout(AntigravityError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("request_timeout", message, details)


class SessionClosed(AntigravityError):
    def __init__(self, message: str = "Session channel closed"):
        super().__init__("session_closed", message)

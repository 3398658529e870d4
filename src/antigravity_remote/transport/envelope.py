"""
Envelope construction and parsing for the CDP control channel.
"""

import json
from typing import Any, Optional

from pydantic import ValidationError

from antigravity_remote.models.protocol import CommandEnvelope, ResponseEnvelope


def build_request(request_id: int, method: str, params: Optional[dict[str, Any]] = None) -> str:
    """Build a request frame as a JSON string ready for the websocket."""
    envelope = CommandEnvelope(id=request_id, method=method, params=params or {})
    return json.dumps(envelope.model_dump())


def parse_response(raw: Any) -> Optional[ResponseEnvelope]:
    """Parse an inbound frame. Returns None if it is not a JSON object envelope."""
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    try:
        return ResponseEnvelope.model_validate(data)
    except ValidationError:
        return None

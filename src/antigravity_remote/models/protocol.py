"""
CDP wire envelopes.

Requests are {id, method, params}. Responses carry the same id with either
`result` or `error`. Frames without an id are protocol events.
"""

from typing import Any, Optional
from pydantic import BaseModel


class CommandEnvelope(BaseModel):
    id: int
    method: str
    params: dict[str, Any] = {}


class ProtocolError(BaseModel):
    code: Optional[int] = None
    message: str = ""
    data: Optional[Any] = None


class ResponseEnvelope(BaseModel):
    id: Optional[int] = None
    result: Optional[dict[str, Any]] = None
    error: Optional[ProtocolError] = None
    method: Optional[str] = None  # set on events only
    params: Optional[dict[str, Any]] = None

    @property
    def is_event(self) -> bool:
        return self.id is None

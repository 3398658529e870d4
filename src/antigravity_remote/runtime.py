"""
Runtime.evaluate helper shared by input, extraction and workspace lookup.
"""

import logging
from typing import Any

from antigravity_remote.transport.channel import SessionChannel

logger = logging.getLogger(__name__)


async def evaluate(channel: SessionChannel, expression: str) -> Any:
    """Evaluate an inspection snippet and return its result by value.

    A snippet that throws inside the page yields None; protocol and channel
    failures still raise.
    """
    response = await channel.send("Runtime.evaluate", {
        "expression": expression,
        "returnByValue": True,
    })
    details = response.get("exceptionDetails")
    if details:
        exception = details.get("exception") or {}
        logger.warning(
            "Inspection snippet threw: %s",
            exception.get("description") or details.get("text") or "unknown error",
        )
        return None
    return (response.get("result") or {}).get("value")

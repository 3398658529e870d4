"""
Extraction pipeline: structured chat records and raw panel dumps.

"Nothing found" is always an empty result. Only transport and protocol
failures raise.
"""

import logging
from typing import Any, Sequence

from antigravity_remote.extraction import snippets
from antigravity_remote.extraction.rules import (
    DEFAULT_RULES,
    MAX_RECORDS,
    ClassificationRule,
    accept,
    make_record,
)
from antigravity_remote.models.conversation import ChatMessages, ConversationText, PanelContent
from antigravity_remote.runtime import evaluate
from antigravity_remote.transport.channel import SessionChannel

logger = logging.getLogger(__name__)


def classify_groups(
    groups: Any,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
    limit: int = MAX_RECORDS,
) -> ChatMessages:
    """Turn per-selector candidates into records.

    Selectors are tried in order; the first one with any accepted text wins.
    """
    if not isinstance(groups, list):
        return ChatMessages()
    for group in groups:
        if not isinstance(group, dict):
            continue
        records = []
        for candidate in group.get("candidates") or []:
            if not isinstance(candidate, dict):
                continue
            text = candidate.get("text") or ""
            length = candidate.get("length")
            if not isinstance(length, int):
                length = None
            if not accept(text, rules, length):
                continue
            records.append(make_record(text, candidate.get("className") or ""))
        if records:
            logger.debug("Selector %s yielded %d messages", group.get("selector"), len(records))
            return ChatMessages(
                messages=records[-limit:],
                count=len(records),
                selector=group.get("selector"),
            )
    return ChatMessages()


class ExtractionPipeline:
    def __init__(self, channel: SessionChannel, rules: Sequence[ClassificationRule] = DEFAULT_RULES):
        self._channel = channel
        self._rules = rules

    async def chat_messages(self) -> ChatMessages:
        value = await evaluate(self._channel, snippets.chat_candidates_snippet())
        groups = value.get("groups") if isinstance(value, dict) else None
        return classify_groups(groups, self._rules)

    async def panel_content(self) -> PanelContent:
        value = await evaluate(self._channel, snippets.panel_content_snippet())
        if not isinstance(value, dict):
            return PanelContent()
        return PanelContent.model_validate(value)

    async def conversation_text(self) -> ConversationText:
        value = await evaluate(self._channel, snippets.CONVERSATION_TEXT_SNIPPET)
        if not isinstance(value, dict):
            return ConversationText()
        return ConversationText.model_validate(value)

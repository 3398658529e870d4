"""
Text classifier for scraped chat content.

The editor exposes no chat API, so conversational text is recovered from the
DOM and everything that looks like UI chrome is thrown away. The rule table
is ordered; the first matching rule names the rejection reason. This is a
heuristic filter, not a parser: when markup changes it lets less through
rather than inventing messages.
"""

import re
from datetime import datetime, timezone
from typing import Optional, Sequence

from antigravity_remote.models.conversation import ConversationRecord

MIN_TEXT_LENGTH = 20
MIN_WORDS = 4
MIN_PROSE_WORDS = 6
MIN_CANDIDATE_LENGTH = 31
MAX_CANDIDATE_LENGTH = 4999
MAX_CONTENT_LENGTH = 1500
MAX_RECORDS = 20

SENTENCE_PUNCTUATION = re.compile(r"[.!?]")
USER_CLASS_MARKERS = ("user", "human")


class ClassificationRule:
    __slots__ = ("pattern", "reason")

    def __init__(self, pattern: str, reason: str, flags: int = re.IGNORECASE):
        self.pattern = re.compile(pattern, flags)
        self.reason = reason

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def __repr__(self) -> str:
        return f"ClassificationRule({self.pattern.pattern!r}, reason={self.reason!r})"


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(r"^(gemini|claude|gpt|model|opus|sonnet|flash)", "model_name"),
    ClassificationRule(r"^(pro|low|high|medium|thinking)", "effort_label"),
    ClassificationRule(r"^(submit|cancel|dismiss|retry)", "button_label"),
    ClassificationRule(r"^(planning|execution|verification)", "mode_label"),
    ClassificationRule(r"^(agent|assistant|user)$", "role_label"),
    ClassificationRule(r"^\d+:\d+", "timestamp", flags=0),
    ClassificationRule(r"terminated due to error", "error_banner"),
    ClassificationRule(r"troubleshooting guide", "error_banner"),
    ClassificationRule(r"can plan before executing", "mode_hint"),
    ClassificationRule(r"deep research.*complex tasks", "mode_hint"),
    ClassificationRule(r"conversation mode", "mode_hint"),
    ClassificationRule(r"fast agent", "mode_hint"),
    ClassificationRule(r"\(thinking\)", "status"),
    ClassificationRule(r"ask anything", "input_hint"),
    ClassificationRule(r"add context", "input_hint"),
    ClassificationRule(r"workflows", "input_hint"),
    ClassificationRule(r"mentions", "input_hint"),
)


def word_count(text: str) -> int:
    return len(text.split())


def rejection_reason(text: str, rules: Sequence[ClassificationRule] = DEFAULT_RULES) -> Optional[str]:
    """Why `text` is not conversation, or None if it passes the blacklist."""
    trimmed = text.strip()
    if len(trimmed) < MIN_TEXT_LENGTH:
        return "too_short"
    if word_count(trimmed) < MIN_WORDS:
        return "too_few_words"
    for rule in rules:
        if rule.matches(trimmed):
            return rule.reason
    return None


def is_prose(text: str) -> bool:
    """Sentence punctuation and more than five words: prose, not a label."""
    return bool(SENTENCE_PUNCTUATION.search(text)) and word_count(text) >= MIN_PROSE_WORDS


def accept(
    text: str,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
    length: Optional[int] = None,
) -> bool:
    """`length` is the element's full text length when `text` was truncated."""
    trimmed = text.strip()
    if rejection_reason(trimmed, rules) is not None:
        return False
    if length is None:
        length = len(trimmed)
    if not MIN_CANDIDATE_LENGTH <= length <= MAX_CANDIDATE_LENGTH:
        return False
    return is_prose(trimmed)


def infer_role(class_name: str) -> str:
    lowered = (class_name or "").lower()
    if any(marker in lowered for marker in USER_CLASS_MARKERS):
        return "user"
    return "agent"


def make_record(text: str, class_name: str = "") -> ConversationRecord:
    return ConversationRecord(
        role=infer_role(class_name),
        content=text.strip()[:MAX_CONTENT_LENGTH],
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

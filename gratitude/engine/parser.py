"""
gratitude.engine.parser — Message parsing
==========================================

Extracts mentions, hashtags, recognition-emoji occurrences and the
``x<digits>`` multiplier from raw message text.  Pure: no Discord I/O,
no DB I/O.
"""

from __future__ import annotations

from gratitude.config import RecognitionSettings
from gratitude.constants import (
    MULTIPLIER_REGEX,
    TAG_REGEX,
    USER_MENTION_REGEX,
    recognize_emoji_regex,
)
from gratitude.engine.events import ParsedMessage

__all__ = ["MessageParser", "parse_message"]


class MessageParser:
    """Turns message text into a :class:`ParsedMessage`.

    Mentions keep their order of appearance and are not de-duplicated:
    mentioning someone twice gives them two receiver slots.
    """

    def __init__(self, settings: RecognitionSettings) -> None:
        self.settings = settings
        self._emoji_regex = recognize_emoji_regex(settings.recognize_emoji)

    def parse(self, text: str) -> ParsedMessage:
        return ParsedMessage(
            raw_text=text,
            tags=tuple(TAG_REGEX.findall(text)),
            mentioned_user_ids=tuple(USER_MENTION_REGEX.findall(text)),
            emoji_count=len(self._emoji_regex.findall(text)),
            multiplier=self.multiplier(text),
        )

    @staticmethod
    def multiplier(text: str) -> int:
        """First ``x<digits>`` in *text*, or 1 when there is none."""
        match = MULTIPLIER_REGEX.search(text)
        return int(match.group(1)) if match else 1

    def contains_recognition(self, text: str) -> bool:
        """True if *text* mentions the recognition emoji at all."""
        return self.settings.recognize_emoji in text


def parse_message(text: str, settings: RecognitionSettings) -> ParsedMessage:
    """Convenience wrapper for one-off parsing."""
    return MessageParser(settings).parse(text)

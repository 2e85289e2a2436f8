"""
gratitude.engine.events — Recognition value types
==================================================

Every inbound message or reaction is normalized into a
:class:`RecognitionRequest` before the pipeline validates and dispatches
it.  All types here are immutable and live only for the duration of one
event; nothing in this module is persisted.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

__all__ = [
    "AwardUnit",
    "ChatUser",
    "DispatchResult",
    "NotificationMessage",
    "ParsedMessage",
    "RecognitionRequest",
    "ValidationErrorKind",
    "ValidationOutcome",
]


class ValidationErrorKind(enum.StrEnum):
    """Business rules a recognition can fail, in evaluation order."""
    NO_RECIPIENTS = "NO_RECIPIENTS"
    SELF_RECOGNITION = "SELF_RECOGNITION"
    BOT_GIVER = "BOT_GIVER"
    GUEST_GIVER = "GUEST_GIVER"
    BOT_RECEIVER = "BOT_RECEIVER"
    GUEST_RECEIVER = "GUEST_RECEIVER"
    MESSAGE_TOO_SHORT = "MESSAGE_TOO_SHORT"
    DAILY_LIMIT_EXCEEDED = "DAILY_LIMIT_EXCEEDED"


@dataclass(frozen=True, slots=True)
class ChatUser:
    """Snapshot of a chat-platform user, fetched per request."""

    id: str
    timezone: str = "UTC"
    is_bot: bool = False
    is_restricted: bool = False  # guest / limited member


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    """Structured intent extracted from raw message text."""

    raw_text: str
    tags: tuple[str, ...] = ()
    mentioned_user_ids: tuple[str, ...] = ()
    emoji_count: int = 0
    multiplier: int = 1


@dataclass(frozen=True, slots=True)
class RecognitionRequest:
    """One giver recognizing zero or more receivers from one event."""

    giver: ChatUser
    receivers: tuple[ChatUser, ...]
    parsed: ParsedMessage
    channel_id: str


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Result of validation.  Empty ``reasons`` means the request is valid."""

    reasons: tuple[ValidationErrorKind, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.reasons


@dataclass(frozen=True, slots=True)
class AwardUnit:
    """A single indivisible recognition handed to the ledger."""

    giver_id: str
    receiver_id: str
    text: str
    channel_id: str
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of submitting one :class:`AwardUnit` to the ledger."""

    unit: AwardUnit
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class NotificationMessage:
    """Direct messages to deliver to one receiver, in order."""

    recipient_id: str
    messages: tuple[str, ...] = field(default_factory=tuple)

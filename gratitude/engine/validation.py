"""
gratitude.engine.validation — Recognition business rules
=========================================================

Evaluates every rule against a :class:`RecognitionRequest` and the giver's
remaining daily allowance.  Rules never short-circuit: the giver sees every
problem with their message at once, in the fixed order below.

Rule order:
  recipients → self → bot giver → guest giver → bot receiver
  → guest receiver → message length → daily limit
"""

from __future__ import annotations

import logging

from gratitude.config import RecognitionSettings
from gratitude.constants import GENERAL_EMOJI_REGEX, USER_MENTION_REGEX
from gratitude.engine.award import required_units
from gratitude.engine.events import (
    RecognitionRequest,
    ValidationErrorKind,
    ValidationOutcome,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ERROR_MESSAGES",
    "ValidationEngine",
    "describe_error",
    "describe_errors",
    "trimmed_length",
]


def trimmed_length(text: str) -> int:
    """Length of *text* once mentions and ``:shortcode:`` emoji are removed."""
    trimmed = USER_MENTION_REGEX.sub("", text)
    trimmed = GENERAL_EMOJI_REGEX.sub("", trimmed)
    return len(trimmed)


class ValidationEngine:
    """Checks a request against the recognition rules."""

    def __init__(self, settings: RecognitionSettings) -> None:
        self.settings = settings

    def validate(
        self, request: RecognitionRequest, remaining_allowance: int
    ) -> ValidationOutcome:
        """Return every failing rule for *request*, in rule order."""
        giver = request.giver
        receivers = request.receivers
        checks = [
            (ValidationErrorKind.NO_RECIPIENTS, len(receivers) == 0),
            (
                ValidationErrorKind.SELF_RECOGNITION,
                any(r.id == giver.id for r in receivers),
            ),
            (ValidationErrorKind.BOT_GIVER, giver.is_bot),
            (ValidationErrorKind.GUEST_GIVER, giver.is_restricted),
            (ValidationErrorKind.BOT_RECEIVER, any(r.is_bot for r in receivers)),
            (
                ValidationErrorKind.GUEST_RECEIVER,
                any(r.is_restricted for r in receivers),
            ),
            (
                ValidationErrorKind.MESSAGE_TOO_SHORT,
                trimmed_length(request.parsed.raw_text)
                < self.settings.minimum_message_length,
            ),
            (
                ValidationErrorKind.DAILY_LIMIT_EXCEEDED,
                required_units(request.parsed, len(receivers)) > remaining_allowance,
            ),
        ]
        reasons = tuple(kind for kind, failed in checks if failed)
        if reasons:
            logger.debug(
                "Recognition from %s failed %d rule(s): %s",
                giver.id, len(reasons), ", ".join(reasons),
            )
        return ValidationOutcome(reasons=reasons)


# ---------------------------------------------------------------------------
# User-facing error lines (formatted with the active RecognitionSettings)
# ---------------------------------------------------------------------------
ERROR_MESSAGES: dict[ValidationErrorKind, str] = {
    ValidationErrorKind.NO_RECIPIENTS: "- Mention who you want to recognize with @user",
    ValidationErrorKind.SELF_RECOGNITION: "- You can't recognize yourself",
    ValidationErrorKind.BOT_GIVER: "- Bots can't give recognition",
    ValidationErrorKind.GUEST_GIVER: "- Guest users can't give recognition",
    ValidationErrorKind.BOT_RECEIVER: "- You can't give recognition to bots",
    ValidationErrorKind.GUEST_RECEIVER: "- You can't give recognition to guest users",
    ValidationErrorKind.MESSAGE_TOO_SHORT: (
        "- Your message must be at least {minimum_message_length} characters"
    ),
    ValidationErrorKind.DAILY_LIMIT_EXCEEDED: (
        "- A maximum of {maximum} {recognize_emoji} can be sent per day"
    ),
}


def describe_error(kind: ValidationErrorKind, settings: RecognitionSettings) -> str:
    """User-facing line for a single failed rule."""
    return ERROR_MESSAGES[kind].format(
        minimum_message_length=settings.minimum_message_length,
        maximum=settings.maximum,
        recognize_emoji=settings.recognize_emoji,
    )


def describe_errors(
    reasons: tuple[ValidationErrorKind, ...] | list[ValidationErrorKind],
    settings: RecognitionSettings,
) -> str:
    """Newline-joined user-facing lines, in rule order."""
    return "\n".join(describe_error(kind, settings) for kind in reasons)

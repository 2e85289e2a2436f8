"""
gratitude.engine.notifications — Notification & reply text builders
====================================================================

All user-facing text lives here so the recognition service and cogs only
supply data, no wording concerns.
"""

from __future__ import annotations

from gratitude.config import RecognitionSettings
from gratitude.constants import channel_mention, mention
from gratitude.engine.events import (
    ChatUser,
    NotificationMessage,
    RecognitionRequest,
    ValidationErrorKind,
)
from gratitude.engine.validation import describe_errors

__all__ = ["NotificationComposer"]


class NotificationComposer:
    """Builds receiver notifications and giver replies."""

    def __init__(self, settings: RecognitionSettings) -> None:
        self.settings = settings

    def compose(
        self,
        receiver: ChatUser,
        request: RecognitionRequest,
        total_received_by_receiver: int,
    ) -> NotificationMessage:
        """Build the "you were recognized" DM(s) for *receiver*.

        When the receiver's lifetime total equals the emoji count just
        given, it is treated as their first recognition and the onboarding
        message is appended.
        """
        messages = [
            f"You just got recognized by {mention(request.giver.id)} in "
            f"{channel_mention(request.channel_id)} and your new balance is "
            f"`{total_received_by_receiver}`\n>>> {request.parsed.raw_text}"
        ]
        if total_received_by_receiver == request.parsed.emoji_count:
            messages.append(self.onboarding())
        return NotificationMessage(recipient_id=receiver.id, messages=tuple(messages))

    def onboarding(self) -> str:
        return (
            f"I noticed this is your first time receiving a "
            f"{self.settings.recognize_emoji}. Check out "
            f"[the wiki]({self.settings.redeem_url}) to see what they can be "
            "used for, or try running `/gratitude help` for more information "
            "about me."
        )

    # -------------------------------------------------------------------
    # Replies to the giver
    # -------------------------------------------------------------------
    def confirmation(self, remaining: int) -> str:
        return (
            f"Your {self.settings.recognize_emoji} has been sent. "
            f"You have `{remaining}` left to give today."
        )

    def validation_failure(
        self, reasons: tuple[ValidationErrorKind, ...]
    ) -> str:
        return "\n".join([
            f"Sending {self.settings.recognize_emoji} failed with the following error(s):",
            describe_errors(reasons, self.settings),
        ])

    @staticmethod
    def lookup_failure(error_text: str) -> str:
        return (
            "Something went wrong while sending recognition. When retrieving "
            "user information, the chat platform responded with the following "
            f"error: {error_text}\nRecognition has not been sent."
        )

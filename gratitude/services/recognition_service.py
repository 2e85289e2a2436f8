"""
gratitude.services.recognition_service — Recognition flow
==========================================================

Shared service called by the message and reaction cogs.

Pipeline:
1. Parse the message text and look up the giver and every mentioned user
2. Read the giver's remaining daily allowance
3. Validate (all rules, all reasons reported together)
4. Dispatch one ledger record per unit per receiver
5. DM each receiver, in order, and confirm to the giver

Lookup and validation failures are answered with an ephemeral reply and
end the flow.  Dispatch and notification failures propagate to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from gratitude.config import RecognitionSettings
from gratitude.engine.events import (
    ChatUser,
    DispatchResult,
    RecognitionRequest,
)
from gratitude.engine.notifications import NotificationComposer
from gratitude.engine.parser import MessageParser
from gratitude.engine.validation import ValidationEngine
from gratitude.services.dispatcher import RecognitionDispatcher
from gratitude.services.errors import NotificationError, UserLookupError
from gratitude.services.ports import ChatPlatform, RecognitionLedger

logger = logging.getLogger(__name__)


class RecognitionService:
    """Runs one inbound recognition event through the full pipeline."""

    def __init__(
        self,
        platform: ChatPlatform,
        ledger: RecognitionLedger,
        settings: RecognitionSettings,
    ) -> None:
        self.platform = platform
        self.ledger = ledger
        self.settings = settings
        self.parser = MessageParser(settings)
        self.validator = ValidationEngine(settings)
        self.dispatcher = RecognitionDispatcher(ledger)
        self.composer = NotificationComposer(settings)

    # -------------------------------------------------------------------
    # Event gates
    # -------------------------------------------------------------------
    def is_recognition_message(self, text: str) -> bool:
        return self.parser.contains_recognition(text)

    def is_recognition_reaction(self, emoji_name: str) -> bool:
        return self.settings.reaction_emoji_name in emoji_name

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    async def build_request(
        self, giver_id: str, text: str, channel_id: str
    ) -> RecognitionRequest:
        """Parse *text* and snapshot every participant.

        Raises ``UserLookupError`` if any lookup fails.
        """
        parsed = self.parser.parse(text)
        giver = await self.platform.fetch_user(giver_id)
        receivers: list[ChatUser] = await asyncio.gather(
            *(self.platform.fetch_user(uid) for uid in parsed.mentioned_user_ids)
        )
        return RecognitionRequest(
            giver=giver,
            receivers=tuple(receivers),
            parsed=parsed,
            channel_id=channel_id,
        )

    # -------------------------------------------------------------------
    # Public API — called by cogs
    # -------------------------------------------------------------------
    async def handle(
        self,
        event: Any,
        *,
        giver_id: str,
        text: str,
        channel_id: str,
    ) -> list[DispatchResult]:
        """Validate and send the recognition in *text* from *giver_id*.

        *event* is the platform's inbound event, passed back untouched when
        replying.  Returns the dispatch results, or an empty list when the
        recognition was rejected.
        """
        logger.info(
            "Heard reference to %s from %s in %s",
            self.settings.recognize_emoji, giver_id, channel_id,
        )

        try:
            request = await self.build_request(giver_id, text, channel_id)
        except UserLookupError as exc:
            logger.error(
                "User lookup failed for recognition from %s: %s", giver_id, exc,
            )
            await self.platform.deliver_ephemeral_reply(
                event, self.composer.lookup_failure(str(exc))
            )
            return []

        giver = request.giver
        remaining = await self.ledger.remaining_daily_allowance(giver.id, giver.timezone)
        outcome = self.validator.validate(request, remaining)
        if not outcome.is_valid:
            logger.info(
                "Rejected recognition from %s: %s",
                giver.id, ", ".join(outcome.reasons),
            )
            await self.platform.deliver_ephemeral_reply(
                event, self.composer.validation_failure(outcome.reasons)
            )
            return []

        results = await self.dispatcher.dispatch(request)

        remaining = await self.ledger.remaining_daily_allowance(giver.id, giver.timezone)
        outcomes = await asyncio.gather(
            self.notify_receivers(request),
            self.platform.deliver_ephemeral_reply(
                event, self.composer.confirmation(remaining)
            ),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return results

    async def notify_receivers(self, request: RecognitionRequest) -> None:
        """DM each receiver in mention order.

        A failure for one receiver does not stop the others; the first
        failure is raised once every receiver has been attempted.
        """
        errors: list[NotificationError] = []
        for receiver in request.receivers:
            try:
                total = await self.ledger.count_recognitions_received(receiver.id)
                notification = self.composer.compose(receiver, request, total)
                # The onboarding DM only follows a delivered notification.
                for text in notification.messages:
                    await self.platform.deliver_direct_message(receiver.id, text)
            except Exception as exc:
                logger.exception("Failed to notify %s of recognition", receiver.id)
                errors.append(NotificationError(receiver.id, exc))

        if errors:
            raise errors[0]

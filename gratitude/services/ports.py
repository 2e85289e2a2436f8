"""
gratitude.services.ports — Collaborator interfaces
===================================================

The recognition service talks to the outside world only through these two
protocols.  The bot wires in :class:`~gratitude.bot.platform.DiscordPlatform`
and :class:`~gratitude.services.ledger.SqlRecognitionLedger`; tests wire in
mocks.
"""

from __future__ import annotations

from typing import Any, Protocol

from gratitude.engine.events import ChatUser


class ChatPlatform(Protocol):
    """Chat platform operations the recognition flow needs."""

    async def fetch_user(self, user_id: str) -> ChatUser:
        """Snapshot *user_id*.  Raises ``UserLookupError`` on failure."""
        ...

    async def deliver_ephemeral_reply(self, event: Any, text: str) -> None:
        """Reply privately to whoever triggered *event*."""
        ...

    async def deliver_direct_message(self, user_id: str, text: str) -> None:
        ...


class RecognitionLedger(Protocol):
    """Persistence for the daily allowance and the recognition records."""

    async def remaining_daily_allowance(self, giver_id: str, timezone: str) -> int:
        ...

    async def record_recognition(
        self,
        giver_id: str,
        receiver_id: str,
        text: str,
        channel_id: str,
        tags: tuple[str, ...],
    ) -> None:
        """Persist one unit.  Raises ``LedgerWriteError`` on failure."""
        ...

    async def count_recognitions_received(self, user_id: str) -> int:
        ...

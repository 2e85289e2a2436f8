"""
gratitude.services.ledger — Recognition ledger & daily allowance
=================================================================

SQLAlchemy-backed implementation of :class:`RecognitionLedger`.

Each recognition unit is one row in ``recognitions``.  A giver's daily
allowance is not stored: it is ``maximum`` minus the units they have given
since local midnight in their own timezone.

The module-level functions are synchronous and take an ``Engine``; the
:class:`SqlRecognitionLedger` methods run them through :func:`run_db`.

.. note::

    The read (allowance) and the writes (units) are separate transactions.
    Two requests from the same giver racing each other can both pass
    validation; nothing here serializes them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from gratitude.database.engine import get_session, run_db
from gratitude.database.models import Recognition, UserSettings
from gratitude.services.errors import LedgerWriteError

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from gratitude.config import RecognitionSettings

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def resolve_timezone(name: str | None, default: str = "UTC") -> ZoneInfo:
    """Return the zone for *name*, falling back to *default* if unknown."""
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r — falling back to %s", name, default)
    return ZoneInfo(default)


def start_of_local_day(now: datetime, tz: ZoneInfo) -> datetime:
    """UTC instant of the most recent local midnight in *tz*."""
    local = now.astimezone(tz)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(UTC)


# ---------------------------------------------------------------------------
# Sync helpers (run via run_db)
# ---------------------------------------------------------------------------
def count_given_since(engine: Engine, giver_id: str, since: datetime) -> int:
    with get_session(engine) as session:
        return session.scalar(
            select(func.count(Recognition.id)).where(
                Recognition.giver_id == giver_id,
                Recognition.created_at >= since,
            )
        ) or 0


def count_received(engine: Engine, user_id: str) -> int:
    with get_session(engine) as session:
        return session.scalar(
            select(func.count(Recognition.id)).where(
                Recognition.receiver_id == user_id
            )
        ) or 0


def insert_recognition(
    engine: Engine,
    *,
    giver_id: str,
    receiver_id: str,
    text: str,
    channel_id: str,
    tags: tuple[str, ...] | list[str],
    created_at: datetime,
) -> None:
    """Append one recognition row.  Raises ``LedgerWriteError`` on DB failure."""
    try:
        with get_session(engine) as session:
            session.add(Recognition(
                giver_id=giver_id,
                receiver_id=receiver_id,
                message=text,
                channel_id=channel_id,
                tags=list(tags),
                created_at=created_at,
            ))
    except SQLAlchemyError as exc:
        raise LedgerWriteError(str(exc)) from exc


def get_user_timezone(engine: Engine, user_id: str) -> str | None:
    with get_session(engine) as session:
        row = session.get(UserSettings, user_id)
        return row.timezone if row else None


def set_user_timezone(engine: Engine, user_id: str, timezone: str) -> None:
    with get_session(engine) as session:
        row = session.get(UserSettings, user_id)
        if row is None:
            session.add(UserSettings(user_id=user_id, timezone=timezone))
        else:
            row.timezone = timezone


# ---------------------------------------------------------------------------
# Async ledger
# ---------------------------------------------------------------------------
class SqlRecognitionLedger:
    """:class:`RecognitionLedger` backed by the ``recognitions`` table."""

    def __init__(
        self,
        engine: Engine,
        settings: RecognitionSettings,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.engine = engine
        self.settings = settings
        self._clock = clock

    async def remaining_daily_allowance(self, giver_id: str, timezone: str) -> int:
        tz = resolve_timezone(timezone, self.settings.default_timezone)
        since = start_of_local_day(self._clock(), tz)
        given = await run_db(count_given_since, self.engine, giver_id, since)
        return max(self.settings.maximum - given, 0)

    async def record_recognition(
        self,
        giver_id: str,
        receiver_id: str,
        text: str,
        channel_id: str,
        tags: tuple[str, ...],
    ) -> None:
        await run_db(
            insert_recognition,
            self.engine,
            giver_id=giver_id,
            receiver_id=receiver_id,
            text=text,
            channel_id=channel_id,
            tags=tags,
            created_at=self._clock(),
        )

    async def count_recognitions_received(self, user_id: str) -> int:
        return await run_db(count_received, self.engine, user_id)

    async def user_timezone(self, user_id: str) -> str:
        stored = await run_db(get_user_timezone, self.engine, user_id)
        return stored or self.settings.default_timezone

    async def set_user_timezone(self, user_id: str, timezone: str) -> None:
        await run_db(set_user_timezone, self.engine, user_id, timezone)

"""
gratitude.services.dispatcher — Recognition fan-out
====================================================

Expands a validated request into award units and submits every unit to
the ledger concurrently.  Waits for all submissions to settle before
reporting; units already written are not rolled back when a sibling
fails.
"""

from __future__ import annotations

import asyncio
import logging

from gratitude.engine.award import expand_units
from gratitude.engine.events import AwardUnit, DispatchResult, RecognitionRequest
from gratitude.services.errors import DispatchError
from gratitude.services.ports import RecognitionLedger

logger = logging.getLogger(__name__)


class RecognitionDispatcher:
    """Persists one ledger record per award unit."""

    def __init__(self, ledger: RecognitionLedger) -> None:
        self.ledger = ledger

    async def _submit(self, unit: AwardUnit) -> None:
        await self.ledger.record_recognition(
            unit.giver_id,
            unit.receiver_id,
            unit.text,
            unit.channel_id,
            unit.tags,
        )

    async def dispatch(self, request: RecognitionRequest) -> list[DispatchResult]:
        """Submit every unit of *request*.

        Raises
        ------
        DispatchError
            If any unit failed, after all submissions have settled.
        """
        units = expand_units(request)
        outcomes = await asyncio.gather(
            *(self._submit(unit) for unit in units),
            return_exceptions=True,
        )
        results = [
            DispatchResult(
                unit=unit,
                error=outcome if isinstance(outcome, BaseException) else None,
            )
            for unit, outcome in zip(units, outcomes)
        ]

        failed = [r for r in results if not r.ok]
        if failed:
            logger.error(
                "%d of %d unit(s) from %s failed to persist; %d already written",
                len(failed), len(results), request.giver.id,
                len(results) - len(failed),
            )
            raise DispatchError(results)

        logger.info(
            "Recorded %d unit(s) from %s to %d receiver(s)",
            len(results), request.giver.id, len(request.receivers),
        )
        return results

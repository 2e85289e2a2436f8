"""
gratitude.engine.award — Award unit calculation
================================================

How many recognition units a request costs the giver, and the expansion
of a request into the individual :class:`AwardUnit` records the ledger
stores.
"""

from __future__ import annotations

from gratitude.engine.events import AwardUnit, ParsedMessage, RecognitionRequest

__all__ = ["expand_units", "required_units", "units_per_receiver"]


def units_per_receiver(parsed: ParsedMessage) -> int:
    """Units each mentioned receiver gets: ``emoji_count × multiplier``."""
    return parsed.emoji_count * parsed.multiplier


def required_units(parsed: ParsedMessage, receiver_count: int) -> int:
    """Total units the giver spends: ``receiver_count × emoji_count × multiplier``."""
    return receiver_count * units_per_receiver(parsed)


def expand_units(request: RecognitionRequest) -> list[AwardUnit]:
    """One :class:`AwardUnit` per unit per receiver, receivers in mention order."""
    per_receiver = units_per_receiver(request.parsed)
    units: list[AwardUnit] = []
    for receiver in request.receivers:
        for _ in range(per_receiver):
            units.append(AwardUnit(
                giver_id=request.giver.id,
                receiver_id=receiver.id,
                text=request.parsed.raw_text,
                channel_id=request.channel_id,
                tags=request.parsed.tags,
            ))
    return units

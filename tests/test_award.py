"""
tests/test_award.py — Award Calculator Tests
=============================================
"""

from __future__ import annotations

from gratitude.engine.award import expand_units, required_units, units_per_receiver
from gratitude.engine.events import ChatUser, ParsedMessage, RecognitionRequest


def _parsed(emoji_count: int = 1, multiplier: int = 1) -> ParsedMessage:
    return ParsedMessage(
        raw_text="thanks",
        tags=("ops",),
        emoji_count=emoji_count,
        multiplier=multiplier,
    )


class TestRequiredUnits:
    def test_product(self):
        assert required_units(_parsed(emoji_count=2, multiplier=3), 4) == 24

    def test_zero_receivers(self):
        assert required_units(_parsed(emoji_count=2, multiplier=3), 0) == 0

    def test_zero_emoji(self):
        assert required_units(_parsed(emoji_count=0, multiplier=5), 3) == 0

    def test_units_per_receiver(self):
        assert units_per_receiver(_parsed(emoji_count=2, multiplier=2)) == 4


class TestExpandUnits:
    def test_units_per_receiver_in_mention_order(self):
        request = RecognitionRequest(
            giver=ChatUser(id="G"),
            receivers=(ChatUser(id="A"), ChatUser(id="B")),
            parsed=_parsed(emoji_count=1, multiplier=2),
            channel_id="C1",
        )
        units = expand_units(request)
        assert [u.receiver_id for u in units] == ["A", "A", "B", "B"]
        assert all(u.giver_id == "G" for u in units)
        assert all(u.channel_id == "C1" and u.tags == ("ops",) for u in units)

    def test_no_receivers_no_units(self):
        request = RecognitionRequest(
            giver=ChatUser(id="G"),
            receivers=(),
            parsed=_parsed(),
            channel_id="C1",
        )
        assert expand_units(request) == []

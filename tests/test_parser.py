"""
tests/test_parser.py — Message Parser Tests
============================================

Mentions, tags, emoji counting and the x<digits> multiplier.
"""

from __future__ import annotations

from gratitude.engine.parser import MessageParser, parse_message
from tests.conftest import EMOJI


class TestMentions:
    def test_mentions_in_order(self, settings):
        parsed = parse_message(f"<@U2> and <@U1> nice work {EMOJI}", settings)
        assert parsed.mentioned_user_ids == ("U2", "U1")

    def test_duplicate_mentions_preserved(self, settings):
        parsed = parse_message(f"<@U1> <@U3> <@U1> {EMOJI}", settings)
        assert parsed.mentioned_user_ids == ("U1", "U3", "U1")

    def test_nickname_mention_form(self, settings):
        parsed = parse_message(f"<@!123456> thanks {EMOJI}", settings)
        assert parsed.mentioned_user_ids == ("123456",)

    def test_no_mentions(self, settings):
        assert parse_message("just text", settings).mentioned_user_ids == ()


class TestTags:
    def test_tags_without_hash(self, settings):
        parsed = parse_message(f"<@U1> {EMOJI} #teamwork #ops", settings)
        assert parsed.tags == ("teamwork", "ops")

    def test_duplicate_tags_kept(self, settings):
        parsed = parse_message("#a #b #a", settings)
        assert parsed.tags == ("a", "b", "a")


class TestEmojiCount:
    def test_counts_every_occurrence(self, settings):
        parsed = parse_message(f"<@U1> {EMOJI}{EMOJI} and {EMOJI}", settings)
        assert parsed.emoji_count == 3

    def test_other_emoji_not_counted(self, settings):
        parsed = parse_message("<@U1> :tada: :smile:", settings)
        assert parsed.emoji_count == 0


class TestMultiplier:
    def test_default_is_one(self, settings):
        assert parse_message(f"<@U1> {EMOJI}", settings).multiplier == 1

    def test_x3(self, settings):
        assert parse_message(f"<@U1> {EMOJI} x3", settings).multiplier == 3

    def test_first_match_only(self, settings):
        assert parse_message(f"<@U1> {EMOJI} x2 then x7", settings).multiplier == 2

    def test_multi_digit(self):
        assert MessageParser.multiplier("x12") == 12


class TestParserProperties:
    def test_idempotent(self, settings):
        parser = MessageParser(settings)
        text = f"<@U1> <@U2> thanks! {EMOJI} x2 #help"
        assert parser.parse(text) == parser.parse(text)

    def test_raw_text_kept(self, settings):
        text = f"<@U1> {EMOJI}"
        assert parse_message(text, settings).raw_text == text

    def test_contains_recognition(self, settings):
        parser = MessageParser(settings)
        assert parser.contains_recognition(f"hi {EMOJI}")
        assert not parser.contains_recognition("hi :tada:")

"""
gratitude.constants — Shared Patterns & Helpers
================================================

Single source of truth for the text patterns the recognition pipeline
matches against.  Import from here instead of re-declaring regexes in the
parser, the validator, and the cogs.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Message text patterns
# ---------------------------------------------------------------------------
# <@123> and the nickname form <@!123>
USER_MENTION_REGEX = re.compile(r"<@!?([a-zA-Z0-9]+)>")
TAG_REGEX = re.compile(r"#(\S+)")
# Discord custom emoji <:name:id> / <a:name:id>, then bare :shortcode:.
# Stripped before the minimum-length check; clock times like 12:30:45 survive.
GENERAL_EMOJI_REGEX = re.compile(
    r"<a?:[a-zA-Z0-9_]+:[0-9]+>|(?<!\d):[a-zA-Z0-9_'-]+:(?!\d)"
)
MULTIPLIER_REGEX = re.compile(r"x([0-9]+)")


def recognize_emoji_regex(token: str) -> re.Pattern[str]:
    """Compile a pattern matching the literal recognition token."""
    return re.compile(re.escape(token))


def mention(user_id: str) -> str:
    """Render a user mention."""
    return f"<@{user_id}>"


def channel_mention(channel_id: str) -> str:
    """Render a channel mention."""
    return f"<#{channel_id}>"

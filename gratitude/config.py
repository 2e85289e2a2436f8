"""
gratitude.config — YAML Configuration Loader
=============================================

**Why this file exists:**
This module reads ``config.yaml`` for the bot's identity and the
recognition tuning values (which emoji counts as recognition, how many can
be given per day, how long a message must be).  Secrets (``DISCORD_TOKEN``,
``DATABASE_URL``) live in ``.env`` and are never read here.

The recognition values are grouped in :class:`RecognitionSettings` and
handed explicitly to the engine components at construction time, so the
parser and validator never reach for global state.

Usage::

    from gratitude.config import load_config

    cfg = load_config()                       # reads ./config.yaml by default
    print(cfg.recognition.recognize_emoji)    # ":fistbump:"
    print(cfg.recognition.maximum)            # 5
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_RECOGNIZE_EMOJI = ":fistbump:"
DEFAULT_MINIMUM_MESSAGE_LENGTH = 20
DEFAULT_MAXIMUM = 5
DEFAULT_TIMEZONE = "UTC"
DEFAULT_REDEEM_URL = "https://example.com/wiki/redeeming-recognition"


# ---------------------------------------------------------------------------
# Recognition tuning — consumed by the engine
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class RecognitionSettings:
    """Tuning values for the recognition pipeline.

    ``recognize_emoji`` is the literal token counted in message text;
    ``reaction_emoji`` is the token whose name marks a retroactive
    recognition via reaction.
    """

    recognize_emoji: str = DEFAULT_RECOGNIZE_EMOJI
    reaction_emoji: str = DEFAULT_RECOGNIZE_EMOJI
    minimum_message_length: int = DEFAULT_MINIMUM_MESSAGE_LENGTH
    maximum: int = DEFAULT_MAXIMUM  # units a giver may hand out per local day
    default_timezone: str = DEFAULT_TIMEZONE
    redeem_url: str = DEFAULT_REDEEM_URL

    @property
    def reaction_emoji_name(self) -> str:
        """Reaction token without its surrounding colons."""
        return self.reaction_emoji.strip(":")


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class GratitudeConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Identity
    community_name: str

    # Discord
    bot_prefix: str
    guild_id: int  # Primary guild snowflake (member lookups are scoped to it)

    recognition: RecognitionSettings = field(default_factory=RecognitionSettings)

    # Optional
    guest_role_id: int | None = None  # Members holding this role count as guests


def _load_recognition(raw: dict | None) -> RecognitionSettings:
    raw = raw or {}
    recognize_emoji = raw.get("recognize_emoji", DEFAULT_RECOGNIZE_EMOJI)
    return RecognitionSettings(
        recognize_emoji=recognize_emoji,
        reaction_emoji=raw.get("reaction_emoji", recognize_emoji),
        minimum_message_length=int(
            raw.get("minimum_message_length", DEFAULT_MINIMUM_MESSAGE_LENGTH)
        ),
        maximum=int(raw.get("maximum", DEFAULT_MAXIMUM)),
        default_timezone=raw.get("default_timezone", DEFAULT_TIMEZONE),
        redeem_url=raw.get("redeem_url", DEFAULT_REDEEM_URL),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> GratitudeConfig:
    """Read *path* and return a :class:`GratitudeConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    KeyError
        If a required key is missing from the YAML file.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    return GratitudeConfig(
        community_name=raw["community_name"],
        bot_prefix=raw.get("bot_prefix", "!"),
        guild_id=int(raw["guild_id"]),
        recognition=_load_recognition(raw.get("recognition")),
        guest_role_id=(
            int(raw["guest_role_id"]) if raw.get("guest_role_id") else None
        ),
    )

"""
gratitude.bot.core — Bot Instance & Cog Loader
===============================================

Defines :class:`GratitudeBot`, a ``commands.Bot`` subclass that:

1. Stores the shared config (``bot.cfg``) and DB engine (``bot.engine``).
2. Builds the recognition ledger, the Discord platform adapter and the
   :class:`RecognitionService` every cog delegates to.
3. Loads every cog listed in :data:`EXTENSIONS`.
4. Syncs the slash-command tree on startup (guild-scoped for dev, global
   for production — controlled by the ``DEV_GUILD_ID`` env var).
"""

from __future__ import annotations

import logging
import os

import discord
from discord.ext import commands
from sqlalchemy import Engine

from gratitude.bot.platform import DiscordPlatform
from gratitude.config import GratitudeConfig
from gratitude.services.ledger import SqlRecognitionLedger
from gratitude.services.recognition_service import RecognitionService

logger = logging.getLogger(__name__)

# Cog modules to load on startup.
EXTENSIONS: list[str] = [
    "gratitude.bot.cogs.recognition",
    "gratitude.bot.cogs.meta",
]


class GratitudeBot(commands.Bot):
    """Custom Bot subclass that carries project-wide state.

    Parameters
    ----------
    cfg:
        The parsed :class:`GratitudeConfig` from ``config.yaml``.
    engine:
        A SQLAlchemy :class:`Engine` for the recognition ledger.
    """

    def __init__(self, cfg: GratitudeConfig, engine: Engine) -> None:
        # MESSAGE_CONTENT is privileged: needed to read recognition text.
        # GUILD_MEMBERS is privileged: needed for bot/guest lookups.
        intents = discord.Intents.default()
        intents.message_content = True
        intents.members = True
        intents.presences = False

        super().__init__(
            command_prefix=cfg.bot_prefix,
            intents=intents,
            description=f"{cfg.community_name} — peer recognition",
        )

        self.cfg = cfg
        self.engine = engine
        self.ledger = SqlRecognitionLedger(engine, cfg.recognition)
        self.platform = DiscordPlatform(self)
        self.recognition = RecognitionService(
            self.platform, self.ledger, cfg.recognition
        )

    # -----------------------------------------------------------------------
    # Lifecycle hooks
    # -----------------------------------------------------------------------
    async def setup_hook(self) -> None:
        """Load all cog extensions; one broken cog shouldn't stop the bot."""
        for ext in EXTENSIONS:
            try:
                await self.load_extension(ext)
                logger.info("Loaded extension: %s", ext)
            except Exception as exc:
                logger.error("Failed to load extension %s: %s", ext, exc)

    async def on_ready(self) -> None:
        """Fired when the bot has connected and the cache is populated."""
        assert self.user is not None  # guaranteed after on_ready
        logger.info("Logged in as %s (ID: %s)", self.user.name, self.user.id)

        dev_guild_id = os.getenv("DEV_GUILD_ID")
        if dev_guild_id:
            guild = discord.Object(id=int(dev_guild_id))
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.info("Synced %d commands to dev guild %s", len(synced), dev_guild_id)
        else:
            synced = await self.tree.sync()
            logger.info("Synced %d commands globally", len(synced))

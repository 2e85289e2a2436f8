"""
gratitude.bot.cogs.recognition — Recognition by message and by reaction
========================================================================

Listens for:
- on_message — a message containing the recognition emoji is a
  recognition from its author to everyone it mentions.
- on_raw_reaction_add — reacting with the reaction emoji to a message
  that contains the recognition emoji re-sends that recognition from the
  reactor.

Uses raw reaction events to avoid cache misses on old messages.
All validation, persistence and notification is delegated to
:class:`~gratitude.services.recognition_service.RecognitionService`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

if TYPE_CHECKING:
    from gratitude.bot.core import GratitudeBot

logger = logging.getLogger(__name__)


class Recognition(commands.Cog, name="Recognition"):
    """Turns recognition messages and reactions into awards."""

    def __init__(self, bot: GratitudeBot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        try:
            await self._handle_message(message)
        except Exception:
            logger.exception(
                "Error processing recognition message %s from user %s",
                message.id, message.author.id,
            )

    async def _handle_message(self, message: discord.Message) -> None:
        """Inner message handler (separated for error isolation)."""

        # Gate: never react to our own DMs and replies
        if self.bot.user is not None and message.author.id == self.bot.user.id:
            return

        # Gate: guild messages only
        if message.guild is None:
            return

        service = self.bot.recognition
        if not service.is_recognition_message(message.content):
            return

        await service.handle(
            message,
            giver_id=str(message.author.id),
            text=message.content,
            channel_id=str(message.channel.id),
        )

    @commands.Cog.listener()
    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        """Fire when any reaction is added, even on uncached messages."""
        try:
            await self._handle_reaction(payload)
        except Exception:
            logger.exception(
                "Error processing recognition reaction on message %s from user %s",
                payload.message_id, payload.user_id,
            )

    async def _handle_reaction(self, payload: discord.RawReactionActionEvent) -> None:
        service = self.bot.recognition

        if payload.guild_id is None:
            return
        if self.bot.user is not None and payload.user_id == self.bot.user.id:
            return
        if not service.is_recognition_reaction(payload.emoji.name or ""):
            return

        logger.info(
            "Saw a reaction containing %s from user %s on message %s",
            service.settings.reaction_emoji, payload.user_id, payload.message_id,
        )

        channel = self.bot.get_channel(payload.channel_id)
        try:
            if channel is None:
                channel = await self.bot.fetch_channel(payload.channel_id)
            allowed = (discord.TextChannel, discord.Thread)
            if not isinstance(channel, allowed):
                return
            reacted_to = await channel.fetch_message(payload.message_id)
        except (discord.NotFound, discord.Forbidden, discord.HTTPException):
            logger.warning(
                "Could not fetch message %s in channel %s",
                payload.message_id, payload.channel_id,
            )
            return

        if not service.is_recognition_message(reacted_to.content):
            return

        await service.handle(
            payload,
            giver_id=str(payload.user_id),
            text=reacted_to.content,
            channel_id=str(payload.channel_id),
        )


async def setup(bot: GratitudeBot) -> None:
    await bot.add_cog(Recognition(bot))

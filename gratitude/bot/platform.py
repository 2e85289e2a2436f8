"""
gratitude.bot.platform — Discord implementation of ChatPlatform
================================================================

Resolves user snapshots from the primary guild and delivers replies.

Discord has no ephemeral reply to a plain message, so "ephemeral" replies
go to the triggering user's DMs.  If their DMs are closed the reply is
posted in the channel and deleted after a short delay.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from gratitude.constants import mention
from gratitude.engine.events import ChatUser
from gratitude.services.errors import UserLookupError

if TYPE_CHECKING:
    from gratitude.bot.core import GratitudeBot

logger = logging.getLogger(__name__)

# Seconds before an in-channel fallback reply is removed
FALLBACK_REPLY_TTL = 30


class DiscordPlatform:
    """:class:`~gratitude.services.ports.ChatPlatform` over discord.py."""

    def __init__(self, bot: GratitudeBot) -> None:
        self.bot = bot

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    async def _fetch_member(self, user_id: str) -> discord.Member:
        guild = self.bot.get_guild(self.bot.cfg.guild_id)
        if guild is None:
            raise UserLookupError("guild_not_available")
        try:
            snowflake = int(user_id)
        except ValueError:
            raise UserLookupError("user_not_found") from None

        member = guild.get_member(snowflake)
        if member is not None:
            return member
        try:
            return await guild.fetch_member(snowflake)
        except discord.NotFound:
            raise UserLookupError("user_not_found") from None
        except discord.HTTPException as exc:
            raise UserLookupError(exc.text or str(exc)) from exc

    def _is_guest(self, member: discord.Member) -> bool:
        guest_role_id = self.bot.cfg.guest_role_id
        if guest_role_id is None:
            return False
        return any(role.id == guest_role_id for role in member.roles)

    async def fetch_user(self, user_id: str) -> ChatUser:
        member = await self._fetch_member(user_id)
        timezone = await self.bot.ledger.user_timezone(user_id)
        return ChatUser(
            id=str(member.id),
            timezone=timezone,
            is_bot=member.bot,
            is_restricted=self._is_guest(member),
        )

    # -------------------------------------------------------------------
    # Delivery
    # -------------------------------------------------------------------
    async def deliver_direct_message(self, user_id: str, text: str) -> None:
        user = self.bot.get_user(int(user_id)) or await self.bot.fetch_user(int(user_id))
        await user.send(text)

    async def deliver_ephemeral_reply(self, event: object, text: str) -> None:
        """Reply privately to the author of a message or a reaction."""
        if isinstance(event, discord.Message):
            user_id = event.author.id
            channel = event.channel
        else:
            user_id = event.user_id  # type: ignore[attr-defined]
            channel = self.bot.get_channel(event.channel_id)  # type: ignore[attr-defined]

        try:
            await self.deliver_direct_message(str(user_id), text)
        except discord.Forbidden:
            if channel is None or not hasattr(channel, "send"):
                raise
            logger.info("DMs closed for %s — replying in channel instead", user_id)
            await channel.send(
                f"{mention(str(user_id))} {text}", delete_after=FALLBACK_REPLY_TTL
            )

"""
gratitude.bot.cogs.meta — Self-service commands
================================================

Hybrid command group ``/gratitude``:
- balance  — how many you can still give today, and how many you've received
- timezone — set the timezone your daily allowance resets in
- help     — how to give recognition
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import discord
from discord import app_commands
from discord.ext import commands

if TYPE_CHECKING:
    from gratitude.bot.core import GratitudeBot


class Meta(commands.Cog, name="Meta"):
    """Balance, timezone and help for recognition."""

    def __init__(self, bot: GratitudeBot) -> None:
        self.bot = bot

    @commands.hybrid_group(  # type: ignore[arg-type]
        name="gratitude", fallback="help", invoke_without_command=True,
    )
    async def gratitude(self, ctx: commands.Context) -> None:
        """How to give recognition."""
        await ctx.send(self.help_text(), ephemeral=True)

    def help_text(self) -> str:
        settings = self.bot.cfg.recognition
        return (
            f"Recognize a teammate by mentioning them in a message with "
            f"{settings.recognize_emoji}, e.g.\n"
            f"> @alex thanks for the late-night deploy! {settings.recognize_emoji} #teamwork\n"
            f"- Add more {settings.recognize_emoji} or a multiplier like `x3` "
            "to give more than one.\n"
            f"- React with {settings.reaction_emoji} to someone else's "
            "recognition to send the same recognition yourself.\n"
            f"- You can give {settings.maximum} per day and messages must be at "
            f"least {settings.minimum_message_length} characters.\n"
            f"- Find out what they're worth on [the wiki]({settings.redeem_url})."
        )

    # -------------------------------------------------------------------
    # /gratitude balance
    # -------------------------------------------------------------------
    @gratitude.command(name="balance", description="See what you can give and have received.")
    async def balance(self, ctx: commands.Context) -> None:
        user_id = str(ctx.author.id)
        ledger = self.bot.ledger
        timezone = await ledger.user_timezone(user_id)
        remaining = await ledger.remaining_daily_allowance(user_id, timezone)
        received = await ledger.count_recognitions_received(user_id)

        emoji = self.bot.cfg.recognition.recognize_emoji
        embed = discord.Embed(
            title=f"{emoji} Your recognition balance",
            color=discord.Color.gold(),
        )
        embed.add_field(name="Left to give today", value=f"`{remaining}`", inline=True)
        embed.add_field(name="Received", value=f"`{received}`", inline=True)
        embed.set_footer(text=f"Daily allowance resets at midnight {timezone}")
        await ctx.send(embed=embed, ephemeral=True)

    # -------------------------------------------------------------------
    # /gratitude timezone
    # -------------------------------------------------------------------
    @gratitude.command(name="timezone", description="Set the timezone your daily allowance uses.")
    @app_commands.describe(zone="IANA timezone name, e.g. America/Denver")
    async def timezone(self, ctx: commands.Context, zone: str) -> None:
        try:
            ZoneInfo(zone)
        except (ZoneInfoNotFoundError, ValueError):
            await ctx.send(
                f"❌ `{zone}` isn't a timezone I know. Try something like `Europe/Berlin`.",
                ephemeral=True,
            )
            return

        await self.bot.ledger.set_user_timezone(str(ctx.author.id), zone)
        await ctx.send(f"✅ Your daily allowance now resets at midnight `{zone}`.", ephemeral=True)


async def setup(bot: GratitudeBot) -> None:
    await bot.add_cog(Meta(bot))

# cogs/cs2_stats.py
# ───────────────────────────────────────────────────────────────
#   !cs2stats <steam_profile>  → CS2 stats embed for a profile
#   Accepts a SteamID64 or a steamcommunity.com/profiles/… URL.
#   Custom /id/<alias> URLs are recognised but must be converted first.
# ───────────────────────────────────────────────────────────────
from __future__ import annotations

import logging
from datetime import datetime, timezone

import discord
from discord.ext import commands

from metrics import PlayerReport, derive
from resolver import ResolutionFailure, resolve
from steam import ProfileNotFound, SteamAPIError, SteamClient

log = logging.getLogger("cog.cs2_stats")

# ═══════════════════ CONFIG ═══════════════════════════════════
EMBED_COLOUR = discord.Colour(0x0099FF)

GROUP_ICONS = {
    "General": "⏱️",
    "Combat Stats": "🎯",
    "Match Stats": "🏆",
    "Weapon Stats": "💣",
    "Popular Weapons": "🔫",
    "Map Wins": "🗺️",
}

ALIAS_MSG = (
    "That looks like a custom Steam URL (steamcommunity.com/id/...).\n"
    "Please convert it to a Steam64 ID first using https://steamid.io and try again."
)
UNRECOGNIZED_MSG = (
    "Invalid Steam URL or ID. Please provide either:\n"
    "• A Steam64 ID (17 digits)\n"
    "• A Steam profile URL (steamcommunity.com/profiles/...)\n"
    "• For custom URLs (steamcommunity.com/id/...), please convert to Steam64 ID first using steamid.io"
)
NOT_FOUND_MSG = "No Steam profile exists for that ID. Double-check the Steam64 ID."
FETCH_ERROR_MSG = (
    "Error fetching stats. Make sure the profile is public, game details are public, "
    "and the Steam ID is correct."
)
# ══════════════════════════════════════════════════════════════


# ══════════════════════════ EMBED HELPERS ══════════════════════════════
def resolution_message(failure: ResolutionFailure) -> str:
    """User guidance for a profile reference we could not resolve."""
    if failure is ResolutionFailure.ALIAS_UNRESOLVABLE:
        return ALIAS_MSG
    return UNRECOGNIZED_MSG


def build_stats_embed(report: PlayerReport) -> discord.Embed:
    profile = report.profile
    embed = discord.Embed(
        title=f"CS2 Stats for {profile.display_name}",
        colour=EMBED_COLOUR,
        timestamp=datetime.now(timezone.utc),
    )
    if profile.avatar_url:
        embed.set_thumbnail(url=profile.avatar_url)

    for group in report.groups():
        icon = GROUP_ICONS.get(group.title, "")
        lines = [f"{label}: **{value}**" for label, value in group.fields()]
        embed.add_field(
            name=f"{icon} {group.title}".strip(), value="\n".join(lines), inline=True
        )
    return embed


# ═══════════════════ MAIN COG ═══════════════════
class CS2StatsCog(commands.Cog):
    """Counter-Strike 2 statistics for Steam profiles."""

    def __init__(self, bot: commands.Bot, steam: SteamClient):
        self.bot, self.steam = bot, steam

    @commands.command(name="cs2stats")
    async def cs2stats(self, ctx: commands.Context, *, profile: str = ""):
        """Show CS2 stats for a SteamID64 or profile URL."""
        reference = profile.strip()
        if not reference:
            return await ctx.reply(
                "Please provide a Steam profile URL or ID64. "
                f"Usage: {ctx.clean_prefix}cs2stats <url/id>"
            )

        steam_id = resolve(reference)
        if isinstance(steam_id, ResolutionFailure):
            log.info("Unresolvable profile reference from %s (%s)", ctx.author, steam_id.value)
            return await ctx.reply(resolution_message(steam_id))

        async with ctx.typing():
            try:
                counters, summary = await self.steam.fetch_player(steam_id)
            except ProfileNotFound:
                return await ctx.reply(NOT_FOUND_MSG)
            except SteamAPIError as exc:
                log.warning("Stats lookup for %s failed: %s", steam_id, exc)
                return await ctx.reply(FETCH_ERROR_MSG)
            except Exception:
                log.exception("Unexpected error fetching stats for %s", steam_id)
                return await ctx.reply(FETCH_ERROR_MSG)

            try:
                report = derive(counters, summary)
            except Exception:
                log.exception("Could not build stats for %s", steam_id)
                return await ctx.reply(FETCH_ERROR_MSG)
        await ctx.reply(embed=build_stats_embed(report))


# ───────────────────────── setup() hook ─────────────────────────
async def setup(bot: commands.Bot, steam: SteamClient):
    await bot.add_cog(CS2StatsCog(bot, steam))

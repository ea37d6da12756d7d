# cogs/help.py
from __future__ import annotations

import discord
from discord.ext import commands

from cogs.cs2_stats import EMBED_COLOUR


def build_help_embed(prefix: str = "!") -> discord.Embed:
    embed = discord.Embed(title="CS2 Stats Bot Commands", colour=EMBED_COLOUR)
    embed.add_field(
        name=f"{prefix}cs2stats <steam_profile>",
        value=(
            "Shows CS2 statistics for the given Steam profile\n"
            "Accepts:\n"
            f"• Steam64 ID: `{prefix}cs2stats 76561198012345678`\n"
            f"• Profile URL: `{prefix}cs2stats steamcommunity.com/profiles/76561198012345678`"
        ),
        inline=False,
    )
    embed.add_field(
        name="How to find Steam profile URL",
        value=(
            "1. Go to your Steam profile\n"
            "2. Copy the URL from your browser\n"
            "3. Paste it after the command"
        ),
        inline=False,
    )
    embed.add_field(
        name="Requirements",
        value=(
            "• Steam profile must be public\n"
            "• Steam game details must be public\n"
            "• Must have played CS2"
        ),
        inline=False,
    )
    embed.set_footer(text="Custom /id/ URLs: convert to a Steam64 ID at steamid.io")
    return embed


class HelpCog(commands.Cog):
    """!help / !commands"""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @commands.command(name="help", aliases=["commands"])
    async def help_command(self, ctx: commands.Context):
        await ctx.reply(embed=build_help_embed(ctx.clean_prefix))


# ───────────────────────── setup() hook ─────────────────────────
async def setup(bot, steam=None):       # steam arg kept for symmetry, not used
    await bot.add_cog(HelpCog(bot))

# cs2statsbot.py – CS2 stats Discord bot (core launcher)
# ======================================================
from __future__ import annotations

import asyncio
import logging
import sys
from importlib import import_module
from types import ModuleType
from typing import Sequence

import discord
from discord.ext import commands

from config import ConfigError, Settings, load_settings
from steam import SteamClient

COGS = (
    "cogs.cs2_stats",
    "cogs.help",
)


# ─────────────────────────── log setup ────────────────────────────
def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        stream=sys.stdout,
        force=True,
    )
    # discord.py's gateway chatter is noisy at INFO
    logging.getLogger("discord.gateway").setLevel(logging.WARNING)
    # httpx logs full request URLs at INFO, and those carry the Steam key
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ─────────────────────────── bot instance ─────────────────────────
def create_bot(settings: Settings) -> commands.Bot:
    intents = discord.Intents.default()
    intents.messages = True
    intents.message_content = True  # prefix commands read message text

    bot = commands.Bot(
        command_prefix=settings.command_prefix,
        intents=intents,
        help_command=None,           # replaced by cogs.help
        case_insensitive=True,
    )

    @bot.event
    async def on_ready() -> None:
        logging.info("Logged in as %s (%s)", bot.user, bot.user.id)

    @bot.event
    async def on_command_error(ctx: commands.Context, err: commands.CommandError) -> None:
        if isinstance(err, commands.CommandNotFound):
            return
        logging.error(
            "Command error in %s: %s – %s", ctx.command, type(err).__name__, err,
            exc_info=getattr(err, "original", None),
        )

    return bot


# ─────────────────────────── helper: cog loader ───────────────────
async def load_cogs(bot_: commands.Bot, steam: SteamClient, paths: Sequence[str]) -> None:
    for dotted in paths:
        try:
            module: ModuleType = import_module(dotted)
            if not hasattr(module, "setup"):
                logging.warning("Module %s has no setup() – skipped", dotted)
                continue
            await module.setup(bot_, steam)
            logging.info("Loaded cog %s", dotted)
        except Exception:
            logging.exception("Failed to load cog %s", dotted)


# ─────────────────────────── main runner ──────────────────────────
async def _run_bot(settings: Settings) -> None:
    bot = create_bot(settings)
    async with SteamClient.from_settings(settings) as steam, bot:   # 1) HTTP
        await load_cogs(bot, steam, COGS)                           # 2) Cogs
        await bot.start(settings.discord_token)                     # 3) live


# ─────────────────────────── entry-point ──────────────────────────
def main() -> None:
    setup_logging()
    try:
        settings = load_settings()
    except ConfigError as exc:
        logging.critical("Cannot start: %s (set it in the environment or .env)", exc)
        raise SystemExit(1) from None

    setup_logging(settings.log_level)
    try:
        asyncio.run(_run_bot(settings))
    except KeyboardInterrupt:
        logging.info("Bot stopped by user")


if __name__ == "__main__":
    main()

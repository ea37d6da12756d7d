# config.py – runtime settings for the CS2 stats bot
# ===============================================================
# Read once at start-up and passed around explicitly.
#
#   DISCORD_TOKEN    required
#   STEAM_API_KEY    required
#   STEAM_API_BASE   optional  (https://api.steampowered.com)
#   STEAM_TIMEOUT    optional  seconds, float (10)
#   COMMAND_PREFIX   optional  (!)
#   LOG_LEVEL        optional  (INFO)
#
# A .env file next to the bot is honoured via python-dotenv.
# ===============================================================
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

log = logging.getLogger("config")

DEFAULT_STEAM_BASE = "https://api.steampowered.com"
DEFAULT_TIMEOUT = 10.0
DEFAULT_PREFIX = "!"


class ConfigError(RuntimeError):
    """A required setting is missing or malformed."""


@dataclass(frozen=True)
class Settings:
    discord_token: str
    steam_api_key: str
    steam_base_url: str = DEFAULT_STEAM_BASE
    request_timeout: float = DEFAULT_TIMEOUT
    command_prefix: str = DEFAULT_PREFIX
    log_level: str = "INFO"

    def __repr__(self) -> str:  # keep secrets out of logs / tracebacks
        return (
            f"Settings(steam_base_url={self.steam_base_url!r}, "
            f"request_timeout={self.request_timeout!r}, "
            f"command_prefix={self.command_prefix!r}, log_level={self.log_level!r})"
        )


def req(env: Mapping[str, str], name: str) -> str:
    """Get a required env-var or raise & log clearly."""
    value = env.get(name)
    if not value:
        log.error("REQUIRED env variable %s missing", name)
        raise ConfigError(f"Missing env {name}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from *env* (defaults to ``os.environ`` + .env)."""
    if env is None:
        load_dotenv()
        env = os.environ

    raw_timeout = env.get("STEAM_TIMEOUT") or str(DEFAULT_TIMEOUT)
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(f"STEAM_TIMEOUT must be a number, got {raw_timeout!r}") from None
    if timeout <= 0:
        raise ConfigError("STEAM_TIMEOUT must be positive")

    return Settings(
        discord_token=req(env, "DISCORD_TOKEN"),
        steam_api_key=req(env, "STEAM_API_KEY"),
        steam_base_url=(env.get("STEAM_API_BASE") or DEFAULT_STEAM_BASE).rstrip("/"),
        request_timeout=timeout,
        command_prefix=env.get("COMMAND_PREFIX") or DEFAULT_PREFIX,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )

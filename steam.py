# steam.py – async Steam Web API client for the CS2 stats bot
# ===============================================================
# • player_summary()  ISteamUser/GetPlayerSummaries/v2
# • game_stats()      ISteamUserStats/GetUserStatsForGame/v2
# • fetch_player()    both of the above, concurrently
#
# Every failure surfaces as SteamAPIError (or a subclass).
# The API key travels as a query param and is never logged.
#
# Tips:
#   async with SteamClient(key) as steam:
#       counters, profile = await steam.fetch_player(steam_id)
# ===============================================================
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from metrics import CounterSet, DisplayProfile

log = logging.getLogger("steam")

BASE_URL = "https://api.steampowered.com"
CS2_APPID = 730

SUMMARIES_ENDPOINT = "ISteamUser/GetPlayerSummaries/v2/"
GAME_STATS_ENDPOINT = "ISteamUserStats/GetUserStatsForGame/v2/"


class SteamAPIError(Exception):
    """Network, HTTP or payload problem talking to the Steam Web API."""

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class ProfileNotFound(SteamAPIError):
    """GetPlayerSummaries returned no player for the SteamID."""


class StatsUnavailable(SteamAPIError):
    """Game stats are private or the player has none for the app."""


class SteamClient:
    """Thin wrapper around an httpx.AsyncClient + the two calls we need."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        http: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings) -> "SteamClient":
        return cls(
            settings.steam_api_key,
            base_url=settings.steam_base_url,
            timeout=settings.request_timeout,
        )

    async def __aenter__(self) -> "SteamClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client, unless it was handed to us."""
        if self._owns_http and not self.http.is_closed:
            await self.http.aclose()

    # ───────────────────────────────────────────────────────────
    # RAW GET
    # ───────────────────────────────────────────────────────────
    async def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        query = {"key": self.api_key, **params}
        try:
            r = await self.http.get(
                f"{self.base_url}/{endpoint}", params=query, timeout=self.timeout
            )
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            # the exception text carries the full URL (with key) → endpoint only
            log.warning("Steam request failed (%s) on %s", status, endpoint)
            raise SteamAPIError(
                f"Steam returned HTTP {status} for {endpoint}", status=status
            ) from None
        except httpx.HTTPError as exc:
            log.warning("Steam request error on %s: %s", endpoint, type(exc).__name__)
            raise SteamAPIError(f"Could not reach Steam ({type(exc).__name__})") from None
        except ValueError:
            log.warning("Steam sent invalid JSON on %s", endpoint)
            raise SteamAPIError(f"Invalid JSON from {endpoint}") from None

        if not isinstance(data, dict):
            raise SteamAPIError(f"Unexpected payload from {endpoint}")
        return data

    # ───────────────────────────────────────────────────────────
    # ENDPOINTS
    # ───────────────────────────────────────────────────────────
    async def player_summary(self, steam_id: str) -> DisplayProfile:
        data = await self._get(SUMMARIES_ENDPOINT, {"steamids": steam_id})
        players = (data.get("response") or {}).get("players") or []
        if not players:
            raise ProfileNotFound(f"No Steam profile for {steam_id}")
        player = players[0]
        if not isinstance(player, dict):
            raise SteamAPIError(f"Unexpected player entry for {steam_id}")
        return DisplayProfile(
            display_name=player.get("personaname") or steam_id,
            avatar_url=player.get("avatarmedium") or "",
        )

    async def game_stats(self, steam_id: str, appid: int = CS2_APPID) -> Dict[str, Any]:
        """Flatten playerstats.stats into {counter-name: value}."""
        try:
            data = await self._get(
                GAME_STATS_ENDPOINT, {"appid": appid, "steamid": steam_id}
            )
        except SteamAPIError as exc:
            # Steam answers 400/403 when "game details" are private
            if exc.status in (400, 403):
                raise StatsUnavailable(str(exc), status=exc.status) from None
            raise

        playerstats = data.get("playerstats")
        if not isinstance(playerstats, dict):
            raise StatsUnavailable(f"No stats for app {appid} on {steam_id}")

        stats = playerstats.get("stats")
        if not isinstance(stats, list):
            raise StatsUnavailable(f"No stats list for app {appid} on {steam_id}")

        return {
            s["name"]: s.get("value", 0)
            for s in stats
            if isinstance(s, dict) and "name" in s
        }

    async def fetch_player(
        self, steam_id: str, appid: int = CS2_APPID
    ) -> Tuple[CounterSet, DisplayProfile]:
        """Stats + summary in parallel."""
        counters, profile = await asyncio.gather(
            self.game_stats(steam_id, appid),
            self.player_summary(steam_id),
        )
        log.debug("Fetched %d counters for %s", len(counters), steam_id)
        return counters, profile

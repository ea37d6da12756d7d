# metrics.py – raw CS2 counters → display-ready stat groups
# ===============================================================
# • lookup()  – counter value or 0 when the counter is absent
# • derive()  – six fixed groups (General … Map Wins) of formatted
#               strings, ready for the embed renderer
# • format_number / format_duration / format_fixed helpers
#
# Nothing here raises: missing counters degrade to 0 and zero
# denominators produce NaN / Infinity, rendered verbatim.
# ===============================================================
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import ClassVar, List, Mapping, Tuple, Union

Number = Union[int, float]
CounterSet = Mapping[str, Number]
Field = Tuple[str, str]

# ─────────────────────── upstream counter names ───────────────────────
# Wire contract with ISteamUserStats/GetUserStatsForGame (appid 730).
TIME_PLAYED = "total_time_played"
PLANTED_BOMBS = "total_planted_bombs"
DEFUSED_BOMBS = "total_defused_bombs"
DAMAGE_DONE = "total_damage_done"
MONEY_EARNED = "total_money_earned"

KILLS = "total_kills"
DEATHS = "total_deaths"
HEADSHOT_KILLS = "total_kills_headshot"
SHOTS_HIT = "total_shots_hit"
SHOTS_FIRED = "total_shots_fired"

MATCHES_PLAYED = "total_matches_played"
MATCHES_WON = "total_matches_won"
MVPS = "total_mvps"

KNIFE_KILLS = "total_kills_knife"
GRENADE_KILLS = "total_kills_hegrenade"

# (label, counter)
POPULAR_WEAPONS: Tuple[Tuple[str, str], ...] = (
    ("AK-47", "total_kills_ak47"),
    ("M4A1-S", "total_kills_m4a1"),
    ("AWP", "total_kills_awp"),
    ("Glock-18", "total_kills_glock"),
    ("USP-S", "total_kills_hkp2000"),
)
MAPS: Tuple[Tuple[str, str], ...] = (
    ("Dust II", "total_wins_map_de_dust2"),
    ("Inferno", "total_wins_map_de_inferno"),
    ("Nuke", "total_wins_map_de_nuke"),
    ("Vertigo", "total_wins_map_de_vertigo"),
    ("Train", "total_wins_map_de_train"),
)


# ══════════════════════════ FORMAT HELPERS ═══════════════════════════
def _non_finite(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def format_number(value: Number) -> str:
    """1234567 → '1,234,567'. Only the integer part is grouped."""
    if isinstance(value, float):
        if not math.isfinite(value):
            return _non_finite(value)
        if value.is_integer():
            value = int(value)
    if isinstance(value, int):
        return f"{value:,}"
    whole, dot, frac = str(value).partition(".")
    return f"{int(whole):,}{dot}{frac}"


def format_duration(seconds: Number) -> str:
    """Seconds → '<d>d <h>h' from 24 h upward, else '<h>h'. No minutes."""
    hours = int(seconds // 3600)
    if hours >= 24:
        return f"{hours // 24}d {hours % 24}h"
    return f"{hours}h"


def format_fixed(value: Number, digits: int) -> str:
    """Fixed-point with ties rounded away from zero; NaN/±inf spelled out."""
    if isinstance(value, float) and not math.isfinite(value):
        return _non_finite(value)
    if value == 0:
        value = 0  # no "-0.0"
    quantum = Decimal(1).scaleb(-digits)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):f}"


def ratio(numerator: Number, denominator: Number) -> float:
    """Plain division; x/0 is NaN or ±Infinity instead of an error."""
    if denominator == 0:
        if numerator == 0:
            return math.nan
        return math.inf if numerator > 0 else -math.inf
    return numerator / denominator


# ═════════════════════════════ LOOKUP ═══════════════════════════════
def lookup(counters: CounterSet, name: str) -> Number:
    """Counter value, or 0 when *name* is not reported at all."""
    return counters.get(name, 0)


# ═════════════════════════════ MODELS ═══════════════════════════════
@dataclass(frozen=True)
class DisplayProfile:
    """Subset of GetPlayerSummaries the renderer needs."""

    display_name: str
    avatar_url: str


@dataclass(frozen=True)
class GeneralStats:
    title: ClassVar[str] = "General"

    time_played: str
    bombs_planted: str
    bombs_defused: str
    damage_done: str
    money_earned: str

    def fields(self) -> List[Field]:
        return [
            ("Time Played", self.time_played),
            ("Bombs Planted", self.bombs_planted),
            ("Bombs Defused", self.bombs_defused),
            ("Damage Done", self.damage_done),
            ("Money Earned", f"${self.money_earned}"),
        ]


@dataclass(frozen=True)
class CombatStats:
    title: ClassVar[str] = "Combat Stats"

    kills: str
    deaths: str
    kd_ratio: str
    accuracy: str
    headshots: str

    def fields(self) -> List[Field]:
        return [
            ("Kills", self.kills),
            ("Deaths", self.deaths),
            ("K/D Ratio", self.kd_ratio),
            ("Accuracy", f"{self.accuracy}%"),
            ("Headshot Kills", self.headshots),
        ]


@dataclass(frozen=True)
class MatchStats:
    title: ClassVar[str] = "Match Stats"

    matches_played: str
    matches_won: str
    win_rate: str
    mvps: str

    def fields(self) -> List[Field]:
        return [
            ("Matches Played", self.matches_played),
            ("Matches Won", self.matches_won),
            ("Win Rate", f"{self.win_rate}%"),
            ("MVP Stars", self.mvps),
        ]


@dataclass(frozen=True)
class WeaponStats:
    title: ClassVar[str] = "Weapon Stats"

    shots_fired: str
    shots_hit: str
    knife_kills: str
    grenade_kills: str

    def fields(self) -> List[Field]:
        return [
            ("Shots Fired", self.shots_fired),
            ("Shots Hit", self.shots_hit),
            ("Knife Kills", self.knife_kills),
            ("Grenade Kills", self.grenade_kills),
        ]


@dataclass(frozen=True)
class PopularWeapons:
    title: ClassVar[str] = "Popular Weapons"

    kills: Tuple[Field, ...]  # (weapon, formatted kills) in POPULAR_WEAPONS order

    def fields(self) -> List[Field]:
        return [(f"{weapon} Kills", value) for weapon, value in self.kills]


@dataclass(frozen=True)
class MapWins:
    title: ClassVar[str] = "Map Wins"

    wins: Tuple[Field, ...]  # (map, formatted wins) in MAPS order

    def fields(self) -> List[Field]:
        return list(self.wins)


@dataclass(frozen=True)
class PlayerReport:
    profile: DisplayProfile
    general: GeneralStats
    combat: CombatStats
    match: MatchStats
    weapons: WeaponStats
    popular_weapons: PopularWeapons
    map_wins: MapWins

    def groups(self) -> tuple:
        return (
            self.general,
            self.combat,
            self.match,
            self.weapons,
            self.popular_weapons,
            self.map_wins,
        )


# ═════════════════════════════ DERIVE ═══════════════════════════════
def derive(counters: CounterSet, profile: DisplayProfile) -> PlayerReport:
    """Build every stat group from one GetUserStatsForGame counter set."""

    def num(name: str) -> str:
        return format_number(lookup(counters, name))

    kills, deaths = lookup(counters, KILLS), lookup(counters, DEATHS)
    hit, fired = lookup(counters, SHOTS_HIT), lookup(counters, SHOTS_FIRED)
    won, played = lookup(counters, MATCHES_WON), lookup(counters, MATCHES_PLAYED)

    general = GeneralStats(
        time_played=format_duration(lookup(counters, TIME_PLAYED)),
        bombs_planted=num(PLANTED_BOMBS),
        bombs_defused=num(DEFUSED_BOMBS),
        damage_done=num(DAMAGE_DONE),
        money_earned=num(MONEY_EARNED),
    )
    combat = CombatStats(
        kills=format_number(kills),
        deaths=format_number(deaths),
        kd_ratio=format_fixed(ratio(kills, deaths), 2),
        accuracy=format_fixed(ratio(hit, fired) * 100, 1),
        headshots=num(HEADSHOT_KILLS),
    )
    match = MatchStats(
        matches_played=format_number(played),
        matches_won=format_number(won),
        win_rate=format_fixed(ratio(won, played) * 100, 1),
        mvps=num(MVPS),
    )
    weapons = WeaponStats(
        shots_fired=format_number(fired),
        shots_hit=format_number(hit),
        knife_kills=num(KNIFE_KILLS),
        grenade_kills=num(GRENADE_KILLS),
    )

    return PlayerReport(
        profile=profile,
        general=general,
        combat=combat,
        match=match,
        weapons=weapons,
        popular_weapons=PopularWeapons(
            kills=tuple((label, num(name)) for label, name in POPULAR_WEAPONS)
        ),
        map_wins=MapWins(wins=tuple((label, num(name)) for label, name in MAPS)),
    )

# resolver.py – Steam profile reference → SteamID64
# ===============================================================
# Accepted input:
#   • bare SteamID64            76561198012345678
#   • numeric profile URL       steamcommunity.com/profiles/<id64>[/]
#   • custom (vanity) URL       steamcommunity.com/id/<alias>[/]
#     → recognised but NOT resolvable here (no ResolveVanityURL call)
#
# Failures are returned, never raised, so callers can branch on them.
# Callers trim whitespace before calling.
# ===============================================================
from __future__ import annotations

import enum
import re
from typing import Union

STEAM_ID_RE = re.compile(r"\d{17}", re.ASCII)

# order matters: numeric profile URL wins over alias URL
PROFILE_URL_RE = re.compile(r"steamcommunity\.com/profiles/(\d{17})(?:/)?", re.ASCII)
ALIAS_URL_RE = re.compile(r"steamcommunity\.com/id/([^/]+)(?:/)?")


class ResolutionFailure(str, enum.Enum):
    """Why a profile reference could not be turned into a SteamID64."""

    ALIAS_UNRESOLVABLE = "alias-unresolvable"
    UNRECOGNIZED_FORMAT = "unrecognized-format"


Resolution = Union[str, ResolutionFailure]


def is_steam_id(value: object) -> bool:
    """True for a canonical 17-digit SteamID64 string."""
    return isinstance(value, str) and STEAM_ID_RE.fullmatch(value) is not None


def resolve(reference: str) -> Resolution:
    """Return the SteamID64 for *reference* or a :class:`ResolutionFailure`."""
    if is_steam_id(reference):
        return reference

    if (m := PROFILE_URL_RE.search(reference)):
        return m.group(1)

    if (m := ALIAS_URL_RE.search(reference)):
        # an /id/ segment that is itself a SteamID64 is taken as one
        if is_steam_id(m.group(1)):
            return m.group(1)
        return ResolutionFailure.ALIAS_UNRESOLVABLE

    return ResolutionFailure.UNRECOGNIZED_FORMAT

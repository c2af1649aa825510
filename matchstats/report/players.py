"""Player uid to display-name resolution."""

from __future__ import annotations

from typing import Iterable, Mapping

from matchstats.config import UNKNOWN_PLAYER_NAME
from matchstats.data.ball_event import Player


def player_lookup(players: Iterable[Player]) -> dict[str, Player]:
    # First profile wins if a uid is listed twice
    lookup: dict[str, Player] = {}
    for player in players:
        lookup.setdefault(player.uid, player)
    return lookup


def player_name(
    uid: str,
    players: Iterable[Player] | Mapping[str, Player],
    default: str = UNKNOWN_PLAYER_NAME,
) -> str:
    """Display name for ``uid``; ``default`` when the player is not listed."""
    lookup = players if isinstance(players, Mapping) else player_lookup(players)
    player = lookup.get(uid)
    return (player.name if player else "") or default

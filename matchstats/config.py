"""
Configuration management for the Match Statistics Engine.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from dotenv import load_dotenv

load_dotenv()


class MatchStatus(Enum):
    UPCOMING = "upcoming"
    LIVE = "live"
    COMPLETED = "completed"


class TeamSide(Enum):
    TEAM_A = "teamA"
    TEAM_B = "teamB"


class CareerScope(Enum):
    ALL_TIME = "all-time"
    SEASON = "season"
    RECENT = "recent"


BALLS_PER_OVER = 6
MIN_STRIKE_RATE_BALLS = 10  # Cameos below this are ignored for best strike rate
UNKNOWN_PLAYER_NAME = "Unknown"


@dataclass(frozen=True)
class StatsConfig:
    """Top-level engine configuration."""
    min_strike_rate_balls: int = MIN_STRIKE_RATE_BALLS
    unknown_player_name: str = UNKNOWN_PLAYER_NAME
    recent_match_limit: int = 10  # Matches kept for the "recent" career scope
    cache_max_entries: int = 128

    @classmethod
    def from_env(cls) -> "StatsConfig":
        """Load configuration from environment variables."""
        return cls(
            min_strike_rate_balls=int(
                os.getenv("MATCHSTATS_MIN_STRIKE_RATE_BALLS", str(MIN_STRIKE_RATE_BALLS))
            ),
            unknown_player_name=os.getenv(
                "MATCHSTATS_UNKNOWN_PLAYER_NAME", UNKNOWN_PLAYER_NAME
            ),
            recent_match_limit=int(os.getenv("MATCHSTATS_RECENT_MATCH_LIMIT", "10")),
            cache_max_entries=int(os.getenv("MATCHSTATS_CACHE_MAX_ENTRIES", "128")),
        )

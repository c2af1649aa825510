"""
Ball-by-ball event data model.

Defines the innings log and the live crease overlay that every
statistics calculator reads from. The live scorer appends to these
records; the engine only ever reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from matchstats.config import BALLS_PER_OVER, MatchStatus, TeamSide


@dataclass(frozen=True)
class BallEvent:
    """A single delivery in an innings.

    ``runs`` is everything scored off the delivery, including the
    wide/no-ball runs bundled with it. Position in the innings log is
    the chronological order; ``timestamp`` is informational only.
    """

    runs: int = 0
    is_wide: bool = False
    is_no_ball: bool = False
    is_wicket: bool = False
    is_dot: bool = False
    batsman_uid: Optional[str] = None
    timestamp: int = 0

    # Optional schema extension: the bowler who delivered this ball
    bowler_uid: Optional[str] = None

    @property
    def is_legal_delivery(self) -> bool:
        return not self.is_wide and not self.is_no_ball

    @property
    def is_dot_ball(self) -> bool:
        return self.runs == 0 or self.is_dot


@dataclass(frozen=True)
class Batsman:
    """Live record of a batsman at the crease, kept by the scorer."""
    uid: str
    runs: int = 0
    balls: int = 0
    is_on_strike: bool = False


@dataclass(frozen=True)
class Bowler:
    """Bowler aggregates for an innings, kept by the scorer."""
    uid: str
    overs: int = 0
    balls: int = 0  # Legal balls in the current, unfinished over
    runs: int = 0
    wickets: int = 0
    maidens: int = 0


@dataclass(frozen=True)
class InningsScore:
    """Stored innings: scorer counters, the delivery log and bowlers.

    The ``runs``/``wickets``/``overs``/``balls`` counters are maintained by
    the scorer and are not re-derived from ``ball_events``.
    """

    runs: int = 0
    wickets: int = 0
    overs: int = 0
    balls: int = 0
    ball_events: tuple[BallEvent, ...] = ()
    bowlers: tuple[Bowler, ...] = ()
    current_bowler_uid: Optional[str] = None
    last_bowler_uid: Optional[str] = None

    @property
    def overs_decimal(self) -> float:
        return self.overs + self.balls / BALLS_PER_OVER


@dataclass(frozen=True)
class Team:
    name: str
    player_uids: tuple[str, ...] = ()


@dataclass(frozen=True)
class Player:
    """The slice of a user profile needed for display names."""
    uid: str
    name: str = ""
    username: Optional[str] = None


@dataclass(frozen=True)
class Match:
    """A stored match with both innings and the live crease state."""

    match_id: str
    team_a: Team
    team_b: Team
    status: MatchStatus = MatchStatus.UPCOMING
    total_overs: int = 0
    current_innings: int = 1
    batting_team: Optional[TeamSide] = None
    toss_won_by: Optional[TeamSide] = None
    toss_decision: Optional[str] = None  # bat / bowl
    current_batsmen: tuple[Batsman, ...] = ()
    team_a_innings: InningsScore = field(default_factory=InningsScore)
    team_b_innings: InningsScore = field(default_factory=InningsScore)
    updated_at: Optional[datetime] = None

    def innings_for(self, side: TeamSide) -> InningsScore:
        return self.team_a_innings if side == TeamSide.TEAM_A else self.team_b_innings

    def live_batsmen_for(self, side: TeamSide) -> tuple[Batsman, ...]:
        """Crease overlay for ``side``; empty unless that side is batting."""
        return self.current_batsmen if self.batting_team == side else ()

    def has_player(self, uid: str) -> bool:
        return uid in self.team_a.player_uids or uid in self.team_b.player_uids

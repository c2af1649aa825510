"""
Player career aggregation over completed matches.

Works on matches the caller has already fetched; querying the store is
not this module's concern. Batting is replayed from the delivery logs
of both innings, bowling from the scorer's bowler records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional

from matchstats.config import CareerScope, MatchStatus, StatsConfig
from matchstats.data.ball_event import Match
from matchstats.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class MatchBatting:
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    batted: bool = False


@dataclass(frozen=True)
class MatchBowling:
    overs: int = 0
    balls: int = 0
    runs: int = 0
    wickets: int = 0
    bowled: bool = False


@dataclass(frozen=True)
class PlayerPerformance:
    """What a player did in one match; either side is None if they didn't."""
    batting: Optional[MatchBatting] = None
    bowling: Optional[MatchBowling] = None


@dataclass
class CareerBatting:
    matches: int = 0
    innings: int = 0
    runs: int = 0
    high_score: int = 0
    average: float = 0.0
    strike_rate: float = 0.0
    fifties: int = 0
    hundreds: int = 0
    fours: int = 0
    sixes: int = 0


@dataclass
class CareerBowling:
    matches: int = 0
    innings: int = 0
    overs: int = 0
    runs: int = 0
    wickets: int = 0
    average: float = 0.0
    economy: float = 0.0
    best_figures: str = "0/0"  # wickets/runs
    five_wickets: int = 0


@dataclass
class PlayerCareerStats:
    batting: CareerBatting = field(default_factory=CareerBatting)
    bowling: CareerBowling = field(default_factory=CareerBowling)


def player_batting_in_match(match: Match, uid: str) -> MatchBatting:
    runs = balls = fours = sixes = 0
    batted = False
    for innings in (match.team_a_innings, match.team_b_innings):
        for ball in innings.ball_events:
            if ball.batsman_uid != uid:
                continue
            batted = True
            runs += ball.runs
            if ball.is_legal_delivery:
                balls += 1
            if ball.runs == 4:
                fours += 1
            if ball.runs == 6:
                sixes += 1
    return MatchBatting(runs=runs, balls=balls, fours=fours, sixes=sixes, batted=batted)


def player_bowling_in_match(match: Match, uid: str) -> MatchBowling:
    overs = balls = runs = wickets = 0
    bowled = False
    for innings in (match.team_a_innings, match.team_b_innings):
        bowler = next((b for b in innings.bowlers if b.uid == uid), None)
        if bowler is None:
            continue
        bowled = True
        overs += bowler.overs
        balls += bowler.balls
        runs += bowler.runs
        wickets += bowler.wickets
    return MatchBowling(overs=overs, balls=balls, runs=runs, wickets=wickets, bowled=bowled)


def player_performance_in_match(match: Match, uid: str) -> PlayerPerformance:
    batting = player_batting_in_match(match, uid)
    bowling = player_bowling_in_match(match, uid)
    return PlayerPerformance(
        batting=batting if batting.batted else None,
        bowling=bowling if bowling.bowled else None,
    )


def filter_matches_for_player(
    matches: Iterable[Match],
    uid: str,
    scope: CareerScope = CareerScope.ALL_TIME,
    year: Optional[int] = None,
    config: Optional[StatsConfig] = None,
) -> list[Match]:
    """Completed matches ``uid`` played in, newest first, narrowed by scope.

    Args:
        matches: Candidate matches in any order
        uid: Player to select for
        scope: ``RECENT`` keeps the newest ``recent_match_limit`` matches,
            ``SEASON`` keeps matches updated in ``year`` (default: this year)
        year: Season year for ``SEASON``
        config: Engine configuration
    """
    config = config or StatsConfig()
    played = [
        m for m in matches
        if m.status == MatchStatus.COMPLETED and m.has_player(uid)
    ]
    played.sort(key=lambda m: m.updated_at or _EPOCH, reverse=True)

    if scope == CareerScope.RECENT:
        return played[: config.recent_match_limit]
    if scope == CareerScope.SEASON:
        season = year if year is not None else datetime.now(timezone.utc).year
        return [m for m in played if m.updated_at and m.updated_at.year == season]
    return played


def calculate_career_stats(matches: Iterable[Match], uid: str) -> PlayerCareerStats:
    """Aggregate a player's batting and bowling over ``matches``.

    Every match passed in counts towards ``matches``; innings only count
    where the player batted or bowled.
    """
    matches = list(matches)
    stats = PlayerCareerStats()
    bat, bowl = stats.batting, stats.bowling

    total_balls = 0
    best_wickets = 0
    best_runs: Optional[int] = None

    for match in matches:
        batting = player_batting_in_match(match, uid)
        if batting.batted:
            bat.innings += 1
            bat.runs += batting.runs
            total_balls += batting.balls
            bat.fours += batting.fours
            bat.sixes += batting.sixes
            bat.high_score = max(bat.high_score, batting.runs)
            if batting.runs >= 100:
                bat.hundreds += 1
            elif batting.runs >= 50:
                bat.fifties += 1

        bowling = player_bowling_in_match(match, uid)
        if bowling.bowled:
            bowl.innings += 1
            bowl.overs += bowling.overs
            bowl.runs += bowling.runs
            bowl.wickets += bowling.wickets
            if bowling.wickets > best_wickets or (
                bowling.wickets == best_wickets
                and (best_runs is None or bowling.runs < best_runs)
            ):
                best_wickets = bowling.wickets
                best_runs = bowling.runs
            if bowling.wickets >= 5:
                bowl.five_wickets += 1

    bat.matches = bowl.matches = len(matches)

    if bat.innings > 0:
        bat.average = round_half_up(bat.runs / bat.innings, 2)
    if total_balls > 0:
        bat.strike_rate = round_half_up(bat.runs / total_balls * 100, 2)
    if bowl.wickets > 0:
        bowl.average = round_half_up(bowl.runs / bowl.wickets, 2)
    # Economy over whole overs only; part-overs are not carried across matches
    if bowl.overs > 0:
        bowl.economy = round_half_up(bowl.runs / bowl.overs, 2)
    bowl.best_figures = f"{best_wickets}/{best_runs or 0}"

    logger.debug(
        "Career stats for %s over %d matches: %d runs, %d wickets",
        uid, len(matches), bat.runs, bowl.wickets,
    )
    return stats

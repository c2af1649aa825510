"""
Bowling figures for an innings.

Overs, runs, wickets and maidens come from the scorer's bowler records.
Dots, wides and no-balls need to know who bowled each delivery, which
only deliveries tagged with ``bowler_uid`` can tell; untagged logs
report zero for them.
"""

from __future__ import annotations

from dataclasses import dataclass

from matchstats.config import BALLS_PER_OVER
from matchstats.data.ball_event import InningsScore
from matchstats.utils.rounding import round_half_up


@dataclass(frozen=True)
class BowlingStats:
    """Bowling line for one bowler in an innings."""
    uid: str
    overs: int = 0
    balls: int = 0
    runs: int = 0
    wickets: int = 0
    economy: float = 0.0
    dots: int = 0
    wides: int = 0
    no_balls: int = 0
    maidens: int = 0


def economy_rate(runs: int, overs: int, balls: int) -> float:
    """Runs per over, with part-overs as sixths. Rounded to 2 decimals."""
    overs_decimal = overs + balls / BALLS_PER_OVER
    return round_half_up(runs / overs_decimal, 2) if overs_decimal > 0 else 0.0


def calculate_bowling_stats(innings: InningsScore, bowler_uid: str) -> BowlingStats:
    bowler = next((b for b in innings.bowlers if b.uid == bowler_uid), None)
    if bowler is None:
        return BowlingStats(uid=bowler_uid)

    dots = wides = no_balls = 0
    for ball in innings.ball_events:
        if ball.bowler_uid != bowler_uid:
            continue
        if ball.is_wide:
            wides += 1
        if ball.is_no_ball:
            no_balls += 1
        if ball.is_legal_delivery and ball.is_dot_ball:
            dots += 1

    return BowlingStats(
        uid=bowler_uid,
        overs=bowler.overs,
        balls=bowler.balls,
        runs=bowler.runs,
        wickets=bowler.wickets,
        economy=economy_rate(bowler.runs, bowler.overs, bowler.balls),
        dots=dots,
        wides=wides,
        no_balls=no_balls,
        maidens=bowler.maidens or 0,
    )


def get_all_bowlers_in_innings(innings: InningsScore) -> list[str]:
    return [bowler.uid for bowler in innings.bowlers]

"""
Innings timeline aggregates: fall of wickets, extras and over summaries.

All three are single forward passes over the delivery log. Only legal
deliveries move the over count; every delivery contributes its runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from matchstats.config import BALLS_PER_OVER
from matchstats.data.ball_event import InningsScore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallOfWicket:
    """Score and over at which a wicket fell."""
    wicket_number: int
    score: int
    overs: int
    balls: int
    batsman_uid: str


@dataclass(frozen=True)
class ExtrasBreakdown:
    wides: int = 0
    no_balls: int = 0
    total: int = 0


@dataclass(frozen=True)
class OverSummary:
    """Runs and wickets in one over (the last may be incomplete)."""
    over_number: int
    runs: int
    wickets: int


def calculate_fall_of_wickets(innings: InningsScore) -> list[FallOfWicket]:
    fall_of_wickets: list[FallOfWicket] = []
    score = 0
    overs = 0
    balls = 0

    for ball in innings.ball_events:
        score += ball.runs

        if ball.is_legal_delivery:
            balls += 1
            if balls == BALLS_PER_OVER:
                overs += 1
                balls = 0

        if not ball.is_wicket:
            continue
        if not ball.batsman_uid:
            logger.debug("Skipping wicket without batsman at %d/%d.%d", score, overs, balls)
            continue

        fall_of_wickets.append(
            FallOfWicket(
                wicket_number=len(fall_of_wickets) + 1,
                score=score,
                overs=overs,
                balls=balls,
                batsman_uid=ball.batsman_uid,
            )
        )

    return fall_of_wickets


def calculate_extras(innings: InningsScore) -> ExtrasBreakdown:
    """Wide and no-ball runs.

    A delivery flagged both wide and no-ball counts towards both buckets.
    """
    wides = sum(ball.runs for ball in innings.ball_events if ball.is_wide)
    no_balls = sum(ball.runs for ball in innings.ball_events if ball.is_no_ball)
    return ExtrasBreakdown(wides=wides, no_balls=no_balls, total=wides + no_balls)


def calculate_over_summary(innings: InningsScore) -> list[OverSummary]:
    """Runs and wickets per over, for the over-by-over chart.

    Extras after the last legal ball of the innings are dropped, since
    they belong to an over with no legal balls yet.
    """
    summaries: list[OverSummary] = []
    over_runs = 0
    over_wickets = 0
    legal_balls = 0

    for ball in innings.ball_events:
        over_runs += ball.runs
        if ball.is_wicket:
            over_wickets += 1

        if not ball.is_legal_delivery:
            continue
        legal_balls += 1
        if legal_balls == BALLS_PER_OVER:
            summaries.append(
                OverSummary(
                    over_number=len(summaries) + 1,
                    runs=over_runs,
                    wickets=over_wickets,
                )
            )
            over_runs = 0
            over_wickets = 0
            legal_balls = 0

    if legal_balls > 0:
        summaries.append(
            OverSummary(
                over_number=len(summaries) + 1,
                runs=over_runs,
                wickets=over_wickets,
            )
        )

    return summaries

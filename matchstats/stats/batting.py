"""
Batting figures for an innings.

A batsman is either still at the crease (the scorer's live record is
authoritative for runs and balls) or has finished batting (everything
is replayed from the delivery log). The two cases count dots
differently, so they are kept as separate state types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from matchstats.data.ball_event import BallEvent, Batsman, InningsScore
from matchstats.utils.rounding import round_half_up


@dataclass(frozen=True)
class BattingStats:
    """Batting line for one player in an innings."""
    uid: str
    runs: int = 0
    balls: int = 0
    strike_rate: float = 0.0
    fours: int = 0
    sixes: int = 0
    dots: int = 0
    is_out: bool = False


@dataclass(frozen=True)
class LiveBattingState:
    """Player is at the crease; the scorer's record carries runs and balls."""
    batsman: Batsman


@dataclass(frozen=True)
class CompletedBattingState:
    """Player is out, retired, or never batted; only the log is used."""
    uid: str


BattingState = Union[LiveBattingState, CompletedBattingState]


def strike_rate(runs: int, balls: int) -> float:
    """Runs per 100 balls, rounded to 2 decimals."""
    return round_half_up(runs / balls * 100, 2) if balls > 0 else 0.0


def resolve_batting_state(
    player_uid: str, current_batsmen: Iterable[Batsman]
) -> BattingState:
    for batsman in current_batsmen:
        if batsman.uid == player_uid:
            return LiveBattingState(batsman=batsman)
    return CompletedBattingState(uid=player_uid)


def _deliveries_faced(
    ball_events: Sequence[BallEvent], uid: str
) -> Iterable[BallEvent]:
    return (ball for ball in ball_events if ball.batsman_uid == uid)


def _live_batting_stats(
    ball_events: Sequence[BallEvent], state: LiveBattingState
) -> BattingStats:
    batsman = state.batsman
    fours = sixes = dots = 0
    # Dots here include wides and no-balls credited to the striker
    for ball in _deliveries_faced(ball_events, batsman.uid):
        if ball.runs == 4:
            fours += 1
        if ball.runs == 6:
            sixes += 1
        if ball.is_dot_ball:
            dots += 1

    return BattingStats(
        uid=batsman.uid,
        runs=batsman.runs,
        balls=batsman.balls,
        strike_rate=strike_rate(batsman.runs, batsman.balls),
        fours=fours,
        sixes=sixes,
        dots=dots,
        is_out=False,
    )


def _completed_batting_stats(
    ball_events: Sequence[BallEvent], state: CompletedBattingState
) -> BattingStats:
    runs = balls = fours = sixes = dots = 0
    is_out = False
    for ball in _deliveries_faced(ball_events, state.uid):
        runs += ball.runs
        if ball.is_legal_delivery:
            balls += 1
            if ball.is_dot_ball:
                dots += 1
        if ball.runs == 4:
            fours += 1
        if ball.runs == 6:
            sixes += 1
        if ball.is_wicket:
            is_out = True

    return BattingStats(
        uid=state.uid,
        runs=runs,
        balls=balls,
        strike_rate=strike_rate(runs, balls),
        fours=fours,
        sixes=sixes,
        dots=dots,
        is_out=is_out,
    )


def calculate_batting_stats(
    innings: InningsScore,
    player_uid: str,
    current_batsmen: Iterable[Batsman] = (),
) -> BattingStats:
    """Calculate one player's batting line for an innings.

    Args:
        innings: Innings with its delivery log
        player_uid: Player to report on
        current_batsmen: Live crease overlay; empty once the innings is over

    Returns:
        The batting line. A player who never faced a ball and is not at
        the crease gets an all-zero line with ``is_out=False``.
    """
    state = resolve_batting_state(player_uid, current_batsmen)
    if isinstance(state, LiveBattingState):
        return _live_batting_stats(innings.ball_events, state)
    return _completed_batting_stats(innings.ball_events, state)


def get_all_batsmen_in_innings(
    innings: InningsScore, current_batsmen: Iterable[Batsman] = ()
) -> list[str]:
    """Everyone who batted: current batsmen first, then log order."""
    uids: dict[str, None] = {}
    for batsman in current_batsmen:
        uids.setdefault(batsman.uid, None)
    for ball in innings.ball_events:
        if ball.batsman_uid:
            uids.setdefault(ball.batsman_uid, None)
    return list(uids)

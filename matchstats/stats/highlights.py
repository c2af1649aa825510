"""
Match highlight selection: top scorer, best bowler, highest partnership
and best strike rate.

Each selector is a left fold against a sentinel, so ties go to whichever
candidate came first and ``None`` means nobody beat the sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional

from matchstats.config import MIN_STRIKE_RATE_BALLS, StatsConfig
from matchstats.stats.batting import BattingStats
from matchstats.stats.bowling import BowlingStats
from matchstats.stats.partnerships import Partnership

# Starting point for best bowler: anyone who has bowled beats this economy
_NO_BOWLER = BowlingStats(uid="", economy=999.0)
_NO_BATSMAN = BattingStats(uid="")
_NO_PARTNERSHIP = Partnership(runs=0, wicket_number=0, batsman1_uid="", batsman2_uid="")


@dataclass(frozen=True)
class MatchHighlights:
    top_scorer: Optional[BattingStats] = None
    best_bowler: Optional[BowlingStats] = None
    highest_partnership: Optional[Partnership] = None
    best_strike_rate: Optional[BattingStats] = None


def _better_bowler(best: BowlingStats, stat: BowlingStats) -> BowlingStats:
    if stat.wickets == 0 and best.wickets == 0:
        # Zero economy means the bowler has not bowled; never prefer that
        if stat.economy > 0 and (best.economy == 0 or stat.economy < best.economy):
            return stat
        return best
    if stat.wickets > best.wickets:
        return stat
    if stat.wickets == best.wickets and stat.economy < best.economy:
        return stat
    return best


def top_scorer(batting: Iterable[BattingStats]) -> Optional[BattingStats]:
    best = reduce(lambda best, s: s if s.runs > best.runs else best, batting, _NO_BATSMAN)
    return None if best is _NO_BATSMAN else best


def best_bowler(bowling: Iterable[BowlingStats]) -> Optional[BowlingStats]:
    """Most wickets, then lowest economy."""
    best = reduce(_better_bowler, bowling, _NO_BOWLER)
    return None if best is _NO_BOWLER else best


def highest_partnership(partnerships: Iterable[Partnership]) -> Optional[Partnership]:
    best = reduce(
        lambda best, p: p if p.runs > best.runs else best, partnerships, _NO_PARTNERSHIP
    )
    return None if best is _NO_PARTNERSHIP else best


def best_strike_rate(
    batting: Iterable[BattingStats], min_balls: int = MIN_STRIKE_RATE_BALLS
) -> Optional[BattingStats]:
    """Highest strike rate among batsmen who faced at least ``min_balls``."""
    qualified = (s for s in batting if s.balls >= min_balls)
    best = reduce(
        lambda best, s: s if s.strike_rate > best.strike_rate else best,
        qualified,
        _NO_BATSMAN,
    )
    return None if best is _NO_BATSMAN else best


def select_highlights(
    batting: Iterable[BattingStats],
    bowling: Iterable[BowlingStats],
    partnerships: Iterable[Partnership],
    config: Optional[StatsConfig] = None,
) -> MatchHighlights:
    config = config or StatsConfig()
    batting = list(batting)
    return MatchHighlights(
        top_scorer=top_scorer(batting),
        best_bowler=best_bowler(bowling),
        highest_partnership=highest_partnership(partnerships),
        best_strike_rate=best_strike_rate(batting, config.min_strike_rate_balls),
    )

"""
Innings and match reports.

Assembles everything the match statistics screen shows from one stored
match: a full stats bundle per innings, highlights across both teams,
and a side-by-side team comparison.

Usage:
    reporter = MatchReporter(config)
    report = reporter.match_report(match)
    print(report.summary_str(players))
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

import numpy as np

from matchstats.config import UNKNOWN_PLAYER_NAME, StatsConfig, TeamSide
from matchstats.data.ball_event import Batsman, InningsScore, Match, Player
from matchstats.report.players import player_lookup, player_name
from matchstats.stats.batting import (
    BattingStats,
    calculate_batting_stats,
    get_all_batsmen_in_innings,
)
from matchstats.stats.bowling import (
    BowlingStats,
    calculate_bowling_stats,
    get_all_bowlers_in_innings,
)
from matchstats.stats.highlights import (
    MatchHighlights,
    best_bowler,
    select_highlights,
    top_scorer,
)
from matchstats.stats.partnerships import Partnership, calculate_partnerships
from matchstats.stats.timeline import (
    ExtrasBreakdown,
    FallOfWicket,
    OverSummary,
    calculate_extras,
    calculate_fall_of_wickets,
    calculate_over_summary,
)
from matchstats.utils.cache import StatsCache
from matchstats.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InningsReport:
    """All derived statistics for one innings."""

    batting: tuple[BattingStats, ...] = ()
    bowling: tuple[BowlingStats, ...] = ()
    partnerships: tuple[Partnership, ...] = ()
    fall_of_wickets: tuple[FallOfWicket, ...] = ()
    extras: ExtrasBreakdown = field(default_factory=ExtrasBreakdown)
    over_summary: tuple[OverSummary, ...] = ()
    top_scorer_uid: str = ""
    best_bowler_uid: str = ""

    @property
    def boundaries(self) -> int:
        return sum(s.fours + s.sixes for s in self.batting)


@dataclass(frozen=True)
class TeamComparisonLine:
    """One team's column in the team comparison chart."""
    name: str
    runs: int
    wickets: int
    run_rate: float
    boundaries: int
    extras: int
    worm: tuple[int, ...] = ()  # Cumulative runs at the end of each over


@dataclass(frozen=True)
class TeamComparison:
    team_a: TeamComparisonLine
    team_b: TeamComparisonLine


@dataclass(frozen=True)
class MatchReport:
    match_id: str
    team_a: InningsReport
    team_b: InningsReport
    highlights: MatchHighlights
    comparison: TeamComparison

    def summary_str(
        self, players: Iterable[Player] = (), unknown_name: str = UNKNOWN_PLAYER_NAME
    ) -> str:
        """Human-readable summary of the comparison and highlights."""
        lookup = player_lookup(players)
        a, b = self.comparison.team_a, self.comparison.team_b
        lines = [
            f"=== MATCH {self.match_id} ===",
            f"{a.name}: {a.runs}/{a.wickets} (RR {a.run_rate:.1f})",
            f"{b.name}: {b.runs}/{b.wickets} (RR {b.run_rate:.1f})",
            "--- Highlights ---",
        ]
        h = self.highlights
        if h.top_scorer:
            lines.append(
                f"Top Scorer: {player_name(h.top_scorer.uid, lookup, unknown_name)} "
                f"{h.top_scorer.runs} ({h.top_scorer.balls})"
            )
        if h.best_bowler and h.best_bowler.wickets > 0:
            lines.append(
                f"Best Bowler: {player_name(h.best_bowler.uid, lookup, unknown_name)} "
                f"{h.best_bowler.wickets} wkts (Econ {h.best_bowler.economy:.2f})"
            )
        if h.highest_partnership:
            p = h.highest_partnership
            lines.append(
                f"Highest Partnership: {p.runs} runs, "
                f"{player_name(p.batsman1_uid, lookup, unknown_name)} & "
                f"{player_name(p.batsman2_uid, lookup, unknown_name)}"
            )
        if h.best_strike_rate:
            lines.append(
                f"Best Strike Rate: {player_name(h.best_strike_rate.uid, lookup, unknown_name)} "
                f"SR {h.best_strike_rate.strike_rate:.0f}"
            )
        return "\n".join(lines) + "\n"


def build_innings_report(
    innings: InningsScore, current_batsmen: Iterable[Batsman] = ()
) -> InningsReport:
    """Compute every statistic for one innings.

    ``current_batsmen`` should only be passed for the innings in progress.
    """
    current_batsmen = tuple(current_batsmen)
    batting = tuple(
        calculate_batting_stats(innings, uid, current_batsmen)
        for uid in get_all_batsmen_in_innings(innings, current_batsmen)
    )
    bowling = tuple(
        calculate_bowling_stats(innings, uid)
        for uid in get_all_bowlers_in_innings(innings)
    )
    leader = top_scorer(batting)
    bowler = best_bowler(bowling)
    return InningsReport(
        batting=batting,
        bowling=bowling,
        partnerships=tuple(calculate_partnerships(innings, current_batsmen)),
        fall_of_wickets=tuple(calculate_fall_of_wickets(innings)),
        extras=calculate_extras(innings),
        over_summary=tuple(calculate_over_summary(innings)),
        top_scorer_uid=leader.uid if leader else "",
        best_bowler_uid=bowler.uid if bowler else "",
    )


def run_rate(innings: InningsScore) -> float:
    """Scorer's runs per over, rounded to 1 decimal."""
    overs = innings.overs_decimal
    return round_half_up(innings.runs / overs, 1) if overs > 0 else 0.0


def worm(over_summary: Iterable[OverSummary]) -> tuple[int, ...]:
    runs = np.array([o.runs for o in over_summary], dtype=np.int64)
    return tuple(int(r) for r in np.cumsum(runs))


def comparison_line(name: str, innings: InningsScore, report: InningsReport) -> TeamComparisonLine:
    # Unlike the extras breakdown, a wide no-ball is only counted once here
    extras = sum(b.runs for b in innings.ball_events if b.is_wide or b.is_no_ball)
    return TeamComparisonLine(
        name=name,
        runs=innings.runs,
        wickets=innings.wickets,
        run_rate=run_rate(innings),
        boundaries=report.boundaries,
        extras=extras,
        worm=worm(report.over_summary),
    )


class MatchReporter:
    """Builds match reports, memoised on the content of the match.

    Re-requesting a report for an unchanged match returns the cached
    result; any change to the match produces a new key.
    """

    def __init__(
        self,
        config: Optional[StatsConfig] = None,
        cache: Optional[StatsCache] = None,
    ):
        self._config = config or StatsConfig()
        self._cache = (
            cache if cache is not None
            else StatsCache(max_entries=self._config.cache_max_entries)
        )

    @property
    def cache(self) -> StatsCache:
        return self._cache

    def innings_report(
        self, innings: InningsScore, current_batsmen: Iterable[Batsman] = ()
    ) -> InningsReport:
        current_batsmen = tuple(current_batsmen)
        snapshot = {
            "kind": "innings",
            "innings": dataclasses.asdict(innings),
            "current_batsmen": [dataclasses.asdict(b) for b in current_batsmen],
        }
        return self._cache.get_or_compute(
            snapshot, lambda: build_innings_report(innings, current_batsmen)
        )

    def match_report(self, match: Match) -> MatchReport:
        snapshot = {"kind": "match", "match": dataclasses.asdict(match)}
        return self._cache.get_or_compute(snapshot, lambda: self._build(match))

    def summary(self, match: Match, players: Iterable[Player] = ()) -> str:
        return self.match_report(match).summary_str(
            players, self._config.unknown_player_name
        )

    def _build(self, match: Match) -> MatchReport:
        team_a = self.innings_report(
            match.team_a_innings, match.live_batsmen_for(TeamSide.TEAM_A)
        )
        team_b = self.innings_report(
            match.team_b_innings, match.live_batsmen_for(TeamSide.TEAM_B)
        )
        highlights = select_highlights(
            team_a.batting + team_b.batting,
            team_a.bowling + team_b.bowling,
            team_a.partnerships + team_b.partnerships,
            self._config,
        )
        logger.debug("Built report for match %s", match.match_id)
        return MatchReport(
            match_id=match.match_id,
            team_a=team_a,
            team_b=team_b,
            highlights=highlights,
            comparison=TeamComparison(
                team_a=comparison_line(match.team_a.name, match.team_a_innings, team_a),
                team_b=comparison_line(match.team_b.name, match.team_b_innings, team_b),
            ),
        )


def build_match_report(match: Match, config: Optional[StatsConfig] = None) -> MatchReport:
    """Uncached match report."""
    return MatchReporter(config, cache=StatsCache(max_entries=0)).match_report(match)

"""Tests for innings and match reports."""

from __future__ import annotations

import dataclasses

import pytest

from matchstats.config import StatsConfig, TeamSide
from matchstats.data.ball_event import Batsman, InningsScore, Match, Player
from matchstats.report.match_report import (
    MatchReporter,
    build_innings_report,
    build_match_report,
    run_rate,
    worm,
)
from matchstats.report.players import player_lookup, player_name
from matchstats.stats.timeline import ExtrasBreakdown, OverSummary
from matchstats.utils.cache import StatsCache
from matchstats.utils.rounding import round_half_up


class TestInningsReport:
    def test_completed_innings(self, completed_innings: InningsScore):
        report = build_innings_report(completed_innings)

        assert [s.uid for s in report.batting] == ["Bat_1", "Bat_2", "Bat_3"]
        assert [s.uid for s in report.bowling] == ["Bowl_1", "Bowl_2"]
        assert len(report.partnerships) == 2
        assert len(report.fall_of_wickets) == 1
        assert report.extras == ExtrasBreakdown(wides=1, no_balls=0, total=1)
        assert len(report.over_summary) == 2
        assert report.top_scorer_uid == "Bat_1"
        assert report.best_bowler_uid == "Bowl_1"
        assert report.boundaries == 3

    def test_empty_innings(self):
        report = build_innings_report(InningsScore())
        assert report.batting == ()
        assert report.top_scorer_uid == ""
        assert report.best_bowler_uid == ""

    def test_live_overlay(self, t20_match: Match):
        report = build_innings_report(t20_match.team_b_innings, t20_match.current_batsmen)
        opp_2 = next(s for s in report.batting if s.uid == "Opp_2")

        assert opp_2.runs == 4
        assert opp_2.balls == 2
        assert opp_2.dots == 1
        assert not opp_2.is_out


class TestMatchReport:
    def test_overlay_only_applies_to_batting_side(self, t20_match: Match):
        assert t20_match.live_batsmen_for(TeamSide.TEAM_A) == ()
        assert len(t20_match.live_batsmen_for(TeamSide.TEAM_B)) == 2

        # Bat_2 listed at the crease must not affect the completed innings
        match = dataclasses.replace(
            t20_match, current_batsmen=(Batsman(uid="Bat_2", runs=99, balls=1),)
        )
        report = build_match_report(match)
        bat_2 = next(s for s in report.team_a.batting if s.uid == "Bat_2")
        assert bat_2.runs == 5

    def test_highlights_across_both_teams(self, t20_match: Match):
        highlights = build_match_report(t20_match).highlights

        assert highlights.top_scorer.uid == "Bat_1"
        assert highlights.best_bowler.uid == "Bowl_1"
        assert highlights.highest_partnership.runs == 12
        assert highlights.best_strike_rate is None

    def test_team_comparison(self, t20_match: Match):
        comparison = build_match_report(t20_match).comparison

        assert comparison.team_a.name == "Thunder"
        assert comparison.team_a.runs == 20
        assert comparison.team_a.run_rate == 13.3
        assert comparison.team_a.boundaries == 3
        assert comparison.team_a.extras == 1
        assert comparison.team_a.worm == (13, 20)

        assert comparison.team_b.run_rate == 10.0
        assert comparison.team_b.boundaries == 1
        assert comparison.team_b.worm == (5,)

    def test_summary_str(self, t20_match: Match, players: list[Player]):
        text = build_match_report(t20_match).summary_str(players)

        assert "=== MATCH test_t20_001 ===" in text
        assert "Thunder: 20/1 (RR 13.3)" in text
        assert "Top Scorer: Asha 11 (5)" in text
        assert "Best Bowler: Kiran 1 wkts (Econ 13.00)" in text
        assert "Highest Partnership: 12 runs, Asha & Ravi" in text
        assert "Best Strike Rate" not in text

    def test_summary_str_unknown_players(self, t20_match: Match):
        text = build_match_report(t20_match).summary_str([])
        assert "Top Scorer: Unknown 11 (5)" in text

    def test_reporter_summary_uses_configured_fallback(self, t20_match: Match):
        reporter = MatchReporter(StatsConfig(unknown_player_name="Guest"))
        assert "Top Scorer: Guest 11 (5)" in reporter.summary(t20_match)


class TestMatchReporterCache:
    def test_unchanged_match_is_cached(self, t20_match: Match, stats_config: StatsConfig):
        reporter = MatchReporter(stats_config)

        first = reporter.match_report(t20_match)
        second = reporter.match_report(t20_match)

        assert first is second
        assert reporter.cache.hits == 1

    def test_changed_match_is_recomputed(self, t20_match: Match, stats_config: StatsConfig):
        reporter = MatchReporter(stats_config)
        first = reporter.match_report(t20_match)

        moved_on = dataclasses.replace(
            t20_match,
            current_batsmen=(
                Batsman(uid="Opp_1", runs=7, balls=2),
                Batsman(uid="Opp_2", runs=4, balls=2),
            ),
        )
        second = reporter.match_report(moved_on)

        assert first is not second
        assert first.team_a == second.team_a  # Team A innings reused from cache
        opp_1 = next(s for s in second.team_b.batting if s.uid == "Opp_1")
        assert opp_1.runs == 7

    def test_uncached_build_matches_cached(self, t20_match: Match):
        assert build_match_report(t20_match) == MatchReporter().match_report(t20_match)

    def test_empty_cache_is_used_as_given(self):
        cache = StatsCache(max_entries=4)
        reporter = MatchReporter(cache=cache)
        reporter.innings_report(InningsScore())
        assert reporter.cache is cache
        assert len(cache) == 1


class TestComparisonHelpers:
    def test_run_rate(self):
        assert run_rate(InningsScore(runs=45, overs=5, balls=0)) == 9.0
        assert run_rate(InningsScore(runs=10, overs=0, balls=0)) == 0.0

    @pytest.mark.parametrize(
        "runs,overs,balls,expected",
        [(25, 4, 0, 6.3), (13, 2, 0, 6.5), (20, 1, 3, 13.3)],
    )
    def test_run_rate_half_rounds_up(self, runs, overs, balls, expected):
        assert run_rate(InningsScore(runs=runs, overs=overs, balls=balls)) == expected

    @pytest.mark.parametrize(
        "value,places,expected",
        [(3.125, 2, 3.13), (6.25, 1, 6.3), (2.675, 2, 2.67), (0.0, 2, 0.0)],
    )
    def test_round_half_up(self, value, places, expected):
        assert round_half_up(value, places) == expected

    def test_worm(self):
        overs = [OverSummary(1, 8, 0), OverSummary(2, 3, 1), OverSummary(3, 12, 0)]
        assert worm(overs) == (8, 11, 23)
        assert worm([]) == ()


class TestPlayerNames:
    def test_known_player(self, players: list[Player]):
        assert player_name("Bat_2", players) == "Ravi"

    def test_unknown_player(self, players: list[Player]):
        assert player_name("Ghost", players) == "Unknown"
        assert player_name("Ghost", players, default="?") == "?"

    def test_blank_name_falls_back(self):
        assert player_name("A", [Player(uid="A", name="")]) == "Unknown"

    def test_lookup_first_wins(self):
        lookup = player_lookup([Player(uid="A", name="One"), Player(uid="A", name="Two")])
        assert player_name("A", lookup) == "One"

    @pytest.mark.parametrize("uid", ["", "Bat_1 "])
    def test_near_misses(self, uid, players: list[Player]):
        assert player_name(uid, players) == "Unknown"

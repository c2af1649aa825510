"""Shared test fixtures for match statistics tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from matchstats.config import MatchStatus, StatsConfig, TeamSide
from matchstats.data.ball_event import (
    Batsman,
    Bowler,
    InningsScore,
    Match,
    Player,
    Team,
)
from matchstats.tests.builders import make_ball, make_innings


@pytest.fixture
def stats_config() -> StatsConfig:
    """Standard test configuration."""
    return StatsConfig(
        min_strike_rate_balls=10,
        unknown_player_name="Unknown",
        recent_match_limit=10,
        cache_max_entries=16,
    )


@pytest.fixture
def players() -> list[Player]:
    return [
        Player(uid="Bat_1", name="Asha", username="asha"),
        Player(uid="Bat_2", name="Ravi", username="ravi"),
        Player(uid="Bat_3", name="Meera", username="meera"),
        Player(uid="Bowl_1", name="Kiran", username="kiran"),
        Player(uid="Bowl_2", name="Dev", username="dev"),
    ]


@pytest.fixture
def completed_innings() -> InningsScore:
    """Bat_1 and Bat_2 open, Bat_1 is out in the second over, Bat_3 comes in."""
    balls = [
        make_ball(4, "Bat_1"),
        make_ball(0, "Bat_1", dot=True),
        make_ball(1, "Bat_1"),
        make_ball(1, "Bat_2"),
        make_ball(1, None, wide=True),
        make_ball(6, "Bat_1"),
        make_ball(0, "Bat_1", wicket=True),
        make_ball(2, "Bat_3"),
        make_ball(1, "Bat_3"),
        make_ball(4, "Bat_2"),
    ]
    return make_innings(
        balls,
        bowlers=(
            Bowler(uid="Bowl_1", overs=1, balls=0, runs=13, wickets=1, maidens=0),
            Bowler(uid="Bowl_2", overs=0, balls=3, runs=7, wickets=0),
        ),
        runs=20,
        wickets=1,
        overs=1,
        balls=3,
    )


@pytest.fixture
def t20_match(completed_innings: InningsScore) -> Match:
    """Team A has finished batting; Team B is batting with two at the crease."""
    team_b_innings = make_innings(
        [
            make_ball(1, "Opp_1"),
            make_ball(4, "Opp_2"),
            make_ball(0, "Opp_2", dot=True),
        ],
        bowlers=(Bowler(uid="Bat_2", overs=0, balls=3, runs=5),),
        runs=5,
        wickets=0,
        overs=0,
        balls=3,
    )
    return Match(
        match_id="test_t20_001",
        team_a=Team(name="Thunder", player_uids=("Bat_1", "Bat_2", "Bat_3")),
        team_b=Team(name="Strikers", player_uids=("Opp_1", "Opp_2", "Bowl_1", "Bowl_2")),
        status=MatchStatus.LIVE,
        total_overs=20,
        current_innings=2,
        batting_team=TeamSide.TEAM_B,
        current_batsmen=(
            Batsman(uid="Opp_1", runs=1, balls=1),
            Batsman(uid="Opp_2", runs=4, balls=2, is_on_strike=True),
        ),
        team_a_innings=completed_innings,
        team_b_innings=team_b_innings,
        updated_at=datetime(2026, 5, 1, tzinfo=timezone.utc),
    )

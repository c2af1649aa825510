"""
Match document loader.

Converts stored match documents (camelCase JSON as exported from the
document store) into typed match records for the statistics engine.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

from matchstats.config import MatchStatus, TeamSide
from matchstats.data.ball_event import (
    BallEvent,
    Batsman,
    Bowler,
    InningsScore,
    Match,
    Player,
    Team,
)

logger = logging.getLogger(__name__)


def _require_mapping(doc: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(doc, Mapping):
        raise ValueError(f"{what} must be a mapping, got {type(doc).__name__}")
    return doc


def _to_int(doc: Mapping[str, Any], key: str, default: int = 0) -> int:
    value = doc.get(key)
    if value is None:
        return default
    # bool is an int subclass; a flag in a numeric slot is a broken document
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Field '{key}' must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Field '{key}' must be a whole number, got {value!r}")
    return int(value)


def _to_bool(doc: Mapping[str, Any], key: str) -> bool:
    return bool(doc.get(key) or False)


def _to_side(value: Any) -> Optional[TeamSide]:
    if not value:
        return None
    return TeamSide(value)


def _from_epoch_seconds(value: Any) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Timestamp seconds must be a number, got {value!r}")
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError) as e:
        raise ValueError(f"Timestamp out of range: {value!r}") from e


def _to_datetime(value: Any) -> Optional[datetime]:
    """Accepts epoch millis, ISO strings or ``{seconds, nanoseconds}`` maps."""
    if value is None:
        return None
    if isinstance(value, Mapping) and "seconds" in value:
        return _from_epoch_seconds(value["seconds"])
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_epoch_seconds(value / 1000.0)
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise ValueError(f"Unsupported timestamp value: {value!r}")


def ball_event_from_document(doc: Any) -> BallEvent:
    doc = _require_mapping(doc, "Ball event")
    runs = _to_int(doc, "runs")
    if runs < 0:
        raise ValueError(f"Ball event runs cannot be negative: {runs}")
    return BallEvent(
        runs=runs,
        is_wide=_to_bool(doc, "isWide"),
        is_no_ball=_to_bool(doc, "isNoBall"),
        is_wicket=_to_bool(doc, "isWicket"),
        is_dot=_to_bool(doc, "isDot"),
        batsman_uid=doc.get("batsmanUid") or None,
        timestamp=_to_int(doc, "timestamp"),
        bowler_uid=doc.get("bowlerUid") or None,
    )


def batsman_from_document(doc: Any) -> Batsman:
    doc = _require_mapping(doc, "Batsman")
    return Batsman(
        uid=str(doc.get("uid") or ""),
        runs=_to_int(doc, "runs"),
        balls=_to_int(doc, "balls"),
        is_on_strike=_to_bool(doc, "isOnStrike"),
    )


def bowler_from_document(doc: Any) -> Bowler:
    doc = _require_mapping(doc, "Bowler")
    return Bowler(
        uid=str(doc.get("uid") or ""),
        overs=_to_int(doc, "overs"),
        balls=_to_int(doc, "balls"),
        runs=_to_int(doc, "runs"),
        wickets=_to_int(doc, "wickets"),
        maidens=_to_int(doc, "maidens"),
    )


def innings_from_document(doc: Any) -> InningsScore:
    """Build an innings from its stored form. A missing innings is empty."""
    if doc is None:
        return InningsScore()
    doc = _require_mapping(doc, "Innings")
    return InningsScore(
        runs=_to_int(doc, "runs"),
        wickets=_to_int(doc, "wickets"),
        overs=_to_int(doc, "overs"),
        balls=_to_int(doc, "balls"),
        ball_events=tuple(
            ball_event_from_document(b) for b in doc.get("ballEvents") or ()
        ),
        bowlers=tuple(bowler_from_document(b) for b in doc.get("bowlers") or ()),
        current_bowler_uid=doc.get("currentBowlerUid") or None,
        last_bowler_uid=doc.get("lastBowlerUid") or None,
    )


def team_from_document(doc: Any) -> Team:
    doc = _require_mapping(doc, "Team")
    return Team(
        name=str(doc.get("name", "")),
        player_uids=tuple(doc.get("playerUids") or ()),
    )


def player_from_document(doc: Any) -> Player:
    doc = _require_mapping(doc, "Player")
    return Player(
        uid=str(doc.get("uid") or ""),
        name=str(doc.get("name") or ""),
        username=doc.get("username") or None,
    )


def match_from_document(doc: Any, match_id: Optional[str] = None) -> Match:
    """Build a match from a stored match document.

    Args:
        doc: The match document, keyed the way the store keeps it
        match_id: Document id; falls back to the document's ``id`` field

    Raises:
        ValueError: If the document or any nested record is malformed
    """
    doc = _require_mapping(doc, "Match")
    return Match(
        match_id=str(match_id or doc.get("id", "")),
        team_a=team_from_document(doc.get("teamA") or {}),
        team_b=team_from_document(doc.get("teamB") or {}),
        status=MatchStatus(doc.get("status", MatchStatus.UPCOMING.value)),
        total_overs=_to_int(doc, "totalOvers"),
        current_innings=_to_int(doc, "currentInnings", default=1),
        batting_team=_to_side(doc.get("battingTeam")),
        toss_won_by=_to_side(doc.get("tossWonBy")),
        toss_decision=doc.get("tossDecision") or None,
        current_batsmen=tuple(
            batsman_from_document(b) for b in doc.get("currentBatsmen") or ()
        ),
        team_a_innings=innings_from_document(doc.get("teamAInnings")),
        team_b_innings=innings_from_document(doc.get("teamBInnings")),
        updated_at=_to_datetime(doc.get("updatedAt")),
    )


def load_match_from_json(json_path: Path) -> Match:
    """Load a single match from an exported JSON document.

    The file name (without extension) is used as the match id when the
    document carries none.
    """
    json_path = Path(json_path)
    text = json_path.read_text(encoding="utf-8")
    if not text.strip():
        raise ValueError(f"Empty match file: {json_path}")
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {json_path}: {e}") from e

    doc = _require_mapping(doc, "Match")
    match = match_from_document(doc, match_id=doc.get("id") or json_path.stem)
    logger.info(
        "Loaded match %s: %s vs %s, %d + %d deliveries",
        match.match_id,
        match.team_a.name,
        match.team_b.name,
        len(match.team_a_innings.ball_events),
        len(match.team_b_innings.ball_events),
    )
    return match


def load_matches_from_directory(
    directory: Path,
    status: Optional[MatchStatus] = None,
    max_matches: Optional[int] = None,
) -> list[Match]:
    """Load all matches from a directory of exported JSON documents.

    Args:
        directory: Path to directory containing JSON files
        status: Keep only matches with this status
        max_matches: Maximum number of matches to load

    Returns:
        List of matches in file-name order
    """
    json_files = sorted(Path(directory).glob("*.json"))
    if not json_files:
        logger.warning("No JSON files found in %s", directory)
        return []

    matches: list[Match] = []
    for json_file in json_files:
        if max_matches and len(matches) >= max_matches:
            break
        try:
            match = load_match_from_json(json_file)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load %s: %s", json_file.name, e)
            continue
        if status and match.status != status:
            continue
        matches.append(match)

    logger.info("Loaded %d matches from %s", len(matches), directory)
    return matches

"""
Partnership segmentation.

Walks the delivery log and splits it into partnerships at each wicket.
A partnership only has two known batsmen once both have been credited
with a delivery, so a wicket that falls before the second batsman
appears does not close anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from matchstats.data.ball_event import Batsman, InningsScore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Partnership:
    """Runs put on by two batsmen for one wicket."""
    runs: int
    wicket_number: int
    batsman1_uid: str
    batsman2_uid: str
    batsman1_runs: int = 0
    batsman2_runs: int = 0
    balls: int = 0


@dataclass
class PartnershipState:
    """The partnership currently being accumulated."""
    wicket_number: int = 1
    batsman1_uid: Optional[str] = None
    batsman2_uid: Optional[str] = None
    runs: int = 0
    batsman1_runs: int = 0
    batsman2_runs: int = 0
    balls: int = 0

    @property
    def is_established(self) -> bool:
        return bool(self.batsman1_uid and self.batsman2_uid)

    def register(self, uid: str) -> None:
        if not self.batsman1_uid:
            self.batsman1_uid = uid
        elif not self.batsman2_uid and uid != self.batsman1_uid:
            self.batsman2_uid = uid

    def credit(self, uid: str, runs: int, legal: bool) -> None:
        # A batsman in neither slot only adds to the shared total
        self.runs += runs
        if legal:
            self.balls += 1
        if uid == self.batsman1_uid:
            self.batsman1_runs += runs
        elif uid == self.batsman2_uid:
            self.batsman2_runs += runs

    def close(self) -> Partnership:
        return Partnership(
            runs=self.runs,
            wicket_number=self.wicket_number,
            batsman1_uid=self.batsman1_uid or "",
            batsman2_uid=self.batsman2_uid or "",
            batsman1_runs=self.batsman1_runs,
            batsman2_runs=self.batsman2_runs,
            balls=self.balls,
        )

    def next_after_wicket(self, dismissed_uid: str) -> "PartnershipState":
        survivor = (
            self.batsman2_uid if dismissed_uid == self.batsman1_uid else self.batsman1_uid
        )
        return PartnershipState(
            wicket_number=self.wicket_number + 1,
            batsman1_uid=survivor,
        )


def calculate_partnerships(
    innings: InningsScore, current_batsmen: Iterable[Batsman] = ()
) -> list[Partnership]:
    """Split the innings log into partnerships.

    ``current_batsmen`` is accepted alongside the other innings calculators;
    the open partnership is read from the log itself.

    Returns:
        Closed partnerships in wicket order, followed by the unbroken
        partnership if both of its batsmen are known and it has runs.
    """
    partnerships: list[Partnership] = []
    state = PartnershipState()

    for ball in innings.ball_events:
        if not ball.batsman_uid:
            continue

        state.register(ball.batsman_uid)
        state.credit(ball.batsman_uid, ball.runs, ball.is_legal_delivery)

        if ball.is_wicket:
            if state.is_established:
                partnerships.append(state.close())
                state = state.next_after_wicket(ball.batsman_uid)
            else:
                logger.debug(
                    "Wicket before partnership %d was established; not closed",
                    state.wicket_number,
                )

    if state.is_established and state.runs > 0:
        partnerships.append(state.close())

    return partnerships

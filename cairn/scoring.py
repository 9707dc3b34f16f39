"""
Capture/escape tally across rounds.

Listens to round-end events; one point per captured lobster.
Nothing here is persisted.
"""

import logging
from dataclasses import dataclass, field

from .board import Outcome, TurnEvent

logger = logging.getLogger(__name__)


@dataclass
class RoundRecord:
    """Summary of one finished round."""
    round_number: int
    outcome: str
    placements: int


@dataclass
class ScoreTracker:
    """Running tally fed by TurnController.on_round_end."""
    captured: int = 0
    escaped: int = 0
    history: list[RoundRecord] = field(default_factory=list)

    @property
    def points(self) -> int:
        return self.captured

    @property
    def rounds_played(self) -> int:
        return len(self.history)

    def record(self, event: TurnEvent):
        """Record a terminal event; non-terminal events are ignored."""
        if event.outcome is Outcome.CAPTURED:
            self.captured += 1
        elif event.outcome is Outcome.ESCAPED:
            self.escaped += 1
        else:
            return

        self.history.append(RoundRecord(
            round_number=event.round_number,
            outcome=event.outcome.value,
            placements=event.turn,
        ))
        logger.info(f"Score: {self.captured} captured, {self.escaped} escaped")

    def get_summary(self) -> dict:
        placements = [r.placements for r in self.history if r.outcome == Outcome.CAPTURED.value]
        return {
            "rounds": self.rounds_played,
            "captured": self.captured,
            "escaped": self.escaped,
            "points": self.points,
            "capture_rate": round(self.captured / self.rounds_played, 3) if self.history else 0.0,
            "avg_placements_to_capture": (
                round(sum(placements) / len(placements), 2) if placements else None
            ),
        }

"""
Turn sequencing for the trapping game.

Serialises each player turn: placement → escape search → move/escape/capture
→ animation hold → next turn. The hold is measured on an injectable clock;
placements during the hold are rejected, not queued.

The controller also keeps the session clock: an optional limit on unpaused
play time across rounds. Pausing freezes both the hold and the session clock.
"""

import time
import random
import logging
from dataclasses import replace
from typing import Callable, Optional

from .board import BoardState, Outcome, PlacementResult, RoundState, TurnEvent
from .config import GameConfig
from .errors import RejectReason
from .grid import GridTopology, HexCoordinate

logger = logging.getLogger(__name__)


class TurnController:
    """Sole owner and mutator of the current round's board."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or GameConfig()
        self.topology = GridTopology(self.config.width, self.config.height)
        self.rng = rng or random.Random(self.config.seed)
        self.clock = clock

        self.round_number = 0
        self.board: Optional[BoardState] = None
        self.last_event: Optional[TurnEvent] = None
        self._hold_until: Optional[float] = None

        # Session clock
        self.paused = False
        self._session_start = self.clock()
        self._paused_at: Optional[float] = None
        self._paused_total = 0.0

        # Callbacks for renderer/listener integration
        self.on_state_change: Optional[Callable[[Optional[RoundState], RoundState], None]] = None
        self.on_turn_resolved: Optional[Callable[[TurnEvent], None]] = None
        self.on_round_end: Optional[Callable[[TurnEvent], None]] = None

        self.reset()

    @property
    def safe_cell(self) -> Optional[HexCoordinate]:
        if self.config.safe_cell is None:
            return None
        return HexCoordinate(*self.config.safe_cell)

    @property
    def state(self) -> RoundState:
        self.tick()
        return self.board.state

    def _set_state(self, old: Optional[RoundState], new: RoundState):
        if self.on_state_change and old is not new:
            self.on_state_change(old, new)

    def _now(self) -> float:
        """Clock reading, held at the pause instant while paused."""
        return self._paused_at if self.paused else self.clock()

    def reset(self) -> BoardState:
        """Start a new round from any state, discarding the board and any hold."""
        old_state = self.board.state if self.board else None
        self.round_number += 1
        self._hold_until = None
        self.last_event = None
        self.board = BoardState.new_round(
            self.topology,
            self.rng,
            density=self.config.obstacle_density,
            safe_cell=self.safe_cell,
            reroll_enclosed=self.config.reroll_enclosed,
            max_rerolls=self.config.max_rerolls,
            round_number=self.round_number,
        )
        logger.info(
            f"Round {self.round_number} started: agent at {self.board.agent.position}, "
            f"{len(self.board.obstacles)} obstacles"
        )
        self._set_state(old_state, self.board.state)
        return self.board

    def tick(self) -> bool:
        """End the animation hold once its deadline has passed."""
        if self.paused:
            return False
        if self.board.state is not RoundState.ANIMATING or self._hold_until is None:
            return False
        if self.clock() < self._hold_until:
            return False

        self._hold_until = None
        self.board.finish_animation()
        self._set_state(RoundState.ANIMATING, RoundState.AWAITING_INPUT)
        return True

    def hold_remaining(self) -> float:
        """Seconds until input re-opens; 0 when not animating."""
        if self.board.state is not RoundState.ANIMATING or self._hold_until is None:
            return 0.0
        return max(0.0, self._hold_until - self._now())

    # Pause and session clock
    def pause(self) -> bool:
        """Freeze input, the animation hold and the session clock."""
        if self.paused:
            return False
        self.tick()
        self._paused_at = self.clock()
        self.paused = True
        logger.info(f"Paused in round {self.round_number}")
        return True

    def resume(self) -> bool:
        """Continue from where pause() froze everything."""
        if not self.paused:
            return False
        frozen = self.clock() - self._paused_at
        if self._hold_until is not None:
            self._hold_until += frozen
        self._paused_total += frozen
        self._paused_at = None
        self.paused = False
        logger.info(f"Resumed after {frozen:.1f}s")
        return True

    def time_remaining(self) -> Optional[float]:
        """Unpaused play time left in the session, or None without a limit."""
        limit = self.config.session_time_limit
        if limit is None:
            return None
        elapsed = self._now() - self._session_start - self._paused_total
        return max(0.0, limit - elapsed)

    @property
    def time_up(self) -> bool:
        return self.time_remaining() == 0.0

    def place_obstacle(self, coord: HexCoordinate) -> PlacementResult:
        """Accept one placement and resolve the agent's response synchronously."""
        self.tick()
        board = self.board

        if self.paused:
            logger.debug(f"Placement at {coord} rejected: paused")
            return PlacementResult.rejected(coord, RejectReason.PAUSED)
        if self.time_up:
            logger.debug(f"Placement at {coord} rejected: session time is up")
            return PlacementResult.rejected(coord, RejectReason.TIME_UP)
        if board.state is not RoundState.AWAITING_INPUT:
            logger.debug(f"Placement at {coord} rejected: board is {board.state.value}")
            return PlacementResult.rejected(coord, RejectReason.NOT_ACCEPTING_INPUT)

        result = board.place_obstacle(coord)
        if not result.accepted:
            logger.debug(f"Placement at {coord} rejected: {result.reason.value}")
            return result

        self._set_state(RoundState.AWAITING_INPUT, RoundState.RESOLVING)
        event = board.resolve_turn()
        self.last_event = event

        if event.outcome is Outcome.MOVED:
            self._hold_until = self.clock() + self.config.animation_hold
        self._set_state(RoundState.RESOLVING, board.state)

        if self.on_turn_resolved:
            self.on_turn_resolved(event)

        if board.state.is_terminal:
            logger.info(
                f"Round {event.round_number} over: {event.outcome.value} "
                f"after {event.turn} placements"
            )
            if self.on_round_end:
                self.on_round_end(event)

        return replace(result, event=event)

    def snapshot(self) -> dict:
        """Board view plus controller timing, for renderers."""
        self.tick()
        data = self.board.snapshot()
        data["hold_remaining"] = round(self.hold_remaining(), 3)
        data["paused"] = self.paused
        remaining = self.time_remaining()
        data["time_remaining"] = round(remaining, 3) if remaining is not None else None
        return data

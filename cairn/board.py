"""
Board state for one round.

Owns the obstacle set, the agent and the round lifecycle state.
Obstacles only ever grow within a round; a new round builds a new board.
"""

import random
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .agent import EvasionAgent
from .errors import RejectReason
from .grid import Direction, GridTopology, HexCoordinate
from .pathfinding import shortest_escape_route

logger = logging.getLogger(__name__)


class RoundState(Enum):
    AWAITING_INPUT = "awaiting_input"
    RESOLVING = "resolving"
    ANIMATING = "animating"
    CAPTURED = "captured"
    ESCAPED = "escaped"

    @property
    def is_terminal(self) -> bool:
        return self in (RoundState.CAPTURED, RoundState.ESCAPED)


class Outcome(Enum):
    MOVED = "moved"
    ESCAPED = "escaped"
    CAPTURED = "captured"


@dataclass(frozen=True)
class TurnEvent:
    """Result of one resolved turn, as handed to renderers and listeners."""
    outcome: Outcome
    round_number: int
    turn: int
    placed: HexCoordinate
    old_position: HexCoordinate
    new_position: HexCoordinate
    facing: Optional[Direction]
    obstacles: frozenset = field(default_factory=frozenset)

    @property
    def will_escape(self) -> bool:
        return self.outcome is Outcome.ESCAPED

    @property
    def captured(self) -> bool:
        return self.outcome is Outcome.CAPTURED

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "round": self.round_number,
            "turn": self.turn,
            "placed": self.placed.to_dict(),
            "old_position": self.old_position.to_dict(),
            "new_position": self.new_position.to_dict(),
            "facing": self.facing.degrees if self.facing else 0,
            "will_escape": self.will_escape,
            "captured": self.captured,
            "obstacles": [c.to_dict() for c in sorted(self.obstacles)],
        }


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of a placement attempt. Rejections leave everything unchanged."""
    accepted: bool
    cell: HexCoordinate
    reason: Optional[RejectReason] = None
    event: Optional[TurnEvent] = None

    @classmethod
    def ok(cls, cell: HexCoordinate) -> "PlacementResult":
        return cls(accepted=True, cell=cell)

    @classmethod
    def rejected(cls, cell: HexCoordinate, reason: RejectReason) -> "PlacementResult":
        return cls(accepted=False, cell=cell, reason=reason)

    def to_dict(self) -> dict:
        return {
            "accepted": self.accepted,
            "cell": self.cell.to_dict(),
            "reason": self.reason.value if self.reason else None,
            "event": self.event.to_dict() if self.event else None,
        }


class BoardState:
    """Obstacles, agent and lifecycle state of a single round."""

    def __init__(
        self,
        topology: GridTopology,
        agent: EvasionAgent,
        obstacles: Optional[Iterable[HexCoordinate]] = None,
        round_number: int = 1,
        safe_cell: Optional[HexCoordinate] = None,
    ):
        self.topology = topology
        self.agent = agent
        self.obstacles: set[HexCoordinate] = set(obstacles or ())
        self.round_number = round_number
        self.safe_cell = safe_cell
        self.state = RoundState.AWAITING_INPUT
        self.turn = 0
        self._pending: Optional[HexCoordinate] = None

        if agent.position in self.obstacles:
            raise ValueError(f"Agent cell {agent.position} cannot hold an obstacle")

    @classmethod
    def new_round(
        cls,
        topology: GridTopology,
        rng: random.Random,
        density: float = 0.15,
        safe_cell: Optional[HexCoordinate] = None,
        reroll_enclosed: bool = True,
        max_rerolls: int = 100,
        round_number: int = 1,
    ) -> "BoardState":
        """Fresh board: agent at the grid centre, random obstacles around it."""
        spawn = topology.center
        excluded = {spawn}
        if safe_cell is not None:
            excluded.add(safe_cell)
        candidates = [c for c in topology.cells() if c not in excluded]
        count = min(int(density * topology.cell_count), len(candidates))

        attempts = 1 + (max_rerolls if reroll_enclosed else 0)
        for attempt in range(attempts):
            obstacles = set(rng.sample(candidates, count))
            if not reroll_enclosed:
                break
            if shortest_escape_route(spawn, obstacles, topology) is not None:
                break
            logger.debug(f"Round {round_number}: spawn enclosed on attempt {attempt + 1}, rerolling")
        else:
            logger.warning(
                f"Round {round_number}: spawn still enclosed after {max_rerolls} rerolls; "
                f"accepting board"
            )

        return cls(
            topology,
            EvasionAgent(spawn),
            obstacles,
            round_number=round_number,
            safe_cell=safe_cell,
        )

    # Queries
    def is_blocked(self, coord: HexCoordinate) -> bool:
        return coord in self.obstacles

    def free_cells(self) -> list[HexCoordinate]:
        """Cells that would accept an obstacle."""
        return [c for c in self.topology.cells()
                if c not in self.obstacles and c != self.agent.position]

    def escape_route(self) -> Optional[list[HexCoordinate]]:
        return shortest_escape_route(self.agent.position, self.obstacles, self.topology)

    # Mutation
    def place_obstacle(self, coord: HexCoordinate) -> PlacementResult:
        """Block a cell; a resolve_turn() call is owed afterwards."""
        if self.state is not RoundState.AWAITING_INPUT:
            return PlacementResult.rejected(coord, RejectReason.NOT_ACCEPTING_INPUT)
        if not self.topology.is_in_bounds(coord):
            return PlacementResult.rejected(coord, RejectReason.OUT_OF_BOUNDS)
        if coord in self.obstacles:
            return PlacementResult.rejected(coord, RejectReason.OCCUPIED_BY_OBSTACLE)
        if coord == self.agent.position:
            return PlacementResult.rejected(coord, RejectReason.OCCUPIED_BY_AGENT)

        self.obstacles.add(coord)
        self.turn += 1
        self._pending = coord
        self.state = RoundState.RESOLVING
        return PlacementResult.ok(coord)

    def resolve_turn(self) -> TurnEvent:
        """Move the agent one step along its fresh escape route, or capture it."""
        if self.state is not RoundState.RESOLVING or self._pending is None:
            raise RuntimeError("No placement awaiting resolution")

        placed = self._pending
        self._pending = None
        old_position = self.agent.position
        step = self.agent.compute_next_step(self)

        if step.captured:
            outcome = Outcome.CAPTURED
            self.state = RoundState.CAPTURED
        else:
            self.agent.move_to(step.next_cell, self)
            if step.will_escape:
                outcome = Outcome.ESCAPED
                self.state = RoundState.ESCAPED
            else:
                outcome = Outcome.MOVED
                self.state = RoundState.ANIMATING

        return TurnEvent(
            outcome=outcome,
            round_number=self.round_number,
            turn=self.turn,
            placed=placed,
            old_position=old_position,
            new_position=self.agent.position,
            facing=self.agent.facing,
            obstacles=frozenset(self.obstacles),
        )

    def finish_animation(self) -> bool:
        """Re-open the board for input after a move animation."""
        if self.state is not RoundState.ANIMATING:
            return False
        self.state = RoundState.AWAITING_INPUT
        return True

    def snapshot(self) -> dict:
        """Renderer view of the board."""
        return {
            "width": self.topology.width,
            "height": self.topology.height,
            "round": self.round_number,
            "turn": self.turn,
            "state": self.state.value,
            "agent": {
                **self.agent.position.to_dict(),
                "facing": self.agent.facing_degrees,
            },
            "obstacles": [c.to_dict() for c in sorted(self.obstacles)],
            "safe_cell": self.safe_cell.to_dict() if self.safe_cell else None,
        }

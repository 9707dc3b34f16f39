"""
The fleeing token.

The agent never plans beyond one step: after every obstacle placement it
recomputes the whole escape route and takes its first step.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .grid import Direction, HexCoordinate
from .pathfinding import shortest_escape_route

if TYPE_CHECKING:
    from .board import BoardState


@dataclass(frozen=True)
class Step:
    """Next move of the agent; next_cell is None when it is trapped."""
    next_cell: Optional[HexCoordinate]
    will_escape: bool = False

    @property
    def captured(self) -> bool:
        return self.next_cell is None


@dataclass
class EvasionAgent:
    """Agent position plus facing (presentation only, never used for decisions)."""
    position: HexCoordinate
    facing: Optional[Direction] = None

    def compute_next_step(self, board: "BoardState") -> Step:
        """Derive the next step from a fresh shortest escape route."""
        topology = board.topology
        route = shortest_escape_route(self.position, board.obstacles, topology)
        if not route or len(route) <= 1:
            return Step(next_cell=None)

        next_cell = route[1]
        return Step(next_cell=next_cell, will_escape=topology.is_boundary(next_cell))

    def move_to(self, cell: HexCoordinate, board: "BoardState"):
        """Step onto an adjacent cell, turning to face the direction of travel."""
        direction = board.topology.direction_between(self.position, cell)
        if direction is not None:
            self.facing = direction
        self.position = cell

    @property
    def facing_degrees(self) -> int:
        return self.facing.degrees if self.facing else 0

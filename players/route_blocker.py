"""
Route-blocking player.

Blocks whichever cell on or around the agent's escape route leaves it the
longest remaining escape, and closes the trap as soon as one cell suffices.
Ties go to the cell nearest the agent.
"""

from typing import Optional

from cairn.board import BoardState
from cairn.grid import HexCoordinate
from cairn.pathfinding import escape_distance

from .base import TrapperPlayer


class RouteBlockerPlayer(TrapperPlayer):
    """Greedy one-ply trapper."""

    def candidate_cells(self, board: BoardState) -> list[HexCoordinate]:
        """Cells on the current escape route, then free neighbours of the agent."""
        agent = board.agent.position
        route = board.escape_route() or []
        candidates = []
        for cell in route[1:] + list(board.topology.neighbors(agent)):
            if cell == agent or board.is_blocked(cell) or cell in candidates:
                continue
            candidates.append(cell)
        return candidates

    def score_cell(self, board: BoardState, cell: HexCoordinate) -> Optional[tuple[int, int]]:
        """(remaining escape distance, -distance to agent); None if blocking traps it."""
        agent = board.agent.position
        remaining = escape_distance(agent, board.obstacles | {cell}, board.topology)
        if remaining is None:
            return None
        return (remaining, -board.topology.distance(agent, cell))

    def select_cell(self, board: BoardState) -> Optional[HexCoordinate]:
        best_cell = None
        best_score = None

        for cell in self.candidate_cells(board):
            score = self.score_cell(board, cell)
            if score is None:
                return cell
            if best_score is None or score > best_score:
                best_cell, best_score = cell, score

        if best_cell is None:
            return self.random_free_cell(board)
        return best_cell

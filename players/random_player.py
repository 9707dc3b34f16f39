"""
Random player: blocks a uniformly random free cell. Baseline for simulations.
"""

from typing import Optional

from cairn.board import BoardState
from cairn.grid import HexCoordinate

from .base import TrapperPlayer


class RandomPlayer(TrapperPlayer):

    def select_cell(self, board: BoardState) -> Optional[HexCoordinate]:
        return self.random_free_cell(board)

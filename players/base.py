"""
Base trapper player.

A player looks at the current board and picks the next cell to block.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from cairn.board import BoardState
from cairn.grid import HexCoordinate


@dataclass
class PlayerConfig:
    """Configuration for a scripted player."""
    name: str
    seed: Optional[int] = None


class TrapperPlayer(ABC):
    """Base class for scripted players driving a TurnController."""

    def __init__(self, config: PlayerConfig):
        self.config = config
        self.name = config.name
        self.rng = random.Random(config.seed)
        self.moves_made = 0

    @abstractmethod
    def select_cell(self, board: BoardState) -> Optional[HexCoordinate]:
        """Pick a cell to block, or None if nothing can be placed."""
        pass

    def choose_cell(self, board: BoardState) -> Optional[HexCoordinate]:
        cell = self.select_cell(board)
        if cell is not None:
            self.moves_made += 1
        return cell

    def random_free_cell(self, board: BoardState) -> Optional[HexCoordinate]:
        free = board.free_cells()
        if not free:
            return None
        return self.rng.choice(free)

    @classmethod
    def create_default(cls, seed: Optional[int] = None) -> "TrapperPlayer":
        return cls(PlayerConfig(name=cls.__name__, seed=seed))

"""
Hex grid topology for the trapping board.

Uses "odd-r" offset coordinates (col, row) with pointy-top hexes:
odd rows are shifted half a cell to the right.
Origin is the top-left cell; the outer ring of cells is the boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


@dataclass(frozen=True, order=True)
class HexCoordinate:
    """Single addressable cell in the offset grid."""
    col: int
    row: int

    def to_dict(self) -> dict:
        return {"col": self.col, "row": self.row}

    @classmethod
    def from_dict(cls, data: dict) -> "HexCoordinate":
        """Parse {col, row}; both must be JSON integers."""
        col, row = data["col"], data["row"]
        for value in (col, row):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Cell coordinates must be integers, got {value!r}")
        return cls(col, row)

    def __str__(self) -> str:
        return f"({self.col},{self.row})"


class Direction(Enum):
    """Hex directions in neighbour-table order; value is the facing angle in degrees."""
    WEST = 270
    EAST = 90
    NORTH_WEST = 330
    NORTH_EAST = 30
    SOUTH_WEST = 210
    SOUTH_EAST = 150

    @property
    def degrees(self) -> int:
        return self.value


# Offsets per row parity, listed in the same order as Direction.
EVEN_ROW_OFFSETS = [(-1, 0), (1, 0), (-1, -1), (0, -1), (-1, 1), (0, 1)]
ODD_ROW_OFFSETS = [(-1, 0), (1, 0), (0, -1), (1, -1), (0, 1), (1, 1)]


class GridTopology:
    """
    Fixed-size hex grid without holes.

    Every in-bounds coordinate is a valid cell. A cell on the first or last
    column or row is a boundary cell; reaching one means escape.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return f"GridTopology({self.width}x{self.height})"

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> HexCoordinate:
        """Spawn cell for the agent."""
        return HexCoordinate(self.width // 2, self.height // 2)

    def cells(self) -> Iterator[HexCoordinate]:
        """All cells in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield HexCoordinate(col, row)

    def is_in_bounds(self, coord: HexCoordinate) -> bool:
        return 0 <= coord.col < self.width and 0 <= coord.row < self.height

    def is_boundary(self, coord: HexCoordinate) -> bool:
        return (coord.col in (0, self.width - 1)
                or coord.row in (0, self.height - 1))

    @staticmethod
    def offsets_for(row: int) -> list[tuple[int, int]]:
        return ODD_ROW_OFFSETS if row % 2 == 1 else EVEN_ROW_OFFSETS

    def neighbors(self, coord: HexCoordinate) -> tuple[HexCoordinate, ...]:
        """In-bounds neighbours in fixed direction order (W, E, NW, NE, SW, SE)."""
        result = []
        for dc, dr in self.offsets_for(coord.row):
            neighbor = HexCoordinate(coord.col + dc, coord.row + dr)
            if self.is_in_bounds(neighbor):
                result.append(neighbor)
        return tuple(result)

    def direction_between(self, origin: HexCoordinate,
                          target: HexCoordinate) -> Optional[Direction]:
        """Direction of a single step from origin to an adjacent target."""
        delta = (target.col - origin.col, target.row - origin.row)
        for direction, offset in zip(Direction, self.offsets_for(origin.row)):
            if offset == delta:
                return direction
        return None

    # Distance
    @staticmethod
    def to_cube(coord: HexCoordinate) -> tuple[int, int, int]:
        """Convert odd-r offset coordinates to cube coordinates (x + y + z = 0)."""
        x = coord.col - (coord.row - (coord.row & 1)) // 2
        z = coord.row
        return (x, -x - z, z)

    def distance(self, a: HexCoordinate, b: HexCoordinate) -> int:
        """Obstacle-free hex distance between two cells."""
        ax, ay, az = self.to_cube(a)
        bx, by, bz = self.to_cube(b)
        return max(abs(ax - bx), abs(ay - by), abs(az - bz))

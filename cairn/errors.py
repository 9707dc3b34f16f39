"""
Rejection reasons and error types.

Rejected placements are not exceptions: they come back as a
PlacementResult carrying one of these reasons and leave the board untouched.
"""

from enum import Enum


class RejectReason(Enum):
    OUT_OF_BOUNDS = "out_of_bounds"
    OCCUPIED_BY_OBSTACLE = "occupied_by_obstacle"
    OCCUPIED_BY_AGENT = "occupied_by_agent"
    NOT_ACCEPTING_INPUT = "not_accepting_input"
    PAUSED = "paused"
    TIME_UP = "time_up"


class ConfigError(ValueError):
    """Invalid game configuration."""

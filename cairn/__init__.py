"""
Hex-grid trapping engine.

Core modules:
- grid: Offset hex coordinates, adjacency and boundary
- pathfinding: Breadth-first escape route search
- agent: The fleeing token and its one-step policy
- board: Obstacles, agent and round lifecycle
- turn: Turn sequencing and animation hold
- config: YAML-backed game settings
- scoring: Capture/escape tally
"""

from .grid import HexCoordinate, Direction, GridTopology
from .pathfinding import shortest_escape_route, escape_distance
from .agent import EvasionAgent, Step
from .board import BoardState, RoundState, Outcome, TurnEvent, PlacementResult
from .turn import TurnController
from .config import GameConfig, load_config
from .errors import RejectReason, ConfigError
from .scoring import ScoreTracker, RoundRecord

__all__ = [
    # Grid
    "HexCoordinate", "Direction", "GridTopology",
    # Pathfinding
    "shortest_escape_route", "escape_distance",
    # Agent
    "EvasionAgent", "Step",
    # Board
    "BoardState", "RoundState", "Outcome", "TurnEvent", "PlacementResult",
    # Turn Management
    "TurnController",
    # Config / Errors
    "GameConfig", "load_config", "RejectReason", "ConfigError",
    # Scoring
    "ScoreTracker", "RoundRecord",
]

"""
Scripted trapper players for simulations.
"""

from .base import TrapperPlayer, PlayerConfig
from .route_blocker import RouteBlockerPlayer
from .random_player import RandomPlayer

PLAYERS = {
    "route_blocker": RouteBlockerPlayer,
    "random": RandomPlayer,
}

__all__ = ["TrapperPlayer", "PlayerConfig", "RouteBlockerPlayer", "RandomPlayer", "PLAYERS"]

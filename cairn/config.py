"""
Game configuration.

All values are constructor-time constants loaded from data/config.yaml.
A missing file falls back to the defaults below.
"""

import yaml
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("data") / "config.yaml"


@dataclass(frozen=True)
class GameConfig:
    """Board and timing settings for a session."""
    width: int = 11
    height: int = 10
    obstacle_density: float = 0.15
    safe_cell: Optional[tuple[int, int]] = None  # kept free of initial obstacles
    reroll_enclosed: bool = True
    max_rerolls: int = 100
    animation_hold: float = 0.52  # seconds; turn 120ms + wiggle 120ms + jump 280ms
    session_time_limit: Optional[float] = 240.0  # seconds of unpaused play; None for no limit
    seed: Optional[int] = None

    def __post_init__(self):
        if self.width < 3 or self.height < 3:
            raise ConfigError(f"Grid must be at least 3x3, got {self.width}x{self.height}")
        if not 0.0 <= self.obstacle_density < 1.0:
            raise ConfigError(f"Obstacle density must be in [0, 1), got {self.obstacle_density}")
        if self.animation_hold < 0:
            raise ConfigError(f"Animation hold must be non-negative, got {self.animation_hold}")
        if self.session_time_limit is not None and self.session_time_limit <= 0:
            raise ConfigError(f"Session time limit must be positive, got {self.session_time_limit}")
        if self.max_rerolls < 0:
            raise ConfigError(f"max_rerolls must be non-negative, got {self.max_rerolls}")
        if self.safe_cell is not None:
            col, row = self.safe_cell
            if not (0 <= col < self.width and 0 <= row < self.height):
                raise ConfigError(f"Safe cell {self.safe_cell} is outside the grid")

    @classmethod
    def from_dict(cls, data: dict) -> "GameConfig":
        """Build a config from the nested YAML layout."""
        grid = data.get("grid", {}) or {}
        obstacles = data.get("obstacles", {}) or {}
        timing = data.get("timing", {}) or {}

        safe_cell = obstacles.get("safe_cell")
        if safe_cell is not None:
            if isinstance(safe_cell, dict):
                safe_cell = (safe_cell.get("col"), safe_cell.get("row"))
            try:
                safe_cell = (int(safe_cell[0]), int(safe_cell[1]))
            except (TypeError, ValueError, IndexError, KeyError):
                raise ConfigError(f"Invalid safe cell: {obstacles.get('safe_cell')!r}")

        hold_ms = timing.get("animation_hold_ms")
        time_limit = timing.get("session_time_limit_s", cls.session_time_limit)
        seed = data.get("seed")

        try:
            animation_hold = float(hold_ms) / 1000 if hold_ms is not None else cls.animation_hold
            return cls(
                width=int(grid.get("width", cls.width)),
                height=int(grid.get("height", cls.height)),
                obstacle_density=float(obstacles.get("density", cls.obstacle_density)),
                safe_cell=safe_cell,
                reroll_enclosed=bool(obstacles.get("reroll_enclosed", cls.reroll_enclosed)),
                max_rerolls=int(obstacles.get("max_rerolls", cls.max_rerolls)),
                animation_hold=animation_hold,
                session_time_limit=float(time_limit) if time_limit is not None else None,
                seed=int(seed) if seed is not None else None,
            )
        except ConfigError:
            raise
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration value: {e}") from e


def load_config(path: Path | str | None = None) -> GameConfig:
    """Load game configuration from YAML."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.warning(f"Config not found: {config_path}, using defaults")
        return GameConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {config_path}")

    config = GameConfig.from_dict(data)
    logger.info(
        f"Loaded config: {config.width}x{config.height} grid, "
        f"density={config.obstacle_density}, hold={config.animation_hold}s"
    )
    return config

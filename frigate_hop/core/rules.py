"""
Game Rules
==========

Difficulty curve: a pure mapping from level number to hazard field shape.
Every parameter is non-decreasing in level and saturates at a cap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from frigate_hop.core.config_loader import GameConfig, get_config


@dataclass(frozen=True)
class LevelConfig:
    """Hazard field parameters for one level, in logical units."""
    level: int
    rows: int
    hazards_per_row: int
    speed: float            # Base hazard speed before per-hazard jitter
    mine_chance: float
    row_spacing: float

    @property
    def hazard_count(self) -> int:
        return self.rows * self.hazards_per_row

    def row_y(self, row: int, first_row_y: float) -> float:
        """Logical y of a row."""
        return first_row_y + row * self.row_spacing


def row_count(level: int, config: Optional[GameConfig] = None) -> int:
    """Rows of hazards: one more every two levels."""
    if config is None:
        config = get_config()
    return min(1 + (level - 1) // 2, config.levels.rows_cap)


def hazards_per_row(level: int, config: Optional[GameConfig] = None) -> int:
    """Hazards per row: one more every three levels."""
    if config is None:
        config = get_config()
    return min(1 + level // 3, config.levels.hazards_per_row_cap)


def mine_chance(level: int, config: Optional[GameConfig] = None) -> float:
    """Probability that a hazard is a mine rather than an iceberg."""
    if config is None:
        config = get_config()
    levels = config.levels
    return min(levels.mine_chance_base + level * levels.mine_chance_step, levels.mine_chance_cap)


def row_spacing(level: int, config: Optional[GameConfig] = None) -> float:
    """Vertical distance between consecutive rows."""
    if config is None:
        config = get_config()
    levels = config.levels
    return min(levels.row_spacing_base + level * levels.row_spacing_step, levels.row_spacing_cap)


def base_speed(level: int, config: Optional[GameConfig] = None) -> float:
    """Hazard speed before the per-hazard jitter."""
    if config is None:
        config = get_config()
    obstacles = config.obstacles
    return min(obstacles.base_speed + level * obstacles.speed_per_level, obstacles.speed_cap)


def get_level_config(level: int, config: Optional[GameConfig] = None) -> LevelConfig:
    """
    Build the level parameters.

    Args:
        level: Level number (>= 1).
        config: Game configuration. Uses default if None.

    Returns:
        LevelConfig for the level.

    Raises:
        ValueError: If level is below 1.
    """
    if level < 1:
        raise ValueError(f"Level must be >= 1, got {level}")
    if config is None:
        config = get_config()

    return LevelConfig(
        level=level,
        rows=row_count(level, config),
        hazards_per_row=hazards_per_row(level, config),
        speed=base_speed(level, config),
        mine_chance=mine_chance(level, config),
        row_spacing=row_spacing(level, config)
    )

"""
Obstacle Field
==============

Generates the hazards for a level and moves them across the playfield.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from frigate_hop.core.config_loader import GameConfig, get_config
from frigate_hop.core.rules import LevelConfig, get_level_config
from frigate_hop.core.scaler import CoordinateScaler


class HazardKind(Enum):
    ICEBERG = "iceberg"
    MINE = "mine"


@dataclass
class Obstacle:
    """
    A moving hazard in output pixels.

    x wraps around the field: a hazard leaving one side re-enters from the
    other. rotation only changes for mines.
    """
    x: float
    y: float
    width: float
    height: float
    speed: float
    direction: int          # -1 (leftward) or +1 (rightward)
    kind: HazardKind
    rotation: float = 0.0

    @property
    def is_mine(self) -> bool:
        return self.kind is HazardKind.MINE

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def box(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


class ObstacleField:
    """
    The hazards of the current level.

    generate() replaces the whole set; hazards are never added or removed
    individually.
    """

    def __init__(
        self,
        scaler: CoordinateScaler,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize an empty field.

        Args:
            scaler: Coordinate scaler for the current run.
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scaler = scaler
        self._rng = random.Random(seed)
        self._obstacles: List[Obstacle] = []
        self._level: int = 0

    @property
    def obstacles(self) -> List[Obstacle]:
        return self._obstacles

    @property
    def level(self) -> int:
        """Level the current hazards were generated for (0 before the first)."""
        return self._level

    @property
    def count(self) -> int:
        return len(self._obstacles)

    def __iter__(self):
        return iter(self._obstacles)

    def __len__(self) -> int:
        return len(self._obstacles)

    def clear(self) -> None:
        self._obstacles = []
        self._level = 0

    def row_positions(self, level_config: LevelConfig) -> List[float]:
        """Output-pixel y of each hazard row."""
        first_row_y = self._config.levels.first_row_y
        return [
            self._scaler.y(level_config.row_y(row, first_row_y))
            for row in range(level_config.rows)
        ]

    def generate(self, level: int) -> List[Obstacle]:
        """
        Build a fresh set of hazards for a level.

        Args:
            level: Level number (>= 1).

        Returns:
            The new hazard list.
        """
        level_config = get_level_config(level, self._config)
        obstacles: List[Obstacle] = []

        for y in self.row_positions(level_config):
            for _ in range(level_config.hazards_per_row):
                obstacles.append(self._create_obstacle(y, level_config))

        self._obstacles = obstacles
        self._level = level
        return obstacles

    def _create_obstacle(self, y: float, level_config: LevelConfig) -> Obstacle:
        """Roll one hazard for a row."""
        cfg = self._config.obstacles
        scaler = self._scaler

        is_wide = self._rng.random() < cfg.wide_chance
        width, height = cfg.wide_size if is_wide else cfg.narrow_size
        speed = level_config.speed + self._rng.random() * cfg.speed_jitter
        direction = 1 if self._rng.random() < 0.5 else -1
        is_mine = self._rng.random() < level_config.mine_chance

        return Obstacle(
            x=self._rng.random() * scaler.x(self._config.board.base_width),
            y=y,
            width=scaler.x(width),
            height=scaler.y(height),
            speed=scaler.x(speed),
            direction=direction,
            kind=HazardKind.MINE if is_mine else HazardKind.ICEBERG,
            rotation=self._rng.random() * 2 * math.pi if is_mine else 0.0
        )

    def advance(self) -> None:
        """Move every hazard one frame, wrapping at the field edges."""
        field_width = self._scaler.field_width
        spin = self._config.obstacles.mine_spin

        for obstacle in self._obstacles:
            obstacle.x += obstacle.speed * obstacle.direction
            if obstacle.x > field_width:
                obstacle.x = -obstacle.width
            elif obstacle.x < -obstacle.width:
                obstacle.x = field_width

            if obstacle.is_mine:
                obstacle.rotation += spin

    def bob_offset(self, now: float) -> float:
        """Draw-time vertical offset for mines. Not part of collision state."""
        cfg = self._config.obstacles
        return math.sin(now / cfg.bob_period) * self._scaler.y(cfg.bob_amplitude)

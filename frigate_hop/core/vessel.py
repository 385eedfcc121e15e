"""
Vessel
======

The player-controlled frigate: position, heading and movement history.
"""

from __future__ import annotations

from typing import Optional, Tuple

from frigate_hop.core.config_loader import GameConfig, get_config
from frigate_hop.core.orientation import Orientation
from frigate_hop.core.scaler import CoordinateScaler


class Vessel:
    """
    Player vessel in output pixels.

    Position is always clamped to [0, field - size] on both axes. Only the
    input path mutates it; collision, rendering and the wake read it.
    """

    def __init__(
        self,
        scaler: CoordinateScaler,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize vessel at its start position.

        Args:
            scaler: Coordinate scaler for the current run.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scaler = scaler

        vessel_cfg = config.vessel
        self.width: float = scaler.x(vessel_cfg.width)
        self.height: float = scaler.y(vessel_cfg.height)
        self.x: float = 0.0
        self.y: float = 0.0
        self.last_x: float = 0.0
        self.last_y: float = 0.0
        self.velocity: Tuple[float, float] = (0.0, 0.0)
        self.orientation: Orientation = Orientation.UP

        self.reset()

    @property
    def start_x(self) -> float:
        return self._scaler.x(self._config.vessel.start_x)

    @property
    def start_y(self) -> float:
        return self._scaler.y(self._config.vessel.start_y)

    @property
    def step(self) -> float:
        """Displacement per move. Both axes use the horizontal scale."""
        return self._scaler.x(self._config.vessel.move_step)

    @property
    def max_x(self) -> float:
        return max(0.0, self._scaler.field_width - self.width)

    @property
    def max_y(self) -> float:
        return max(0.0, self._scaler.field_height - self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def box(self) -> Tuple[float, float, float, float]:
        """Unpadded bounding box (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)

    def reset(self) -> None:
        """Return to the start position facing the goal."""
        self.x = self.start_x
        self.y = self.start_y
        self.last_x = self.x
        self.last_y = self.y
        self.velocity = (0.0, 0.0)
        self.orientation = Orientation.UP

    def return_to_start_row(self) -> None:
        """Move back to the start row for a new level, keeping x."""
        self.y = self.start_y
        self.last_y = self.y
        self.velocity = (0.0, 0.0)

    def move(self, orientation: Orientation) -> bool:
        """
        Displace one step toward the given heading.

        Args:
            orientation: Requested direction.

        Returns:
            True if this was an UP move that strictly decreased y.
        """
        old_x, old_y = self.x, self.y
        profile = orientation.profile
        step = self.step

        self.x = min(self.max_x, max(0.0, self.x + profile.dx * step))
        self.y = min(self.max_y, max(0.0, self.y + profile.dy * step))
        self.orientation = orientation

        self.last_x = old_x
        self.last_y = old_y
        self.velocity = (self.x - old_x, self.y - old_y)

        return orientation is Orientation.UP and self.y < old_y

    def __repr__(self) -> str:
        return (
            f"Vessel(x={self.x:.1f}, y={self.y:.1f}, "
            f"{self.width:.0f}x{self.height:.0f}, {self.orientation.value})"
        )

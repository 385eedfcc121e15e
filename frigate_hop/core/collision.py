"""
Collision Detection
===================

Axis-aligned overlap between the vessel and the hazards, with hitboxes shrunk
to match the visible sprite silhouettes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from frigate_hop.core.config_loader import GameConfig, get_config
from frigate_hop.core.obstacles import HazardKind, Obstacle
from frigate_hop.core.orientation import Orientation
from frigate_hop.core.scaler import CoordinateScaler
from frigate_hop.core.vessel import Vessel


@dataclass(frozen=True)
class CollisionBox:
    """Axis-aligned rectangle in output pixels."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def padded(
        cls,
        x: float,
        y: float,
        width: float,
        height: float,
        padding: float
    ) -> "CollisionBox":
        """Shrink a rectangle by padding on every side."""
        return cls(
            x=x + padding,
            y=y + padding,
            width=width - padding * 2,
            height=height - padding * 2
        )

    def overlaps(self, other: "CollisionBox") -> bool:
        """Strict overlap: touching edges do not count."""
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )


class CollisionDetector:
    """
    Tests the vessel against the current hazards.

    Padding is looked up per vessel orientation and per hazard kind, in
    logical units scaled by scale_x.
    """

    def __init__(
        self,
        scaler: CoordinateScaler,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize detector.

        Args:
            scaler: Coordinate scaler for the current run.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scaler = scaler

        cfg = config.collision
        self._vessel_padding: Dict[Orientation, float] = {
            orientation: (
                cfg.vessel_padding_vertical
                if orientation.profile.is_vertical
                else cfg.vessel_padding_horizontal
            )
            for orientation in Orientation
        }
        self._hazard_padding: Dict[HazardKind, float] = {
            HazardKind.MINE: cfg.mine_padding,
            HazardKind.ICEBERG: cfg.iceberg_padding,
        }

    def vessel_padding(self, orientation: Orientation) -> float:
        return self._scaler.x(self._vessel_padding[orientation])

    def hazard_padding(self, kind: HazardKind) -> float:
        return self._scaler.x(self._hazard_padding[kind])

    def vessel_box(self, vessel: Vessel) -> CollisionBox:
        return CollisionBox.padded(
            vessel.x, vessel.y, vessel.width, vessel.height,
            self.vessel_padding(vessel.orientation)
        )

    def hazard_box(self, obstacle: Obstacle) -> CollisionBox:
        return CollisionBox.padded(
            obstacle.x, obstacle.y, obstacle.width, obstacle.height,
            self.hazard_padding(obstacle.kind)
        )

    def check(
        self,
        vessel: Vessel,
        hazards: Iterable[Obstacle],
        transitioning: bool = False
    ) -> bool:
        """
        Check whether the vessel hits any hazard.

        Args:
            vessel: The player vessel.
            hazards: Hazards of the current field.
            transitioning: True while a level transition is running.

        Returns:
            True if any padded hazard box overlaps the padded vessel box.
        """
        if transitioning:
            return False

        vessel_box = self.vessel_box(vessel)
        return any(vessel_box.overlaps(self.hazard_box(h)) for h in hazards)

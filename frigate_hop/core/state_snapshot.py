"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, TYPE_CHECKING

import numpy as np

from frigate_hop.core.config_loader import GameConfig, get_config
from frigate_hop.core.obstacles import HazardKind
from frigate_hop.core.orientation import Orientation

if TYPE_CHECKING:
    from frigate_hop.core.obstacles import Obstacle
    from frigate_hop.core.run_state import RunState
    from frigate_hop.core.scaler import CoordinateScaler
    from frigate_hop.core.vessel import Vessel

# Stable integer ids for observation arrays
ORIENTATION_IDS: Dict[Orientation, int] = {
    Orientation.UP: 0,
    Orientation.DOWN: 1,
    Orientation.LEFT: 2,
    Orientation.RIGHT: 3,
}
KIND_IDS: Dict[HazardKind, int] = {
    HazardKind.ICEBERG: 0,
    HazardKind.MINE: 1,
}


@dataclass
class GameSnapshot:
    """
    Complete game state snapshot.

    Obstacle arrays are fixed-size with masking; unused slots hold -1 for kind
    and 0 elsewhere.
    """
    # Run state
    level: int
    score: int
    game_over: bool
    transitioning: bool
    goal_flash: float

    # Field info (output pixels)
    field_width: float
    field_height: float
    goal_line_y: float

    # Vessel
    vessel_x: float
    vessel_y: float
    vessel_width: float
    vessel_height: float
    vessel_orientation: int

    # Derived
    obstacles_count: int
    distance_to_goal: float
    nearest_hazard_distance: float

    # Obstacle arrays (fixed size, padded)
    obj_kind: np.ndarray          # (MAX_OBJ,) int8
    obj_x: np.ndarray             # (MAX_OBJ,) float32
    obj_y: np.ndarray             # (MAX_OBJ,) float32
    obj_width: np.ndarray         # (MAX_OBJ,) float32
    obj_height: np.ndarray        # (MAX_OBJ,) float32
    obj_vx: np.ndarray            # (MAX_OBJ,) float32, signed speed
    obj_mask: np.ndarray          # (MAX_OBJ,) bool

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "level": np.array(self.level, dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "transitioning": np.array(int(self.transitioning), dtype=np.int8),
            "vessel_x": np.array(self.vessel_x, dtype=np.float32),
            "vessel_y": np.array(self.vessel_y, dtype=np.float32),
            "vessel_orientation": np.array(self.vessel_orientation, dtype=np.int32),
            "distance_to_goal": np.array(self.distance_to_goal, dtype=np.float32),
            "nearest_hazard_distance": np.array(self.nearest_hazard_distance, dtype=np.float32),
            "objects_count": np.array(self.obstacles_count, dtype=np.int32),
            "obj_kind": self.obj_kind,
            "obj_x": self.obj_x,
            "obj_y": self.obj_y,
            "obj_width": self.obj_width,
            "obj_height": self.obj_height,
            "obj_vx": self.obj_vx,
            "obj_mask": self.obj_mask,
        }


class SnapshotBuilder:
    """Builds GameSnapshot objects from live simulation components."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()
        self._config = config
        self._max_obj = config.max_obstacles

    @property
    def max_objects(self) -> int:
        return self._max_obj

    def build(
        self,
        state: "RunState",
        vessel: "Vessel",
        obstacles: Sequence["Obstacle"],
        scaler: "CoordinateScaler",
        goal_line_y: float
    ) -> GameSnapshot:
        """
        Build snapshot of the current state.

        Args:
            state: Run state.
            vessel: Player vessel.
            obstacles: Hazards of the current field.
            scaler: Coordinate scaler of the run.
            goal_line_y: Output-pixel y of the goal band edge.

        Returns:
            GameSnapshot.
        """
        max_obj = self._max_obj
        obj_kind = np.full(max_obj, -1, dtype=np.int8)
        obj_x = np.zeros(max_obj, dtype=np.float32)
        obj_y = np.zeros(max_obj, dtype=np.float32)
        obj_width = np.zeros(max_obj, dtype=np.float32)
        obj_height = np.zeros(max_obj, dtype=np.float32)
        obj_vx = np.zeros(max_obj, dtype=np.float32)
        obj_mask = np.zeros(max_obj, dtype=bool)

        count = min(len(obstacles), max_obj)
        for i, obstacle in enumerate(obstacles[:count]):
            obj_kind[i] = KIND_IDS[obstacle.kind]
            obj_x[i] = obstacle.x
            obj_y[i] = obstacle.y
            obj_width[i] = obstacle.width
            obj_height[i] = obstacle.height
            obj_vx[i] = obstacle.speed * obstacle.direction
            obj_mask[i] = True

        nearest = self._nearest_hazard_distance(vessel, obj_x, obj_y, obj_width, obj_height, count)

        return GameSnapshot(
            level=state.level,
            score=state.score,
            game_over=state.game_over,
            transitioning=state.transitioning,
            goal_flash=state.goal_flash,
            field_width=scaler.field_width,
            field_height=scaler.field_height,
            goal_line_y=goal_line_y,
            vessel_x=vessel.x,
            vessel_y=vessel.y,
            vessel_width=vessel.width,
            vessel_height=vessel.height,
            vessel_orientation=ORIENTATION_IDS[vessel.orientation],
            obstacles_count=count,
            distance_to_goal=max(0.0, vessel.y - goal_line_y),
            nearest_hazard_distance=nearest,
            obj_kind=obj_kind,
            obj_x=obj_x,
            obj_y=obj_y,
            obj_width=obj_width,
            obj_height=obj_height,
            obj_vx=obj_vx,
            obj_mask=obj_mask,
        )

    @staticmethod
    def _nearest_hazard_distance(
        vessel: "Vessel",
        obj_x: np.ndarray,
        obj_y: np.ndarray,
        obj_width: np.ndarray,
        obj_height: np.ndarray,
        count: int
    ) -> float:
        """Center-to-center distance to the closest hazard, or -1 if none."""
        if count == 0:
            return -1.0
        cx, cy = vessel.center
        hx = obj_x[:count] + obj_width[:count] / 2
        hy = obj_y[:count] + obj_height[:count] / 2
        return float(np.min(np.hypot(hx - cx, hy - cy)))

"""
Orientation
===========

Vessel headings and the per-heading geometry table used by movement,
collision padding, sprite rotation and wake emission.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union


class Orientation(Enum):
    """Vessel heading. Screen y grows downward, so UP is toward the goal."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def profile(self) -> "OrientationProfile":
        return ORIENTATION_PROFILES[self]


@dataclass(frozen=True)
class OrientationProfile:
    """
    Geometry rules for one heading.

    dx/dy is the unit movement vector. The wake trails behind the vessel, on
    the side opposite the movement vector. sprite_angle is the counter-clockwise
    rotation in degrees applied to a sprite drawn facing right.
    """
    dx: int
    dy: int
    sprite_angle: float
    is_vertical: bool

    @property
    def trail_x(self) -> int:
        return -self.dx

    @property
    def trail_y(self) -> int:
        return -self.dy


ORIENTATION_PROFILES: Dict[Orientation, OrientationProfile] = {
    Orientation.UP: OrientationProfile(dx=0, dy=-1, sprite_angle=90.0, is_vertical=True),
    Orientation.DOWN: OrientationProfile(dx=0, dy=1, sprite_angle=-90.0, is_vertical=True),
    Orientation.LEFT: OrientationProfile(dx=-1, dy=0, sprite_angle=180.0, is_vertical=False),
    Orientation.RIGHT: OrientationProfile(dx=1, dy=0, sprite_angle=0.0, is_vertical=False),
}

# Keyboard names accepted alongside the plain direction words
_KEY_ALIASES: Dict[str, Orientation] = {
    "arrowup": Orientation.UP,
    "arrowdown": Orientation.DOWN,
    "arrowleft": Orientation.LEFT,
    "arrowright": Orientation.RIGHT,
}


def parse_direction(value: Union[str, Orientation, None]) -> Optional[Orientation]:
    """
    Resolve an input direction.

    Args:
        value: An Orientation, a direction word ("up") or a key name ("ArrowUp").

    Returns:
        The matching Orientation, or None if the value is not recognised.
    """
    if isinstance(value, Orientation):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip().lower()
    for orientation in Orientation:
        if orientation.value == key:
            return orientation
    return _KEY_ALIASES.get(key)

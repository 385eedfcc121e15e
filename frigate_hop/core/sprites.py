"""
Sprites
=======

Builds and caches the drawable image for each entity kind (vessel, iceberg,
mine, goal band). Sprites are drawn procedurally from polygon outlines, or
taken from surfaces the host supplies.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

SPRITE_KINDS = ("ship", "iceberg", "mine", "goal")

# Outline data in each sprite's own view box (width, height)
SHIP_VIEWBOX = (60, 30)
SHIP_HULL = [(0, 15), (15, 5), (45, 5), (60, 15), (45, 25), (15, 25)]
SHIP_WINDOWS = [(15, 10, 10, 10), (35, 10, 10, 10)]

ICEBERG_VIEWBOX = (80, 40)
ICEBERG_BODY = [(0, 20), (20, 5), (60, 5), (80, 20), (60, 35), (20, 35)]
ICEBERG_HIGHLIGHT = [(20, 10), (40, 10), (60, 25), (40, 25)]

MINE_VIEWBOX = (40, 40)
MINE_SPIKES = 8

GOAL_VIEWBOX = (800, 50)
GOAL_STRIPE_WIDTH = 50

Color = Tuple[int, ...]


def _scale_points(
    points: List[Tuple[float, float]],
    viewbox: Tuple[int, int],
    size: Tuple[int, int]
) -> List[Tuple[float, float]]:
    fx = size[0] / viewbox[0]
    fy = size[1] / viewbox[1]
    return [(x * fx, y * fy) for x, y in points]


def draw_ship(size: Tuple[int, int]) -> "pygame.Surface":
    """Frigate facing right."""
    surface = pygame.Surface(size, pygame.SRCALPHA)
    pygame.draw.polygon(surface, (74, 85, 104), _scale_points(SHIP_HULL, SHIP_VIEWBOX, size))
    fx = size[0] / SHIP_VIEWBOX[0]
    fy = size[1] / SHIP_VIEWBOX[1]
    for x, y, w, h in SHIP_WINDOWS:
        rect = pygame.Rect(round(x * fx), round(y * fy), max(1, round(w * fx)), max(1, round(h * fy)))
        pygame.draw.rect(surface, (255, 255, 255), rect)
    return surface


def draw_iceberg(size: Tuple[int, int]) -> "pygame.Surface":
    surface = pygame.Surface(size, pygame.SRCALPHA)
    pygame.draw.polygon(surface, (160, 174, 178), _scale_points(ICEBERG_BODY, ICEBERG_VIEWBOX, size))
    pygame.draw.polygon(surface, (226, 232, 240), _scale_points(ICEBERG_HIGHLIGHT, ICEBERG_VIEWBOX, size))
    return surface


def draw_mine(size: Tuple[int, int]) -> "pygame.Surface":
    """Spiked sea mine centered in the surface."""
    surface = pygame.Surface(size, pygame.SRCALPHA)
    cx, cy = size[0] / 2, size[1] / 2
    radius = min(size) * 0.32
    spike = min(size) * 0.48
    for i in range(MINE_SPIKES):
        angle = i * 2 * math.pi / MINE_SPIKES
        end = (cx + math.cos(angle) * spike, cy + math.sin(angle) * spike)
        pygame.draw.line(surface, (30, 35, 45), (cx, cy), end, max(1, int(min(size) * 0.08)))
    pygame.draw.circle(surface, (45, 55, 72), (int(cx), int(cy)), max(1, int(radius)))
    pygame.draw.circle(
        surface, (200, 60, 60),
        (int(cx - radius / 3), int(cy - radius / 3)), max(1, int(radius / 4))
    )
    return surface


def draw_goal(size: Tuple[int, int]) -> "pygame.Surface":
    """Translucent checkered finish band."""
    surface = pygame.Surface(size, pygame.SRCALPHA)
    surface.fill((76, 81, 191, 51))
    fx = size[0] / GOAL_VIEWBOX[0]
    stripe = max(1, round(GOAL_STRIPE_WIDTH * fx))
    for x in range(0, GOAL_VIEWBOX[0], GOAL_STRIPE_WIDTH * 2):
        rect = pygame.Rect(round(x * fx), 0, stripe, size[1])
        surface.fill((76, 81, 191, 102), rect)
    return surface


_DRAWERS: Dict[str, Callable[[Tuple[int, int]], "pygame.Surface"]] = {
    "ship": draw_ship,
    "iceberg": draw_iceberg,
    "mine": draw_mine,
    "goal": draw_goal,
}


class SpriteSet:
    """
    Per-kind sprites cached by output size.

    Host-supplied surfaces take precedence over the procedural drawings and
    are smooth-scaled to the requested size.
    """

    def __init__(self, overrides: Optional[Dict[str, "pygame.Surface"]] = None):
        """
        Initialize sprite set.

        Args:
            overrides: Optional surfaces keyed by kind ("ship", "iceberg",
                "mine", "goal"). The ship must face right.

        Raises:
            ImportError: If pygame is not installed.
            ValueError: If an override key is not a known kind.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required for sprites")

        overrides = dict(overrides or {})
        unknown = set(overrides) - set(SPRITE_KINDS)
        if unknown:
            raise ValueError(f"Unknown sprite kinds: {sorted(unknown)}")

        self._overrides = overrides
        self._cache: Dict[Tuple[str, int, int], pygame.Surface] = {}

    def has_override(self, kind: str) -> bool:
        return kind in self._overrides

    def get(self, kind: str, width: float, height: float) -> "pygame.Surface":
        """
        Get the sprite for a kind at a size.

        Args:
            kind: One of SPRITE_KINDS.
            width: Target width in pixels.
            height: Target height in pixels.

        Returns:
            Surface of the requested size (at least 1x1).
        """
        if kind not in _DRAWERS:
            raise ValueError(f"Unknown sprite kind: {kind}")

        size = (max(1, int(round(width))), max(1, int(round(height))))
        key = (kind, size[0], size[1])
        if key not in self._cache:
            if kind in self._overrides:
                self._cache[key] = pygame.transform.smoothscale(self._overrides[kind], size)
            else:
                self._cache[key] = _DRAWERS[kind](size)
        return self._cache[key]

    def clear(self) -> None:
        self._cache.clear()

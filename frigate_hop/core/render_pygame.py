"""
Pygame Renderer
===============

Full renderer using pygame: ocean backdrop with wave lines, textured goal
band, sprites for the vessel and hazards, wake particles, HUD and the level
complete banner. Supports both display mode (human play) and headless RGB
output.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from frigate_hop.core.config_loader import GameConfig, get_config

# Default pygame font size per pixel of cap height
FONT_SCALE = 1.33


class PygameRenderer:
    """
    Draws the field with sprites, the Level/Rows HUD and the level complete banner.

    The same drawing code targets either a resizable window (render_to_screen)
    or an offscreen surface copied out as a numpy frame (render).
    """

    def __init__(self, config: Optional[GameConfig] = None, sprites: Optional[Any] = None):
        """
        Args:
            config: Shared GameConfig when None.
            sprites: SpriteSet to draw with. A procedural set is created if None.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config

        if not pygame.get_init():
            pygame.init()
        pygame.font.init()

        if sprites is None:
            from frigate_hop.core.sprites import SpriteSet
            sprites = SpriteSet()
        self._sprites = sprites

        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        # Fonts keyed by (pixel size, bold)
        self._fonts: Dict[Tuple[int, bool], pygame.font.Font] = {}

        # Ocean palette
        self._sea_top = (168, 213, 255)
        self._sea_bottom = (1, 92, 199)
        self._wave_color = (255, 255, 255, 26)
        self._text_color = (255, 255, 255)
        self._banner_color = (0, 0, 0)

        self._background_cache: Dict[Tuple[int, int], pygame.Surface] = {}

    def _font(self, size: int, bold: bool = False) -> "pygame.font.Font":
        key = (max(1, size), bold)
        if key not in self._fonts:
            font = pygame.font.Font(None, key[0])
            font.set_bold(bold)
            self._fonts[key] = font
        return self._fonts[key]

    def render(
        self,
        render_data: Dict[str, Any],
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> np.ndarray:
        """
        Draw one frame offscreen and return it as an image.

        Args:
            render_data: Data from SimulationLoop.get_render_data().
            width: Output image width. Uses the field width if None.
            height: Output image height. Uses the field height if None.

        Returns:
            uint8 array shaped (height, width, 3).
        """
        width = int(width or round(render_data["field_width"]))
        height = int(height or round(render_data["field_height"]))
        surface = pygame.Surface((width, height))
        self.draw(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(self, render_data: Dict[str, Any]) -> None:
        """
        Render to the pygame window, sized to the field.

        Args:
            render_data: Data from SimulationLoop.get_render_data().
        """
        size = (int(round(render_data["field_width"])), int(round(render_data["field_height"])))
        if self._screen is None or self._screen_size != size:
            self._screen = pygame.display.set_mode(size, pygame.RESIZABLE)
            self._screen_size = size
            pygame.display.set_caption("Frigate Hop")

        self.draw(self._screen, render_data)
        pygame.display.flip()

    def draw(self, surface: "pygame.Surface", render_data: Dict[str, Any]) -> None:
        """Paint one frame onto a surface of any size."""
        width, height = surface.get_size()
        fx = width / render_data["field_width"]
        fy = height / render_data["field_height"]

        surface.blit(self._background(width, height), (0, 0))
        self._draw_waves(surface, render_data["time"], fy)
        self._draw_goal_band(surface, render_data, fy)

        for particle in render_data["particles"]:
            self._draw_particle(surface, particle, fx, fy)

        for obstacle in render_data["obstacles"]:
            self._draw_obstacle(surface, obstacle, fx, fy)

        self._draw_vessel(surface, render_data["vessel"], fx, fy)
        self._draw_hud(surface, render_data, fx, fy)

        if render_data["transitioning"]:
            self._draw_banner(surface, render_data, fy)

    def _background(self, width: int, height: int) -> "pygame.Surface":
        """Vertical ocean gradient, cached per size."""
        key = (width, height)
        if key not in self._background_cache:
            background = pygame.Surface(key)
            top = np.array(self._sea_top, dtype=np.float32)
            bottom = np.array(self._sea_bottom, dtype=np.float32)
            t = np.linspace(0.0, 1.0, height, dtype=np.float32)[None, :, None]
            column = top * (1 - t) + bottom * t
            pixels = np.repeat(column, width, axis=0).astype(np.uint8)
            pygame.surfarray.blit_array(background, pixels)
            self._background_cache[key] = background
        return self._background_cache[key]

    def _draw_waves(self, surface: "pygame.Surface", now: float, fy: float) -> None:
        """Faint sine lines drifting with time."""
        width, height = surface.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        spacing = max(4, int(30 * fy))
        amplitude = 5 * fy
        phase = now * 2.0
        for base_y in range(0, height, spacing):
            points = [
                (x, base_y + math.sin(x / 50.0 + phase) * amplitude)
                for x in range(0, width + 10, 10)
            ]
            pygame.draw.lines(overlay, self._wave_color, False, points, 1)
        surface.blit(overlay, (0, 0))

    def _draw_goal_band(self, surface: "pygame.Surface", render_data: Dict[str, Any], fy: float) -> None:
        width = surface.get_width()
        band_height = int(round(render_data["goal_line_y"] * fy))
        if band_height <= 0:
            return
        surface.blit(self._sprites.get("goal", width, band_height), (0, 0))

        flash = render_data["goal_flash"]
        if flash > 0:
            overlay = pygame.Surface((width, band_height), pygame.SRCALPHA)
            overlay.fill((255, 255, 255, int(255 * min(flash, 1.0))))
            surface.blit(overlay, (0, 0))

    def _draw_particle(self, surface: "pygame.Surface", particle: Dict[str, Any], fx: float, fy: float) -> None:
        radius = max(1, int(particle["size"] * fx))
        alpha = int(255 * max(0.0, min(particle["alpha"], 1.0)))
        if alpha == 0:
            return
        dot = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(dot, (255, 255, 255, alpha), (radius, radius), radius)
        surface.blit(dot, (int(particle["x"] * fx) - radius, int(particle["y"] * fy) - radius))

    def _draw_obstacle(self, surface: "pygame.Surface", obstacle: Dict[str, Any], fx: float, fy: float) -> None:
        width = obstacle["width"] * fx
        height = obstacle["height"] * fy
        sprite = self._sprites.get(obstacle["kind"], width, height)

        rotation = obstacle["rotation"]
        if abs(rotation) > 0.01:
            sprite = pygame.transform.rotate(sprite, -math.degrees(rotation))

        center = (obstacle["x"] * fx + width / 2, obstacle["y"] * fy + height / 2)
        surface.blit(sprite, sprite.get_rect(center=(int(center[0]), int(center[1]))))

    def _draw_vessel(self, surface: "pygame.Surface", vessel: Dict[str, Any], fx: float, fy: float) -> None:
        width = vessel["width"] * fx
        height = vessel["height"] * fy
        sprite = self._sprites.get("ship", width, height)

        angle = vessel["sprite_angle"]
        if angle:
            sprite = pygame.transform.rotate(sprite, angle)

        center = (vessel["x"] * fx + width / 2, vessel["y"] * fy + height / 2)
        surface.blit(sprite, sprite.get_rect(center=(int(center[0]), int(center[1]))))

    def _draw_hud(self, surface: "pygame.Surface", render_data: Dict[str, Any], fx: float, fy: float) -> None:
        """Level and row count along the bottom edge."""
        sx = render_data["scale_x"] * fx
        sy = render_data["scale_y"] * fy

        level_text = self._font(int(24 * sy * FONT_SCALE), bold=True).render(
            f"Level {render_data['level']}", True, self._text_color
        )
        surface.blit(level_text, level_text.get_rect(bottomleft=(int(20 * sx), int(580 * sy))))

        rows_text = self._font(int(16 * sy * FONT_SCALE)).render(
            f"Rows: {render_data['rows']}", True, self._text_color
        )
        surface.blit(rows_text, rows_text.get_rect(bottomleft=(int(140 * sx), int(580 * sy))))

    def _draw_banner(self, surface: "pygame.Surface", render_data: Dict[str, Any], fy: float) -> None:
        """Darkening overlay with the level complete message."""
        width, height = surface.get_size()
        alpha = int(255 * render_data["transition_progress"] * 0.7)

        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((*self._banner_color, alpha))
        surface.blit(overlay, (0, 0))

        font = self._font(int(36 * render_data["scale_y"] * fy * FONT_SCALE), bold=True)
        text = font.render(f"Level {render_data['level']} Complete!", True, self._text_color)
        surface.blit(text, text.get_rect(center=(width // 2, height // 2)))

    def handle_events(self) -> bool:
        """Drain the event queue; False once the window is closed or ESC pressed."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
        return True

    def close(self) -> None:
        """Close the window if one was opened."""
        self._background_cache.clear()
        self._sprites.clear()
        if self._screen is not None:
            self._screen = None

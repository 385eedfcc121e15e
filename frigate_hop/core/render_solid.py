"""
Solid Renderer
==============

Fast numpy-based renderer that draws every entity as a solid rectangle.
Shows collision hitboxes and needs no display or pygame.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np

from frigate_hop.core.config_loader import GameConfig, get_config


class SolidRenderer:
    """
    Renders the game state as flat rectangles.

    Features:
    - Ocean gradient background and goal band with flash tint
    - Hazards colored by kind, vessel, wake particles
    - Optional collision hitbox outlines
    """

    def __init__(self, config: Optional[GameConfig] = None, show_hitboxes: bool = True):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
            show_hitboxes: Whether to outline the padded collision boxes.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._show_hitboxes = show_hitboxes

        # Ocean gradient (top, bottom)
        self._sea_top = np.array([168, 213, 255], dtype=np.float32)
        self._sea_bottom = np.array([1, 92, 199], dtype=np.float32)

        self._goal_color = np.array([76, 81, 191], dtype=np.float32)
        self._iceberg_color = np.array([226, 232, 240], dtype=np.uint8)
        self._mine_color = np.array([45, 55, 72], dtype=np.uint8)
        self._vessel_color = np.array([74, 85, 104], dtype=np.uint8)
        self._hitbox_color = np.array([230, 60, 60], dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from SimulationLoop.get_render_data().
            width: Output image width. Uses the field width if None.
            height: Output image height. Uses the field height if None.

        Returns:
            (height, width, 3) uint8 array.
        """
        field_width = render_data["field_width"]
        field_height = render_data["field_height"]
        width = int(width or round(field_width))
        height = int(height or round(field_height))
        sx = width / field_width
        sy = height / field_height

        # Vertical gradient
        t = np.linspace(0.0, 1.0, height, dtype=np.float32)[:, None]
        column = self._sea_top * (1 - t) + self._sea_bottom * t
        img = np.repeat(column[:, None, :], width, axis=1).astype(np.uint8)

        # Goal band blended toward white by the flash intensity
        goal_h = int(render_data["goal_line_y"] * sy)
        if goal_h > 0:
            band = img[:goal_h].astype(np.float32) * 0.6 + self._goal_color * 0.4
            flash = float(render_data.get("goal_flash", 0.0))
            if flash > 0:
                band = band * (1 - flash) + 255.0 * flash
            img[:goal_h] = np.clip(band, 0, 255).astype(np.uint8)

        for particle in render_data.get("particles", []):
            self._blend_rect(
                img,
                (particle["x"] - particle["size"]) * sx,
                (particle["y"] - particle["size"]) * sy,
                particle["size"] * 2 * sx,
                particle["size"] * 2 * sy,
                (255, 255, 255),
                particle["alpha"]
            )

        for obstacle in render_data.get("obstacles", []):
            color = self._mine_color if obstacle["kind"] == "mine" else self._iceberg_color
            self._fill_rect(
                img,
                obstacle["x"] * sx, obstacle["y"] * sy,
                obstacle["width"] * sx, obstacle["height"] * sy,
                color
            )
            if self._show_hitboxes:
                box = obstacle["hitbox"]
                self._outline_rect(img, box.x * sx, box.y * sy, box.width * sx, box.height * sy)

        vessel = render_data["vessel"]
        vessel_w, vessel_h = vessel["width"], vessel["height"]
        self._fill_rect(
            img, vessel["x"] * sx, vessel["y"] * sy, vessel_w * sx, vessel_h * sy,
            self._vessel_color
        )
        if self._show_hitboxes:
            box = vessel["hitbox"]
            self._outline_rect(img, box.x * sx, box.y * sy, box.width * sx, box.height * sy)

        return img

    @staticmethod
    def _clip(img: np.ndarray, x: float, y: float, w: float, h: float) -> Tuple[int, int, int, int]:
        height, width = img.shape[:2]
        x0 = max(0, int(x))
        y0 = max(0, int(y))
        x1 = min(width, int(x + w))
        y1 = min(height, int(y + h))
        return x0, y0, x1, y1

    def _fill_rect(self, img: np.ndarray, x: float, y: float, w: float, h: float, color) -> None:
        x0, y0, x1, y1 = self._clip(img, x, y, w, h)
        if x1 > x0 and y1 > y0:
            img[y0:y1, x0:x1] = color

    def _blend_rect(
        self,
        img: np.ndarray,
        x: float,
        y: float,
        w: float,
        h: float,
        color: Tuple[int, int, int],
        alpha: float
    ) -> None:
        x0, y0, x1, y1 = self._clip(img, x, y, w, h)
        if x1 <= x0 or y1 <= y0:
            return
        alpha = max(0.0, min(1.0, alpha))
        region = img[y0:y1, x0:x1].astype(np.float32)
        blended = region * (1 - alpha) + np.array(color, dtype=np.float32) * alpha
        img[y0:y1, x0:x1] = blended.astype(np.uint8)

    def _outline_rect(self, img: np.ndarray, x: float, y: float, w: float, h: float) -> None:
        if w <= 0 or h <= 0:
            return
        x0, y0, x1, y1 = self._clip(img, x, y, w, h)
        if x1 <= x0 or y1 <= y0:
            return
        img[y0, x0:x1] = self._hitbox_color
        img[y1 - 1, x0:x1] = self._hitbox_color
        img[y0:y1, x0] = self._hitbox_color
        img[y0:y1, x1 - 1] = self._hitbox_color

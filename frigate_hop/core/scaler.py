"""
Coordinate Scaler
=================

Maps the fixed logical resolution onto the actual render surface size.
"""

from __future__ import annotations

from typing import Optional, Tuple

from frigate_hop.core.config_loader import GameConfig, get_config


class CoordinateScaler:
    """
    Converts logical units into output pixels.

    Every spawned entity's size, speed and spacing is multiplied by the
    axis-appropriate factor when it is created, so relative speeds and hazard
    density look the same at any output resolution.
    """

    def __init__(
        self,
        output_width: int,
        output_height: int,
        base_width: int = 800,
        base_height: int = 600
    ):
        """
        Initialize scaler.

        Args:
            output_width: Actual surface width in pixels.
            output_height: Actual surface height in pixels.
            base_width: Logical width.
            base_height: Logical height.

        Raises:
            ValueError: If any dimension is not positive.
        """
        if output_width <= 0 or output_height <= 0:
            raise ValueError(f"Output size must be positive, got {output_width}x{output_height}")
        if base_width <= 0 or base_height <= 0:
            raise ValueError(f"Base size must be positive, got {base_width}x{base_height}")

        self._output_width = output_width
        self._output_height = output_height
        self._base_width = base_width
        self._base_height = base_height
        self._scale_x = output_width / base_width
        self._scale_y = output_height / base_height

    @classmethod
    def from_config(
        cls,
        config: Optional[GameConfig] = None,
        output_size: Optional[Tuple[int, int]] = None
    ) -> "CoordinateScaler":
        """Build a scaler for the configured base resolution."""
        if config is None:
            config = get_config()
        if output_size is None:
            output_size = (config.board.output_width, config.board.output_height)
        return cls(
            output_size[0],
            output_size[1],
            base_width=config.board.base_width,
            base_height=config.board.base_height
        )

    @property
    def scale_x(self) -> float:
        return self._scale_x

    @property
    def scale_y(self) -> float:
        return self._scale_y

    @property
    def field_width(self) -> float:
        """Playfield width in output pixels."""
        return float(self._output_width)

    @property
    def field_height(self) -> float:
        """Playfield height in output pixels."""
        return float(self._output_height)

    @property
    def output_size(self) -> Tuple[int, int]:
        return (self._output_width, self._output_height)

    @property
    def base_size(self) -> Tuple[int, int]:
        return (self._base_width, self._base_height)

    def x(self, value: float) -> float:
        """Scale a horizontal logical length."""
        return value * self._scale_x

    def y(self, value: float) -> float:
        """Scale a vertical logical length."""
        return value * self._scale_y

    def point(self, x: float, y: float) -> Tuple[float, float]:
        return (x * self._scale_x, y * self._scale_y)

    def font_size(self, size: float) -> int:
        """Font metrics follow the vertical axis."""
        return max(1, int(round(size * self._scale_y)))

    def __repr__(self) -> str:
        return (
            f"CoordinateScaler({self._base_width}x{self._base_height} -> "
            f"{self._output_width}x{self._output_height})"
        )

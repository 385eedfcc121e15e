"""
Configuration Loader
====================

Reads game_config.yaml into frozen dataclasses, one per YAML section.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "game_config.yaml"


@dataclass(frozen=True)
class BoardConfig:
    """Logical playfield and default output size."""
    base_width: int              # Logical width all gameplay math uses
    base_height: int             # Logical height
    output_width: int            # Default render surface width
    output_height: int           # Default render surface height
    goal_band_height: float      # Logical height of the goal band


@dataclass(frozen=True)
class VesselConfig:
    """Player vessel geometry and movement."""
    start_x: float
    start_y: float
    width: float
    height: float
    move_step: float


@dataclass(frozen=True)
class WakeConfig:
    """Wake particle emission and decay."""
    spawn_interval: float        # Seconds between spawns
    particles_per_spawn: int
    edge_inset: float
    jitter: float
    speed_min: float
    speed_jitter: float
    drift: float
    initial_alpha: float
    size_min: float
    size_jitter: float
    growth: float
    fade: float


@dataclass(frozen=True)
class ObstacleConfig:
    """Hazard construction and motion."""
    base_speed: float
    speed_per_level: float
    speed_cap: float
    speed_jitter: float
    wide_chance: float
    wide_size: Tuple[float, float]
    narrow_size: Tuple[float, float]
    mine_spin: float
    bob_amplitude: float
    bob_period: float


@dataclass(frozen=True)
class LevelsConfig:
    """Difficulty curve parameters."""
    first_row_y: float
    rows_cap: int
    row_spacing_base: float
    row_spacing_step: float
    row_spacing_cap: float
    hazards_per_row_cap: int
    mine_chance_base: float
    mine_chance_step: float
    mine_chance_cap: float


@dataclass(frozen=True)
class CollisionConfig:
    """Hitbox padding removed from each side before overlap tests."""
    vessel_padding_vertical: float
    vessel_padding_horizontal: float
    mine_padding: float
    iceberg_padding: float


@dataclass(frozen=True)
class TransitionConfig:
    """Level transition timing."""
    delay: float
    flash_decay: float


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    points_per_advance: int


@dataclass(frozen=True)
class EnvConfig:
    """Headless environment stepping."""
    frame_dt: float
    max_episode_frames: int


@dataclass(frozen=True)
class GameConfig:
    """
    Every tunable of the simulation, grouped by YAML section.

    Instances are frozen; use reload_config() to pick up edits to the file.
    """
    board: BoardConfig
    vessel: VesselConfig
    wake: WakeConfig
    obstacles: ObstacleConfig
    levels: LevelsConfig
    collision: CollisionConfig
    transition: TransitionConfig
    scoring: ScoringConfig
    env: EnvConfig

    @property
    def max_obstacles(self) -> int:
        """Largest hazard count any level can generate."""
        return self.levels.rows_cap * self.levels.hazards_per_row_cap


def _parse_size(size_data: list) -> Tuple[float, float]:
    """Parse a [width, height] pair from YAML."""
    if len(size_data) != 2:
        raise ValueError(f"Size must have 2 values [width, height], got {size_data}")
    return (float(size_data[0]), float(size_data[1]))


def _validate_config(config: GameConfig) -> None:
    """Reject values the simulation cannot run with."""
    board = config.board
    if board.base_width <= 0 or board.base_height <= 0:
        raise ValueError(
            f"Base resolution must be positive, got {board.base_width}x{board.base_height}"
        )
    if board.output_width <= 0 or board.output_height <= 0:
        raise ValueError(
            f"Output size must be positive, got {board.output_width}x{board.output_height}"
        )

    vessel = config.vessel
    if vessel.width > board.base_width or vessel.height > board.base_height:
        raise ValueError("Vessel does not fit inside the playfield")
    if not (0 <= vessel.start_y <= board.base_height - vessel.height):
        raise ValueError(f"vessel.start_y ({vessel.start_y}) is outside the playfield")

    if config.wake.fade <= 0.0:
        raise ValueError("wake.fade must be positive so particles expire")

    if not (0.0 <= config.obstacles.wide_chance <= 1.0):
        raise ValueError(
            f"obstacles.wide_chance must be in [0, 1], got {config.obstacles.wide_chance}"
        )

    levels = config.levels
    if levels.rows_cap < 1 or levels.hazards_per_row_cap < 1:
        raise ValueError("levels.rows_cap and levels.hazards_per_row_cap must be >= 1")
    if not (0.0 <= levels.mine_chance_cap <= 1.0):
        raise ValueError(f"levels.mine_chance_cap must be in [0, 1], got {levels.mine_chance_cap}")

    if config.transition.delay < 0:
        raise ValueError(f"transition.delay must be >= 0, got {config.transition.delay}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Parse a YAML config file into a GameConfig.

    Args:
        config_path: File to read. Defaults to the game_config.yaml shipped
            inside the frigate_hop package.

    Raises:
        FileNotFoundError: The file is missing.
        ValueError: A value fails validation.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if not path.is_file():
        raise FileNotFoundError(f"No config file at {path}")

    with path.open("r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        base_width=int(board_data["base_width"]),
        base_height=int(board_data["base_height"]),
        output_width=int(board_data.get("output_width", board_data["base_width"])),
        output_height=int(board_data.get("output_height", board_data["base_height"])),
        goal_band_height=float(board_data["goal_band_height"])
    )

    vessel_data = raw["vessel"]
    vessel = VesselConfig(
        start_x=float(vessel_data["start_x"]),
        start_y=float(vessel_data["start_y"]),
        width=float(vessel_data["width"]),
        height=float(vessel_data["height"]),
        move_step=float(vessel_data["move_step"])
    )

    wake_data = raw["wake"]
    wake = WakeConfig(
        spawn_interval=float(wake_data["spawn_interval"]),
        particles_per_spawn=int(wake_data["particles_per_spawn"]),
        edge_inset=float(wake_data.get("edge_inset", 5)),
        jitter=float(wake_data["jitter"]),
        speed_min=float(wake_data["speed_min"]),
        speed_jitter=float(wake_data["speed_jitter"]),
        drift=float(wake_data.get("drift", 0.5)),
        initial_alpha=float(wake_data["initial_alpha"]),
        size_min=float(wake_data["size_min"]),
        size_jitter=float(wake_data["size_jitter"]),
        growth=float(wake_data["growth"]),
        fade=float(wake_data["fade"])
    )

    obstacle_data = raw["obstacles"]
    obstacles = ObstacleConfig(
        base_speed=float(obstacle_data["base_speed"]),
        speed_per_level=float(obstacle_data["speed_per_level"]),
        speed_cap=float(obstacle_data.get("speed_cap", 8.0)),
        speed_jitter=float(obstacle_data["speed_jitter"]),
        wide_chance=float(obstacle_data.get("wide_chance", 0.5)),
        wide_size=_parse_size(obstacle_data["wide_size"]),
        narrow_size=_parse_size(obstacle_data["narrow_size"]),
        mine_spin=float(obstacle_data["mine_spin"]),
        bob_amplitude=float(obstacle_data.get("bob_amplitude", 3)),
        bob_period=float(obstacle_data.get("bob_period", 0.5))
    )

    levels_data = raw["levels"]
    levels = LevelsConfig(
        first_row_y=float(levels_data["first_row_y"]),
        rows_cap=int(levels_data["rows_cap"]),
        row_spacing_base=float(levels_data["row_spacing_base"]),
        row_spacing_step=float(levels_data["row_spacing_step"]),
        row_spacing_cap=float(levels_data["row_spacing_cap"]),
        hazards_per_row_cap=int(levels_data["hazards_per_row_cap"]),
        mine_chance_base=float(levels_data["mine_chance_base"]),
        mine_chance_step=float(levels_data["mine_chance_step"]),
        mine_chance_cap=float(levels_data["mine_chance_cap"])
    )

    collision_data = raw["collision"]
    collision = CollisionConfig(
        vessel_padding_vertical=float(collision_data["vessel_padding_vertical"]),
        vessel_padding_horizontal=float(collision_data["vessel_padding_horizontal"]),
        mine_padding=float(collision_data["mine_padding"]),
        iceberg_padding=float(collision_data["iceberg_padding"])
    )

    transition_data = raw["transition"]
    transition = TransitionConfig(
        delay=float(transition_data["delay"]),
        flash_decay=float(transition_data["flash_decay"])
    )

    scoring_data = raw.get("scoring", {})
    scoring = ScoringConfig(
        points_per_advance=int(scoring_data.get("points_per_advance", 1))
    )

    env_data = raw.get("env", {})
    env = EnvConfig(
        frame_dt=float(env_data.get("frame_dt", 1.0 / 60.0)),
        max_episode_frames=int(env_data.get("max_episode_frames", 18000))
    )

    config = GameConfig(
        board=board,
        vessel=vessel,
        wake=wake,
        obstacles=obstacles,
        levels=levels,
        collision=collision,
        transition=transition,
        scoring=scoring,
        env=env
    )

    _validate_config(config)
    return config


_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Return the shared GameConfig, reading the default file on first use."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Replace the shared GameConfig with a fresh read of config_path."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config

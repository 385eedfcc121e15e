"""
Simulation Loop
===============

Main game orchestrator combining the vessel, hazard field, wake, collision
detection and level progression.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple, Union

from frigate_hop.core.collision import CollisionDetector
from frigate_hop.core.config_loader import GameConfig, get_config
from frigate_hop.core.level_director import LevelDirector
from frigate_hop.core.obstacles import ObstacleField
from frigate_hop.core.orientation import Orientation, parse_direction
from frigate_hop.core.rules import get_level_config
from frigate_hop.core.run_state import RunState
from frigate_hop.core.scaler import CoordinateScaler
from frigate_hop.core.scheduler import ScheduledTask, Scheduler
from frigate_hop.core.state_snapshot import GameSnapshot, SnapshotBuilder
from frigate_hop.core.vessel import Vessel
from frigate_hop.core.wake import WakeParticleSystem


class SimulationLoop:
    """
    Per-frame orchestrator for one game.

    Owns the RunState and every simulation component. A run begins with
    start(), advances once per scheduler pump while running, and ends on
    collision or stop(). The host observes it only through the score and
    game-over callbacks (plus read-only render data).

    Frame order:
    - goal flash, wake particles
    - hazard field (frozen while transitioning)
    - paint via render_callback
    - collision check (ends the run)
    - goal band check (begins a level transition)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        scheduler: Optional[Scheduler] = None,
        output_size: Optional[Tuple[int, int]] = None,
        on_score_change: Optional[Callable[[int], None]] = None,
        on_game_over: Optional[Callable[[], None]] = None,
        render_callback: Optional[Callable[[Dict[str, Any]], None]] = None,
        debug: bool = False
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility.
            scheduler: Frame/timer scheduler. A real-time one is created if None.
            output_size: Render surface size. Uses the configured default if None.
            on_score_change: Called with the new score whenever it changes.
            on_game_over: Called once when a collision ends the run.
            render_callback: Called with render data once per frame to paint.
            debug: If True, prints state changes.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._scheduler = scheduler if scheduler is not None else Scheduler()
        self._output_size = output_size or (config.board.output_width, config.board.output_height)
        self._on_score_change = on_score_change
        self._on_game_over = on_game_over
        self._render_callback = render_callback
        self._debug = debug

        self._snapshot_builder = SnapshotBuilder(config)
        self._frame_task: Optional[ScheduledTask] = None
        self._running: bool = False

        self._state = RunState()
        self._build_run()

    def _build_run(self) -> None:
        """Create fresh components for the current output size."""
        config = self._config
        self._scaler = CoordinateScaler.from_config(config, self._output_size)
        wake_seed = None if self._seed is None else self._seed + 1
        self._vessel = Vessel(self._scaler, config)
        self._wake = WakeParticleSystem(self._scaler, config, seed=wake_seed)
        self._field = ObstacleField(self._scaler, config, seed=self._seed)
        self._detector = CollisionDetector(self._scaler, config)
        self._director = LevelDirector(self._scaler, self._scheduler, config)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def scaler(self) -> CoordinateScaler:
        return self._scaler

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def vessel(self) -> Vessel:
        return self._vessel

    @property
    def field(self) -> ObstacleField:
        return self._field

    @property
    def wake(self) -> WakeParticleSystem:
        return self._wake

    @property
    def director(self) -> LevelDirector:
        return self._director

    @property
    def detector(self) -> CollisionDetector:
        return self._detector

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def level(self) -> int:
        return self._state.level

    @property
    def is_over(self) -> bool:
        return self._state.game_over

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def output_size(self) -> Tuple[int, int]:
        """Size the next start() will use."""
        return self._output_size

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, seed: Optional[int] = None) -> None:
        """
        Begin a new run.

        Cancels anything the previous run left scheduled, rebuilds every
        component at the current output size, generates level 1 and requests
        the first frame.

        Args:
            seed: New random seed. Uses previous if None.
        """
        self.stop()
        if seed is not None:
            self._seed = seed

        self._state = RunState()
        self._build_run()
        self._field.generate(self._state.level)
        self._running = True

        if self._debug:
            print(f"[DEBUG] Run started: {self._scaler}, "
                  f"{self._field.count} hazards on level 1")

        self._emit_score()
        self._frame_task = self._scheduler.request_frame(self._on_frame)

    def stop(self) -> None:
        """Stop scheduling frames and cancel any pending level transition."""
        if self._frame_task is not None:
            self._frame_task.cancel()
            self._frame_task = None
        self._director.cancel()
        self._running = False

    def resize(self, width: int, height: int) -> None:
        """
        Record a new output size. It applies at the next start(); an
        in-progress run keeps its geometry.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Output size must be positive, got {width}x{height}")
        self._output_size = (int(width), int(height))

    # ------------------------------------------------------------------
    # Frame tick
    # ------------------------------------------------------------------

    def _on_frame(self) -> None:
        self._frame_task = None
        if not self._running:
            return
        if self.tick():
            self._frame_task = self._scheduler.request_frame(self._on_frame)

    def tick(self) -> bool:
        """
        Advance the simulation by one frame.

        Returns:
            True if the run continues, False once it is over.
        """
        state = self._state
        if state.game_over:
            return False

        state.frames += 1

        self._wake.advance()
        if not state.transitioning:
            self._field.advance()

        if self._render_callback is not None:
            self._render_callback(self.get_render_data())

        self._director.update_flash(state)

        if self._detector.check(self._vessel, self._field.obstacles, state.transitioning):
            self._end_run()
            return False

        if self._director.should_begin(state, self._vessel):
            self._director.begin_transition(
                state, self._vessel, self._field, self._on_level_start
            )
            if self._debug:
                print(f"[DEBUG] Level {state.level} complete, score={state.score}")

        return True

    def _on_level_start(self, level: int) -> None:
        if self._debug:
            print(f"[DEBUG] Level {level} started with {self._field.count} hazards")

    def _end_run(self) -> None:
        self._state.game_over = True
        self.stop()
        if self._debug:
            print(f"[DEBUG] GAME OVER: level={self._state.level}, score={self._state.score}")
        if self._on_game_over is not None:
            self._on_game_over()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_input(self, direction: Union[str, Orientation, None]) -> bool:
        """
        Apply one movement command immediately.

        Ignored if the direction is not recognised, the run has not started,
        the run is over, or a level transition is running.

        Args:
            direction: "up"/"down"/"left"/"right", a key name such as
                "ArrowUp", or an Orientation.

        Returns:
            True if the vessel moved.
        """
        orientation = parse_direction(direction)
        if orientation is None:
            return False
        if not self._running or not self._state.accepts_input:
            return False

        self._wake.spawn(self._vessel, self._scheduler.now())

        if self._vessel.move(orientation):
            self._state.score += self._config.scoring.points_per_advance
            self._emit_score()

        return True

    def _emit_score(self) -> None:
        if self._on_score_change is not None:
            self._on_score_change(self._state.score)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(
            state=self._state,
            vessel=self._vessel,
            obstacles=self._field.obstacles,
            scaler=self._scaler,
            goal_line_y=self._director.goal_line_y
        )

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._state.score,
            "level": self._state.level,
            "frames": self._state.frames,
            "game_over": self._state.game_over,
            "transitioning": self._state.transitioning,
            "hazards": self._field.count,
            "wake_particles": self._wake.count,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with field geometry, entities and HUD values.
        """
        state = self._state
        level_config = get_level_config(state.level, self._config)
        now = self._scheduler.now()
        bob = self._field.bob_offset(now)

        obstacles_data = []
        for obstacle in self._field.obstacles:
            obstacles_data.append({
                "kind": obstacle.kind.value,
                "x": obstacle.x,
                "y": obstacle.y + (bob if obstacle.is_mine else 0.0),
                "width": obstacle.width,
                "height": obstacle.height,
                "rotation": obstacle.rotation,
                "hitbox": self._detector.hazard_box(obstacle),
            })

        particles_data = [
            {"x": p.x, "y": p.y, "size": p.size, "alpha": p.alpha}
            for p in self._wake.particles
        ]

        return {
            "field_width": self._scaler.field_width,
            "field_height": self._scaler.field_height,
            "scale_x": self._scaler.scale_x,
            "scale_y": self._scaler.scale_y,
            "time": now,
            "goal_line_y": self._director.goal_line_y,
            "goal_flash": state.goal_flash,
            "vessel": {
                "x": self._vessel.x,
                "y": self._vessel.y,
                "width": self._vessel.width,
                "height": self._vessel.height,
                "orientation": self._vessel.orientation.value,
                "sprite_angle": self._vessel.orientation.profile.sprite_angle,
                "hitbox": self._detector.vessel_box(self._vessel),
            },
            "obstacles": obstacles_data,
            "particles": particles_data,
            "level": state.level,
            "rows": level_config.rows,
            "score": state.score,
            "game_over": state.game_over,
            "transitioning": state.transitioning,
            "transition_progress": self._director.transition_progress(state),
        }

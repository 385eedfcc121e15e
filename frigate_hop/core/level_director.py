"""
Level Director
==============

Two-state machine for level progression:

    PLAYING --(vessel enters goal band)--> TRANSITIONING
    TRANSITIONING --(delay elapsed)--> PLAYING at level + 1

While transitioning the hazard field is frozen and collisions are ignored.
The delay is a one-shot scheduled task that can be cancelled when the run
stops.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from frigate_hop.core.config_loader import GameConfig, get_config
from frigate_hop.core.obstacles import ObstacleField
from frigate_hop.core.run_state import RunState
from frigate_hop.core.scaler import CoordinateScaler
from frigate_hop.core.scheduler import ScheduledTask, Scheduler
from frigate_hop.core.vessel import Vessel


class LevelPhase(Enum):
    PLAYING = "playing"
    TRANSITIONING = "transitioning"


class LevelDirector:
    """Drives level transitions for a run."""

    def __init__(
        self,
        scaler: CoordinateScaler,
        scheduler: Scheduler,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize director.

        Args:
            scaler: Coordinate scaler for the current run.
            scheduler: Scheduler that owns the transition timer.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scaler = scaler
        self._scheduler = scheduler
        self._pending: Optional[ScheduledTask] = None

    @property
    def goal_line_y(self) -> float:
        """Vessel y below which the goal band is reached."""
        return self._scaler.y(self._config.board.goal_band_height)

    @property
    def pending_task(self) -> Optional[ScheduledTask]:
        if self._pending is not None and self._pending.pending:
            return self._pending
        return None

    @staticmethod
    def phase(state: RunState) -> LevelPhase:
        return LevelPhase.TRANSITIONING if state.transitioning else LevelPhase.PLAYING

    def in_goal_band(self, vessel: Vessel) -> bool:
        return vessel.y < self.goal_line_y

    def should_begin(self, state: RunState, vessel: Vessel) -> bool:
        return (
            not state.game_over
            and not state.transitioning
            and self.in_goal_band(vessel)
        )

    def begin_transition(
        self,
        state: RunState,
        vessel: Vessel,
        field: ObstacleField,
        on_level_start: Optional[Callable[[int], None]] = None
    ) -> bool:
        """
        Enter TRANSITIONING and schedule the next level.

        Args:
            state: Run state to mutate.
            vessel: Vessel to send back to the start row.
            field: Obstacle field to regenerate.
            on_level_start: Called with the new level number once it begins.

        Returns:
            False if a transition was already running or the run is over.
        """
        if state.transitioning or state.game_over:
            return False

        state.transitioning = True
        state.transition_started_at = self._scheduler.now()
        state.goal_flash = 1.0

        self._pending = self._scheduler.call_later(
            self._config.transition.delay,
            lambda: self._complete(state, vessel, field, on_level_start)
        )
        return True

    def _complete(
        self,
        state: RunState,
        vessel: Vessel,
        field: ObstacleField,
        on_level_start: Optional[Callable[[int], None]]
    ) -> None:
        """Timer body: start the next level."""
        self._pending = None
        if state.game_over:
            return

        state.level += 1
        vessel.return_to_start_row()
        field.generate(state.level)
        state.transitioning = False
        state.transition_started_at = None

        if on_level_start is not None:
            on_level_start(state.level)

    def update_flash(self, state: RunState) -> None:
        """Fade the goal band flash by one frame."""
        if state.goal_flash > 0:
            state.goal_flash = max(0.0, state.goal_flash - self._config.transition.flash_decay)

    def transition_progress(self, state: RunState) -> float:
        """Fraction of the transition delay elapsed, in [0, 1]."""
        if not state.transitioning or state.transition_started_at is None:
            return 0.0
        delay = self._config.transition.delay
        if delay <= 0:
            return 1.0
        elapsed = self._scheduler.now() - state.transition_started_at
        return max(0.0, min(elapsed / delay, 1.0))

    def cancel(self) -> bool:
        """Cancel a pending transition timer."""
        task, self._pending = self._pending, None
        return task.cancel() if task is not None else False

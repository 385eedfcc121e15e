"""
Run State
=========

Mutable state of one run, owned by the simulation loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class RunState:
    """
    Level, score and flags for the current run.

    Score and level carry across level transitions; the whole object is
    replaced when a new run starts.
    """
    level: int = 1
    score: int = 0
    game_over: bool = False
    transitioning: bool = False
    transition_started_at: Optional[float] = None
    goal_flash: float = 0.0
    frames: int = 0

    def reset(self) -> None:
        self.level = 1
        self.score = 0
        self.game_over = False
        self.transitioning = False
        self.transition_started_at = None
        self.goal_flash = 0.0
        self.frames = 0

    @property
    def accepts_input(self) -> bool:
        return not (self.game_over or self.transitioning)

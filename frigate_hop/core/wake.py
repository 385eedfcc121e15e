"""
Wake Particles
==============

Short-lived cosmetic particles trailing the vessel. They never affect
gameplay.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from frigate_hop.core.config_loader import GameConfig, get_config
from frigate_hop.core.scaler import CoordinateScaler
from frigate_hop.core.vessel import Vessel


@dataclass
class WakeParticle:
    """A single wake particle in output pixels."""
    x: float
    y: float
    vx: float
    vy: float
    size: float
    alpha: float


class WakeParticleSystem:
    """
    Spawns, advances and expires wake particles.

    Spawning is throttled by a last-spawn timestamp so that rapid input does
    not flood the system; each accepted spawn emits a fixed burst.
    """

    def __init__(
        self,
        scaler: CoordinateScaler,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize particle system.

        Args:
            scaler: Coordinate scaler for the current run.
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scaler = scaler
        self._rng = random.Random(seed)
        self._particles: List[WakeParticle] = []
        self._last_spawn: Optional[float] = None

    @property
    def particles(self) -> List[WakeParticle]:
        return self._particles

    @property
    def count(self) -> int:
        return len(self._particles)

    @property
    def last_spawn(self) -> Optional[float]:
        return self._last_spawn

    def clear(self) -> None:
        """Drop all particles and forget the throttle timestamp."""
        self._particles = []
        self._last_spawn = None

    def ready(self, now: float) -> bool:
        """True if enough time has passed since the last spawn."""
        if self._last_spawn is None:
            return True
        return now - self._last_spawn >= self._config.wake.spawn_interval

    def spawn(self, vessel: Vessel, now: float) -> bool:
        """
        Emit a burst behind the vessel if the throttle allows it.

        Args:
            vessel: Vessel whose trailing edge the burst starts from.
            now: Current clock time in seconds.

        Returns:
            True if particles were spawned.
        """
        if not self.ready(now):
            return False

        self._last_spawn = now
        cfg = self._config.wake
        scale_x = self._scaler.scale_x
        scale_y = self._scaler.scale_y
        profile = vessel.orientation.profile
        center_x, center_y = vessel.center

        for _ in range(cfg.particles_per_spawn):
            jitter = self._rng.uniform(-cfg.jitter, cfg.jitter)
            trail_speed = cfg.speed_min + self._rng.random() * cfg.speed_jitter
            drift = (self._rng.random() - 0.5) * cfg.drift

            if profile.is_vertical:
                x = center_x + jitter * scale_x
                y = center_y + profile.trail_y * (vessel.height / 2 - cfg.edge_inset * scale_y)
                vx = drift
                vy = profile.trail_y * trail_speed
            else:
                x = center_x + profile.trail_x * (vessel.width / 2 - cfg.edge_inset * scale_x)
                y = center_y + jitter * scale_y
                vx = profile.trail_x * trail_speed
                vy = drift

            self._particles.append(WakeParticle(
                x=x,
                y=y,
                vx=vx * scale_x,
                vy=vy * scale_y,
                size=(cfg.size_min + self._rng.random() * cfg.size_jitter) * scale_x,
                alpha=cfg.initial_alpha
            ))

        return True

    def advance(self) -> None:
        """Move, grow and fade every particle; drop the expired ones."""
        cfg = self._config.wake
        growth = cfg.growth * self._scaler.scale_x
        alive: List[WakeParticle] = []
        for particle in self._particles:
            particle.x += particle.vx
            particle.y += particle.vy
            particle.size += growth
            particle.alpha -= cfg.fade
            if particle.alpha > 0:
                alive.append(particle)
        self._particles = alive

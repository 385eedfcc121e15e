"""
Tests for wake particle emission and decay.
"""

import pytest

from frigate_hop.core.config_loader import load_config
from frigate_hop.core.orientation import Orientation
from frigate_hop.core.scaler import CoordinateScaler
from frigate_hop.core.vessel import Vessel
from frigate_hop.core.wake import WakeParticleSystem


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def scaler(config):
    return CoordinateScaler.from_config(config)


@pytest.fixture
def vessel(scaler, config):
    return Vessel(scaler, config)


@pytest.fixture
def wake(scaler, config):
    return WakeParticleSystem(scaler, config, seed=1)


class TestSpawning:
    """Test spawn throttling and placement."""

    def test_spawn_emits_three(self, wake, vessel):
        assert wake.spawn(vessel, 0.0)
        assert wake.count == 3
        assert wake.last_spawn == 0.0

    def test_throttled_within_interval(self, wake, vessel):
        """A second spawn inside 32 ms is dropped."""
        wake.spawn(vessel, 0.0)

        assert not wake.spawn(vessel, 0.010)
        assert wake.count == 3

        assert wake.spawn(vessel, 0.032)
        assert wake.count == 6

    def test_trails_below_when_heading_up(self, wake, vessel):
        """Heading up, particles start 5 units inside the bottom edge and drift down."""
        center_x, center_y = vessel.center
        wake.spawn(vessel, 0.0)

        for particle in wake.particles:
            assert particle.y == pytest.approx(center_y + 10)
            assert abs(particle.x - center_x) <= 8
            assert particle.vy > 0
            assert particle.alpha == pytest.approx(0.6)
            assert 2 <= particle.size <= 4

    def test_trails_right_when_heading_left(self, wake, vessel):
        vessel.move(Orientation.LEFT)
        center_x, center_y = vessel.center
        wake.spawn(vessel, 0.0)

        for particle in wake.particles:
            assert particle.x == pytest.approx(center_x + 35)
            assert abs(particle.y - center_y) <= 8
            assert particle.vx > 0

    def test_clear_resets_throttle(self, wake, vessel):
        wake.spawn(vessel, 0.0)
        wake.clear()

        assert wake.count == 0
        assert wake.spawn(vessel, 0.001)


class TestDecay:
    """Test per-frame advance."""

    def test_grow_and_fade(self, wake, vessel):
        wake.spawn(vessel, 0.0)
        sizes = [p.size for p in wake.particles]

        wake.advance()

        for size, particle in zip(sizes, wake.particles):
            assert particle.size == pytest.approx(size + 0.15)
            assert particle.alpha == pytest.approx(0.575)

    def test_expire_after_fading(self, wake, vessel):
        """0.6 alpha at 0.025 per frame is gone within 25 frames."""
        wake.spawn(vessel, 0.0)

        for _ in range(23):
            wake.advance()
        assert wake.count == 3

        wake.advance()
        wake.advance()
        assert wake.count == 0

    def test_same_seed_same_particles(self, scaler, config, vessel):
        a = WakeParticleSystem(scaler, config, seed=5)
        b = WakeParticleSystem(scaler, config, seed=5)
        a.spawn(vessel, 0.0)
        b.spawn(vessel, 0.0)

        assert a.particles == b.particles

"""
Tests for output scaling and resize handling.
"""

import pytest

from frigate_hop.core.config_loader import load_config
from frigate_hop.core.game import SimulationLoop
from frigate_hop.core.scaler import CoordinateScaler
from frigate_hop.core.scheduler import ManualClock, Scheduler


@pytest.fixture
def config():
    return load_config()


class TestCoordinateScaler:
    """Test logical -> output conversion."""

    def test_identity_at_base_size(self, config):
        scaler = CoordinateScaler.from_config(config)
        assert scaler.scale_x == 1.0
        assert scaler.scale_y == 1.0
        assert scaler.point(400, 550) == (400, 550)

    def test_independent_axes(self):
        scaler = CoordinateScaler(1600, 300)
        assert scaler.x(10) == pytest.approx(20)
        assert scaler.y(10) == pytest.approx(5)
        assert scaler.field_width == 1600
        assert scaler.field_height == 300

    def test_font_size_follows_height(self):
        assert CoordinateScaler(800, 1200).font_size(24) == 48

    @pytest.mark.parametrize("size", [(0, 600), (800, 0), (-1, 600)])
    def test_rejects_non_positive(self, size):
        with pytest.raises(ValueError):
            CoordinateScaler(*size)


class TestScaledGame:
    """Test a game running at a non-default size."""

    def test_double_size(self, config):
        game = SimulationLoop(config=config, seed=1, scheduler=Scheduler(ManualClock()),
                              output_size=(1600, 1200))
        game.start()

        assert (game.vessel.x, game.vessel.y) == (800, 1100)
        assert (game.vessel.width, game.vessel.height) == (160, 60)
        assert game.director.goal_line_y == pytest.approx(100)

        game.handle_input("up")
        assert game.vessel.y == pytest.approx(1070)

    def test_resize_applies_on_next_start(self, config):
        game = SimulationLoop(config=config, seed=1, scheduler=Scheduler(ManualClock()))
        game.start()

        game.resize(400, 300)
        assert game.scaler.output_size == (800, 600)
        assert game.vessel.y == pytest.approx(550)

        game.start()
        assert game.scaler.output_size == (400, 300)
        assert game.vessel.y == pytest.approx(275)

    def test_resize_rejects_bad_size(self, config):
        game = SimulationLoop(config=config, scheduler=Scheduler(ManualClock()))
        with pytest.raises(ValueError):
            game.resize(0, 300)

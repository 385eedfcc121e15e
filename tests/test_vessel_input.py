"""
Tests for vessel movement, input handling and scoring.
"""

import pytest

from frigate_hop.core.config_loader import load_config
from frigate_hop.core.game import SimulationLoop
from frigate_hop.core.orientation import Orientation, parse_direction
from frigate_hop.core.scaler import CoordinateScaler
from frigate_hop.core.scheduler import ManualClock, Scheduler
from frigate_hop.core.vessel import Vessel


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def vessel(config):
    return Vessel(CoordinateScaler.from_config(config), config)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scores():
    return []


@pytest.fixture
def game(config, clock, scores):
    game = SimulationLoop(
        config=config,
        seed=42,
        scheduler=Scheduler(clock),
        on_score_change=scores.append
    )
    return game


class TestVessel:
    """Test vessel geometry and moves."""

    def test_starts_at_start_position(self, vessel):
        assert (vessel.x, vessel.y) == (400, 550)
        assert (vessel.width, vessel.height) == (80, 30)
        assert vessel.orientation is Orientation.UP

    def test_move_steps_and_records_history(self, vessel):
        scored = vessel.move(Orientation.UP)

        assert scored
        assert vessel.y == pytest.approx(535)
        assert vessel.last_y == pytest.approx(550)
        assert vessel.velocity == (0.0, pytest.approx(-15))

    def test_sideways_and_backward_moves_do_not_score(self, vessel):
        assert not vessel.move(Orientation.LEFT)
        assert not vessel.move(Orientation.RIGHT)
        assert not vessel.move(Orientation.DOWN)
        assert vessel.orientation is Orientation.DOWN

    def test_clamped_to_field(self, vessel):
        """Position never leaves [0, field - size]."""
        vessel.x, vessel.y = 5, 5
        vessel.move(Orientation.LEFT)
        vessel.move(Orientation.UP)
        assert (vessel.x, vessel.y) == (0, 0)

        vessel.x, vessel.y = 715, 565
        vessel.move(Orientation.RIGHT)
        vessel.move(Orientation.DOWN)
        assert (vessel.x, vessel.y) == (720, 570)

    def test_up_at_top_edge_does_not_score(self, vessel):
        vessel.y = 0
        assert not vessel.move(Orientation.UP)
        assert vessel.y == 0

    def test_step_uses_horizontal_scale(self, config):
        """Vertical moves also use scale_x."""
        vessel = Vessel(CoordinateScaler.from_config(config, (1600, 600)), config)
        vessel.move(Orientation.UP)
        assert vessel.y == pytest.approx(550 - 30)

    def test_return_to_start_row_keeps_x(self, vessel):
        vessel.move(Orientation.LEFT)
        vessel.move(Orientation.UP)
        vessel.return_to_start_row()

        assert vessel.x == pytest.approx(385)
        assert vessel.y == pytest.approx(550)


class TestParseDirection:
    """Test input direction parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("up", Orientation.UP),
        ("DOWN", Orientation.DOWN),
        ("ArrowLeft", Orientation.LEFT),
        ("arrowright", Orientation.RIGHT),
        (Orientation.UP, Orientation.UP),
    ])
    def test_recognised(self, value, expected):
        assert parse_direction(value) is expected

    @pytest.mark.parametrize("value", ["jump", "", None, 3])
    def test_unrecognised(self, value):
        assert parse_direction(value) is None


class TestInputHandling:
    """Test SimulationLoop.handle_input."""

    def test_ignored_before_start(self, game):
        assert not game.handle_input("up")
        assert game.score == 0

    def test_up_scores_one(self, game, scores):
        game.start()
        assert game.handle_input("up")

        assert game.score == 1
        assert scores == [0, 1]

    def test_unrecognised_direction_is_noop(self, game):
        game.start()
        y = game.vessel.y

        assert not game.handle_input("jump")
        assert game.vessel.y == y
        assert game.score == 0
        assert game.wake.count == 0

    def test_up_at_top_does_not_score(self, game):
        game.start()
        game.vessel.y = 0

        game.handle_input("up")

        assert game.score == 0

    def test_ten_up_moves(self, game, clock):
        """Ten spaced up inputs: score 10, y 550 -> 400."""
        game.start()
        for _ in range(10):
            game.handle_input("up")
            clock.advance(0.1)

        assert game.score == 10
        assert game.vessel.y == pytest.approx(400)

    def test_input_spawns_wake(self, game):
        game.start()
        game.handle_input("left")

        assert game.wake.count == 3
        assert game.vessel.orientation is Orientation.LEFT

    def test_score_resets_on_start(self, game, scores):
        game.start()
        game.handle_input("up")
        game.start()

        assert game.score == 0
        assert scores[-1] == 0

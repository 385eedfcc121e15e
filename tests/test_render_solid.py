"""
Tests for the numpy renderer and render data.
"""

import pytest
import numpy as np

from frigate_hop.core.config_loader import load_config
from frigate_hop.core.game import SimulationLoop
from frigate_hop.core.obstacles import HazardKind, Obstacle
from frigate_hop.core.render_solid import SolidRenderer
from frigate_hop.core.scheduler import ManualClock, Scheduler


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def game(config):
    game = SimulationLoop(config=config, seed=3, scheduler=Scheduler(ManualClock()))
    game.start()
    return game


class TestRenderData:
    """Test the data handed to renderers."""

    def test_keys(self, game):
        data = game.get_render_data()

        for key in ("field_width", "field_height", "goal_line_y", "goal_flash",
                    "vessel", "obstacles", "particles", "level", "rows", "score"):
            assert key in data
        assert data["vessel"]["sprite_angle"] == 90.0
        assert data["rows"] == 1

    def test_mine_bob_is_draw_only(self, game):
        """Mines are drawn offset by the bob; their state y is unchanged."""
        mine = Obstacle(x=10, y=200, width=40, height=40, speed=0, direction=1, kind=HazardKind.MINE)
        game.field.obstacles[:] = [mine]
        game.scheduler.clock.set(0.25 * np.pi)

        drawn = game.get_render_data()["obstacles"][0]

        assert drawn["y"] == pytest.approx(203)
        assert mine.y == 200


class TestSolidRenderer:
    """Test numpy rendering."""

    def test_output_shape(self, game, config):
        img = SolidRenderer(config).render(game.get_render_data())
        assert img.shape == (600, 800, 3)
        assert img.dtype == np.uint8

    def test_custom_size(self, game, config):
        img = SolidRenderer(config).render(game.get_render_data(), 200, 150)
        assert img.shape == (150, 200, 3)

    def test_vessel_painted(self, game, config):
        renderer = SolidRenderer(config, show_hitboxes=False)
        img = renderer.render(game.get_render_data())

        vessel = game.vessel
        cx, cy = (int(c) for c in vessel.center)
        assert tuple(img[cy, cx]) == (74, 85, 104)

    def test_goal_flash_whitens_band(self, game, config):
        renderer = SolidRenderer(config, show_hitboxes=False)
        data = game.get_render_data()
        data["obstacles"] = []
        plain = renderer.render(data)

        data["goal_flash"] = 1.0
        flashed = renderer.render(data)

        assert tuple(flashed[10, 10]) == (255, 255, 255)
        assert flashed[10, 10].sum() > plain[10, 10].sum()

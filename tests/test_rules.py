"""
Tests for the level difficulty curve and configuration loading.
"""

import pytest

from frigate_hop.core.config_loader import load_config
from frigate_hop.core.rules import (
    base_speed,
    get_level_config,
    hazards_per_row,
    mine_chance,
    row_count,
    row_spacing,
)


@pytest.fixture
def config():
    return load_config()


class TestLevelCurve:
    """Test the level -> field shape mapping."""

    def test_first_level_is_one_hazard(self, config):
        """Level 1 has a single row with a single hazard."""
        level = get_level_config(1, config)

        assert level.rows == 1
        assert level.hazards_per_row == 1
        assert level.hazard_count == 1

    def test_rows_grow_every_two_levels(self, config):
        """One extra row every two levels, capped at six."""
        assert [row_count(n, config) for n in range(1, 8)] == [1, 1, 2, 2, 3, 3, 4]
        assert row_count(11, config) == 6
        assert row_count(50, config) == 6

    def test_hazards_per_row_grow_every_three_levels(self, config):
        """One extra hazard per row every three levels, capped at three."""
        assert [hazards_per_row(n, config) for n in range(1, 7)] == [1, 1, 2, 2, 2, 3]
        assert hazards_per_row(30, config) == 3

    def test_mine_chance_capped(self, config):
        """Mine probability climbs 3% per level and stops at 50%."""
        assert mine_chance(1, config) == pytest.approx(0.13)
        assert mine_chance(10, config) == pytest.approx(0.40)
        assert mine_chance(14, config) == pytest.approx(0.5)
        assert mine_chance(100, config) == pytest.approx(0.5)

    def test_row_spacing_capped(self, config):
        """Row spacing widens 5 units per level up to 120."""
        assert row_spacing(1, config) == pytest.approx(85)
        assert row_spacing(8, config) == pytest.approx(120)
        assert row_spacing(20, config) == pytest.approx(120)

    def test_speed_capped(self, config):
        """Base speed climbs 0.2 per level and saturates."""
        assert base_speed(1, config) == pytest.approx(1.0)
        assert base_speed(36, config) == pytest.approx(8.0)
        assert base_speed(500, config) == pytest.approx(8.0)

    def test_parameters_non_decreasing(self, config):
        """No parameter ever gets easier as levels advance."""
        previous = get_level_config(1, config)
        for n in range(2, 60):
            current = get_level_config(n, config)
            assert current.rows >= previous.rows
            assert current.hazards_per_row >= previous.hazards_per_row
            assert current.speed >= previous.speed
            assert current.mine_chance >= previous.mine_chance
            assert current.row_spacing >= previous.row_spacing
            previous = current

    def test_row_y_uses_spacing(self, config):
        """Row i sits at first_row_y + i * spacing."""
        level = get_level_config(3, config)
        assert level.row_y(0, 100) == pytest.approx(100)
        assert level.row_y(1, 100) == pytest.approx(100 + level.row_spacing)

    def test_level_zero_rejected(self, config):
        with pytest.raises(ValueError):
            get_level_config(0, config)


class TestConfigLoading:
    """Test game_config.yaml loading."""

    def test_default_config_loads(self, config):
        assert config.board.base_width == 800
        assert config.board.base_height == 600
        assert config.vessel.width == 80
        assert config.transition.delay == pytest.approx(1.0)

    def test_max_obstacles(self, config):
        """Observation arrays are sized for the densest level."""
        assert config.max_obstacles == 18

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

"""
Tests for hazard generation and movement.
"""

import math

import pytest

from frigate_hop.core.config_loader import load_config
from frigate_hop.core.obstacles import HazardKind, Obstacle, ObstacleField
from frigate_hop.core.scaler import CoordinateScaler


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def scaler(config):
    return CoordinateScaler.from_config(config)


@pytest.fixture
def field(scaler, config):
    return ObstacleField(scaler, config, seed=42)


def make_iceberg(x, y=100.0, width=40.0, height=40.0, speed=10.0, direction=1):
    return Obstacle(
        x=x, y=y, width=width, height=height,
        speed=speed, direction=direction, kind=HazardKind.ICEBERG
    )


class TestGeneration:
    """Test per-level hazard generation."""

    def test_level_one_has_one_hazard(self, field):
        obstacles = field.generate(1)

        assert len(obstacles) == 1
        assert field.level == 1
        assert obstacles[0].y == pytest.approx(100)

    def test_count_matches_level(self, field, config):
        """rows * hazards_per_row hazards, capped at 18."""
        assert len(field.generate(3)) == 4
        assert len(field.generate(11)) == 18
        assert len(field.generate(40)) == config.max_obstacles

    def test_rows_evenly_spaced(self, field):
        """Hazards sit on rows 100 + i * spacing (level 3: spacing 95)."""
        field.generate(3)
        rows = sorted({round(o.y, 6) for o in field})

        assert rows == [pytest.approx(100), pytest.approx(195)]

    def test_hazard_properties_in_range(self, field):
        """Every hazard uses one of the two sizes and a legal speed."""
        field.generate(11)
        for obstacle in field:
            assert (obstacle.width, obstacle.height) in {(80, 60), (40, 40)}
            assert obstacle.direction in (-1, 1)
            assert 3.0 <= obstacle.speed <= 3.5
            assert 0 <= obstacle.x < 800
            if obstacle.kind is HazardKind.ICEBERG:
                assert obstacle.rotation == 0.0

    def test_generate_replaces_field(self, field):
        field.generate(11)
        field.generate(1)
        assert field.count == 1

    def test_same_seed_same_field(self, scaler, config):
        a = ObstacleField(scaler, config, seed=7)
        b = ObstacleField(scaler, config, seed=7)

        assert a.generate(9) == b.generate(9)

    def test_sizes_scale_with_output(self, config):
        """Hazards are sized and placed in output pixels."""
        scaler = CoordinateScaler.from_config(config, (1600, 1200))
        field = ObstacleField(scaler, config, seed=3)
        field.generate(1)
        obstacle = field.obstacles[0]

        assert (obstacle.width, obstacle.height) in {(160, 120), (80, 80)}
        assert obstacle.y == pytest.approx(200)
        assert 2.0 <= obstacle.speed <= 3.0


class TestMovement:
    """Test per-frame hazard motion."""

    def test_wraps_right_edge(self, field):
        """Passing the right edge re-enters at -width in the same frame."""
        iceberg = make_iceberg(x=795)
        field.obstacles.append(iceberg)

        field.advance()

        assert iceberg.x == pytest.approx(-40)

    def test_wraps_left_edge(self, field):
        iceberg = make_iceberg(x=-35, direction=-1)
        field.obstacles.append(iceberg)

        field.advance()

        assert iceberg.x == pytest.approx(800)

    def test_moves_by_signed_speed(self, field):
        right = make_iceberg(x=100, speed=2.5, direction=1)
        left = make_iceberg(x=100, speed=2.5, direction=-1)
        field.obstacles.extend([right, left])

        field.advance()

        assert right.x == pytest.approx(102.5)
        assert left.x == pytest.approx(97.5)

    def test_only_mines_spin(self, field):
        iceberg = make_iceberg(x=100)
        mine = Obstacle(
            x=200, y=100, width=40, height=40,
            speed=1, direction=1, kind=HazardKind.MINE, rotation=0.0
        )
        field.obstacles.extend([iceberg, mine])

        field.advance()

        assert iceberg.rotation == 0.0
        assert mine.rotation == pytest.approx(0.01)

    def test_bob_offset(self, field):
        """Mines bob by sin(t / 0.5) * 3 at draw time."""
        assert field.bob_offset(0.0) == pytest.approx(0.0)
        assert field.bob_offset(0.25 * math.pi) == pytest.approx(3.0)

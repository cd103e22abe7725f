"""
Tests for nearest-target selection and pursuit steering.
"""

import random

import pytest

from aquarium.core.config_loader import load_config
from aquarium.core.entities import Bubble, Fish
from aquarium.core.planner import SeekPlanner, nearest_target


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def planner(config):
    return SeekPlanner(config, random.Random(0))


class TestNearestTarget:
    """Test nearest bubble search."""

    def test_picks_minimum_distance(self):
        """Bubbles at distances 5, 3, 9 -> the one at 3 is chosen."""
        fish = Fish(x=0.0, y=0.0)
        bubbles = [
            Bubble(x=5.0, y=0.0, vy=-0.2),
            Bubble(x=0.0, y=3.0, vy=-0.2),
            Bubble(x=9.0, y=0.0, vy=-0.2),
        ]
        target = nearest_target(fish, bubbles)

        assert target.index == 1
        assert target.bubble is bubbles[1]
        assert target.distance == pytest.approx(3.0)

    def test_tie_keeps_earliest(self):
        fish = Fish(x=0.0, y=0.0)
        bubbles = [Bubble(x=3.0, y=0.0, vy=-0.2), Bubble(x=0.0, y=3.0, vy=-0.2)]

        assert nearest_target(fish, bubbles).index == 0

    def test_empty(self):
        assert nearest_target(Fish(x=0.0, y=0.0), []) is None


class TestSteering:
    """Test the chase step."""

    def test_chase_with_prediction(self):
        planner = SeekPlanner(load_config(profile="chase"), random.Random(0))
        fish = Fish(x=100.0, y=100.0)
        bubble = Bubble(x=200.0, y=150.0, vy=-0.2)

        target = planner.steer(fish, [bubble])

        assert target is not None
        # Predicted point is 8 ticks ahead: (200, 148.4)
        assert fish.ax == pytest.approx(100.0 * 1e-4)
        assert fish.ay == pytest.approx(48.4 * 1e-4)
        # The planner integrates the fish itself
        assert fish.vx == pytest.approx(0.01)
        assert fish.x == pytest.approx(100.01)
        assert fish.y == pytest.approx(100.00484)

    def test_classic_leads_x_by_vertical_velocity(self, planner, config):
        """Classic steering aims at (x + vy*8, y + vy*8)."""
        assert config.planner.lead_x_with_vertical_velocity
        fish = Fish(x=100.0, y=100.0)
        bubble = Bubble(x=200.0, y=150.0, vy=-0.2)

        assert planner.predict(bubble) == pytest.approx((198.4, 148.4))
        planner.steer(fish, [bubble])

        assert fish.ax == pytest.approx(98.4 * 1e-4)
        assert fish.ay == pytest.approx(48.4 * 1e-4)

    def test_lead_flag_off_uses_horizontal_velocity(self):
        config = load_config(overrides={"planner": {"lead_x_with_vertical_velocity": False}})
        planner = SeekPlanner(config, random.Random(0))
        bubble = Bubble(x=200.0, y=150.0, vy=-0.2, vx=0.5)

        assert planner.predict(bubble) == pytest.approx((204.0, 148.4))

    def test_direct_steering_without_horizon(self):
        config = load_config(profile="seek")
        planner = SeekPlanner(config, random.Random(0))
        fish = Fish(x=100.0, y=100.0)
        bubble = Bubble(x=200.0, y=150.0, vy=-0.15)

        planner.steer(fish, [bubble])

        assert fish.ay == pytest.approx(50.0 * 1e-4)

    def test_no_bubbles_falls_back_to_wander(self, planner, config):
        fish = Fish(x=100.0, y=100.0, vx=0.5)

        assert planner.steer(fish, []) is None
        assert abs(fish.ax) <= 0.5 * config.planner.fallback_x_scale
        assert abs(fish.ay) <= 0.5 * config.planner.fallback_y_scale
        # Fallback does not move the fish
        assert fish.position == (100.0, 100.0)
        assert fish.vx == 0.5

    def test_out_of_view_target_ignored(self, planner):
        """Nearest bubble above the tank -> wander instead of chasing it."""
        fish = Fish(x=100.0, y=10.0)
        bubbles = [Bubble(x=100.0, y=-5.0, vy=-0.2), Bubble(x=300.0, y=200.0, vy=-0.2)]

        assert planner.steer(fish, bubbles) is None
        assert fish.position == (100.0, 10.0)

    def test_in_view_includes_edges(self, planner):
        assert planner.in_view(Bubble(x=0.0, y=224.0, vy=-0.2))
        assert planner.in_view(Bubble(x=340.0, y=0.0, vy=-0.2))
        assert not planner.in_view(Bubble(x=340.5, y=10.0, vy=-0.2))

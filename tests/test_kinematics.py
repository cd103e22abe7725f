"""
Tests for fish integration, wall handling and facing.
"""

import random

import pytest

from aquarium.core.config_loader import load_config
from aquarium.core.entities import Bubble, Fish
from aquarium.core.kinematics import Kinematics


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def kinematics(config):
    return Kinematics(config)


class TestIntegration:
    """Test the Euler step and velocity cap."""

    def test_euler_step(self, kinematics):
        """Velocity takes the acceleration first, then moves the position."""
        fish = Fish(x=10.0, y=10.0, vx=1.0, vy=2.0, ax=0.5, ay=-0.5)
        kinematics.integrate(fish)

        assert fish.velocity == (1.5, 1.5)
        assert fish.position == (11.5, 11.5)

    def test_velocity_cap(self, kinematics):
        fish = Fish(x=0.0, y=0.0, vx=5.0, vy=-5.0)
        kinematics.clamp_velocity(fish)

        assert fish.velocity == (2.0, -2.0)

    def test_velocity_cap_disabled(self):
        config = load_config(overrides={"kinematics": {"velocity_cap_enabled": False}})
        fish = Fish(x=0.0, y=0.0, vx=5.0, vy=-5.0)
        Kinematics(config).clamp_velocity(fish)

        assert fish.velocity == (5.0, -5.0)

    def test_bubbles_rise(self, kinematics):
        bubbles = [Bubble(x=10.0, y=100.0, vy=-0.2), Bubble(x=20.0, y=50.0, vy=-0.3)]
        kinematics.advance_bubbles(bubbles)

        assert bubbles[0].y == pytest.approx(99.8)
        assert bubbles[1].y == pytest.approx(49.7)
        assert bubbles[0].x == 10.0


class TestBounds:
    """Test wall clamping and bouncing."""

    def test_left_wall_damped(self, kinematics):
        fish = Fish(x=-5.0, y=50.0, vx=-1.0)
        kinematics.apply_bounds(fish)

        assert fish.x == 0.0
        assert fish.vx == pytest.approx(0.7)

    def test_right_wall_uses_inset(self, kinematics):
        fish = Fish(x=400.0, y=50.0, vx=1.5)
        kinematics.apply_bounds(fish)

        assert fish.x == 310.0
        assert fish.vx == pytest.approx(-1.05)

    def test_seabed(self, kinematics):
        fish = Fish(x=50.0, y=300.0, vy=1.0)
        kinematics.apply_bounds(fish)

        assert fish.y == 208.0
        assert fish.vy == pytest.approx(-0.7)

    def test_reflect_policy_is_lossless(self):
        config = load_config(overrides={"kinematics": {"boundary_policy": "reflect"}})
        fish = Fish(x=50.0, y=-3.0, vy=-1.0)
        Kinematics(config).apply_bounds(fish)

        assert fish.y == 0.0
        assert fish.vy == 1.0

    def test_inside_untouched(self, kinematics):
        fish = Fish(x=50.0, y=50.0, vx=-1.0, vy=1.0)
        kinematics.apply_bounds(fish)

        assert fish.position == (50.0, 50.0)
        assert fish.velocity == (-1.0, 1.0)

    @pytest.mark.parametrize("profile", ["classic", "drift"])
    def test_random_accelerations_stay_in_bounds(self, profile):
        """Large random kicks never push the fish out or past the cap."""
        config = load_config(profile=profile)
        kinematics = Kinematics(config)
        min_x, max_x, min_y, max_y = config.agent_limits
        rng = random.Random(3)
        fish = Fish(*config.start_position)

        for _ in range(2000):
            fish.ax = rng.uniform(-1.0, 1.0)
            fish.ay = rng.uniform(-1.0, 1.0)
            kinematics.step_fish(fish)

            assert min_x <= fish.x <= max_x
            assert min_y <= fish.y <= max_y
            if config.kinematics.velocity_cap_enabled:
                assert abs(fish.vx) <= config.kinematics.max_velocity
                assert abs(fish.vy) <= config.kinematics.max_velocity


class TestFacing:
    """Test the facing flag."""

    def test_flip_when_moving_left(self, kinematics):
        fish = Fish(x=0.0, y=0.0, vx=-0.2)
        kinematics.update_facing(fish)
        assert fish.flipped

    def test_unflip_when_moving_right(self, kinematics):
        fish = Fish(x=0.0, y=0.0, vx=0.2, flipped=True)
        kinematics.update_facing(fish)
        assert not fish.flipped

    def test_slow_motion_keeps_facing(self, kinematics):
        fish = Fish(x=0.0, y=0.0, vx=-0.05)
        kinematics.update_facing(fish)
        assert not fish.flipped

    def test_legacy_flip_every_tick(self, kinematics):
        """Without a dwell time the flag follows the velocity sign immediately."""
        fish = Fish(x=0.0, y=0.0)
        for i in range(6):
            fish.vx = -0.11 if i % 2 == 0 else 0.11
            kinematics.update_facing(fish)
            assert fish.flipped == (i % 2 == 0)

    def test_first_flip_not_delayed(self):
        config = load_config(overrides={"kinematics": {"flip_min_dwell_ticks": 3}})
        kinematics = Kinematics(config)
        fish = Fish(x=0.0, y=0.0, vx=-0.5)
        assert fish.ticks_since_flip is None

        kinematics.update_facing(fish)

        assert fish.flipped
        assert fish.ticks_since_flip == 0

    def test_dwell_delays_flip(self):
        config = load_config(overrides={"kinematics": {"flip_min_dwell_ticks": 3}})
        kinematics = Kinematics(config)
        fish = Fish(x=0.0, y=0.0, vx=-0.5)
        kinematics.update_facing(fish)

        # Reversing within the dwell is refused
        fish.vx = 0.5
        for _ in range(3):
            kinematics.update_facing(fish)
            assert fish.flipped

        kinematics.update_facing(fish)
        assert not fish.flipped
        assert fish.ticks_since_flip == 0

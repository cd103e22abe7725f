"""
Tests for seaweed placement and bubble spawning.
"""

import random

import pytest

from aquarium.core.capabilities import NullInput, PointerState, ScriptedInput
from aquarium.core.config_loader import load_config
from aquarium.core.spawner import Spawner


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def random_config():
    return load_config(overrides={"spawner": {"mode": "random", "spawn_probability": 1.0}})


class TestSeaweed:
    """Test decoration spawn."""

    def test_count_and_placement(self, config):
        spawner = Spawner(config, random.Random(42))
        weeds = spawner.spawn_seaweed()

        assert 20 <= len(weeds) <= 30
        for weed in weeds:
            assert 0.0 <= weed.x < config.bounds.width
            assert weed.y == config.bounds.height - config.decoration.sprite_height

    def test_deterministic_with_seed(self, config):
        a = Spawner(config, random.Random(7)).spawn_seaweed()
        b = Spawner(config, random.Random(7)).spawn_seaweed()
        assert a == b


class TestRandomSpawn:
    """Test per-tick probability spawning."""

    def test_spawns_along_bottom(self, random_config):
        spawner = Spawner(random_config, random.Random(1))

        for _ in range(50):
            bubble = spawner.tick()
            assert bubble is not None
            assert 0.0 <= bubble.x <= random_config.bounds.width
            assert bubble.y == random_config.bounds.height - random_config.spawner.bottom_inset
            assert bubble.vy == random_config.spawner.bubble_velocity
            assert 0.5 <= bubble.scale <= 1.0

    def test_zero_probability_never_spawns(self):
        config = load_config(overrides={"spawner": {"mode": "random", "spawn_probability": 0.0}})
        spawner = Spawner(config, random.Random(1))

        assert all(spawner.tick() is None for _ in range(500))

    def test_default_rate_about_once_per_second(self):
        config = load_config(profile="chase")
        spawner = Spawner(config, random.Random(99))

        spawned = sum(1 for _ in range(6000) if spawner.tick() is not None)
        # Expected 100 at 1/60
        assert 60 <= spawned <= 140


class TestPointerSpawn:
    """Test pointer spawning with cooldown."""

    def test_spawns_at_pointer(self, config):
        spawner = Spawner(config, random.Random(0))
        bubble = spawner.tick(ScriptedInput([PointerState(True, 50.0, 60.0)]))

        assert bubble is not None
        assert (bubble.x, bubble.y) == (50.0, 60.0)
        assert bubble.vy == -0.2
        assert spawner.cooldown == config.spawner.cooldown_ticks

    def test_cooldown_between_spawns(self, config):
        """Holding the trigger spawns once every cooldown_ticks ticks."""
        spawner = Spawner(config, random.Random(0))
        pointer = ScriptedInput.hold(50.0, 60.0, ticks=200)

        spawn_ticks = [t for t in range(200) if spawner.tick(pointer) is not None]

        assert spawn_ticks[0] == 0
        gaps = [b - a for a, b in zip(spawn_ticks, spawn_ticks[1:])]
        assert gaps
        assert all(gap == config.spawner.cooldown_ticks for gap in gaps)

    def test_release_and_press_respects_cooldown(self, config):
        """Pressing again before the cooldown ends does nothing."""
        spawner = Spawner(config, random.Random(0))
        states = [PointerState(True, 10.0, 10.0)]
        states += [PointerState(False)] * 5
        states += [PointerState(True, 20.0, 20.0)] * 10
        pointer = ScriptedInput(states)

        results = [spawner.tick(pointer) for _ in range(len(states))]

        assert results[0] is not None
        assert all(r is None for r in results[1:])

    def test_no_press_no_spawn(self, config):
        spawner = Spawner(config, random.Random(0))
        assert spawner.tick(NullInput()) is None
        assert spawner.tick(None) is None

    def test_reset_clears_cooldown(self, config):
        spawner = Spawner(config, random.Random(0))
        spawner.tick(ScriptedInput([PointerState(True, 1.0, 1.0)]))
        assert spawner.cooldown > 0

        spawner.reset()
        assert spawner.cooldown == 0

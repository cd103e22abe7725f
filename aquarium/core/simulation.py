"""
Aquarium Simulation
===================

Main orchestrator combining spawning, behavior, kinematics, pursuit,
collisions and effect aging. One call to step() is one rendered frame.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from aquarium.core.behavior import BehaviorMode, BehaviorSelector
from aquarium.core.capabilities import AudioSink, InputSource
from aquarium.core.collision import CollisionSystem, EffectPool
from aquarium.core.config_loader import AquariumConfig, get_config
from aquarium.core.entities import Bubble, Fish, PopEffect, Seaweed
from aquarium.core.kinematics import Kinematics
from aquarium.core.planner import SeekPlanner, Target
from aquarium.core.spawner import Spawner
from aquarium.core.state_snapshot import AquariumSnapshot, build_snapshot

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """Result of a single tick."""
    tick: int
    behavior: BehaviorMode   # CHASE if the planner steered, else the selector's pick
    chased: bool             # True if the planner steered at a bubble
    spawned: Optional[Bubble]
    popped: List[PopEffect]
    expired_effects: int
    culled: int
    snapshot: AquariumSnapshot


class Aquarium:
    """
    Aquarium simulation.

    Per tick:
    1. Spawner may add a bubble (random chance or pointer + cooldown)
    2. Behavior selector sets the fish acceleration (wander or lunge)
    3. Kinematics integrates the fish and the bubbles
    4. Planner steers the fish at the nearest bubble (own integration pass)
    5. Collisions pop touched bubbles; effects age and expire
    6. Bubbles that left through the top are culled

    All randomness comes from a single random.Random, so a seed reproduces
    a run exactly.
    """

    def __init__(
        self,
        config: Optional[AquariumConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        audio: Optional[AudioSink] = None,
        input_source: Optional[InputSource] = None
    ):
        """
        Initialize aquarium.

        Args:
            config: Aquarium configuration. Uses default if None.
            seed: Random seed for reproducibility. Ignored if rng is given.
            rng: Random source to use instead of a seeded one.
            audio: Sound player for pops. Silent if None.
            input_source: Pointer input for pointer-mode spawning.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._rng = rng if rng is not None else random.Random(seed)
        self._input = input_source

        # Initialize subsystems
        self._kinematics = Kinematics(config)
        self._behavior = BehaviorSelector(config, self._rng)
        self._planner = SeekPlanner(config, self._rng)
        self._spawner = Spawner(config, self._rng)
        self._effects = EffectPool(config)
        self._collisions = CollisionSystem(self._effects, config, audio)

        # Tank state
        self._tick: int = 0
        self._fish = self._new_fish()
        self._bubbles: List[Bubble] = []
        self._seaweed: List[Seaweed] = self._spawner.spawn_seaweed()
        self._last_behavior = BehaviorMode.WANDER

        logger.info(
            "Aquarium created (profile=%s, seed=%s, seaweed=%d)",
            config.profile, seed, len(self._seaweed)
        )

    def _new_fish(self) -> Fish:
        x, y = self._config.start_position
        return Fish(x=x, y=y)

    @property
    def config(self) -> AquariumConfig:
        return self._config

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def tick(self) -> int:
        """Number of ticks simulated since the last reset."""
        return self._tick

    @property
    def fish(self) -> Fish:
        return self._fish

    @property
    def bubbles(self) -> List[Bubble]:
        return self._bubbles

    @property
    def seaweed(self) -> List[Seaweed]:
        return self._seaweed

    @property
    def effects(self) -> List[PopEffect]:
        return self._effects.effects

    @property
    def spawner(self) -> Spawner:
        return self._spawner

    @property
    def behavior(self) -> BehaviorSelector:
        return self._behavior

    @property
    def last_behavior(self) -> BehaviorMode:
        """Mode the behavior selector picked on the last tick, before any chase."""
        return self._last_behavior

    @property
    def input_source(self) -> Optional[InputSource]:
        return self._input

    @input_source.setter
    def input_source(self, value: Optional[InputSource]) -> None:
        self._input = value

    def _reseed(self, seed: int) -> None:
        self._rng = random.Random(seed)
        self._behavior.rng = self._rng
        self._planner.rng = self._rng
        self._spawner.rng = self._rng

    def reset(self, seed: Optional[int] = None) -> AquariumSnapshot:
        """
        Reset the tank to its initial state.

        Args:
            seed: New random seed. Keeps the current random stream if None.

        Returns:
            Initial snapshot.
        """
        if seed is not None:
            self._seed = seed
            self._reseed(seed)

        self._tick = 0
        self._fish = self._new_fish()
        self._bubbles = []
        self._effects.clear()
        self._spawner.reset()
        self._seaweed = self._spawner.spawn_seaweed()
        self._last_behavior = BehaviorMode.WANDER

        logger.info("Aquarium reset (seed=%s)", self._seed)
        return self.snapshot()

    def add_bubble(self, bubble: Bubble) -> None:
        """Place a bubble directly, bypassing the spawner."""
        self._bubbles.append(bubble)

    def step(self) -> StepResult:
        """
        Advance the simulation by one tick.

        Returns:
            StepResult describing what happened during the tick.
        """
        spawned = self._spawner.tick(self._input)
        if spawned is not None:
            self._bubbles.append(spawned)

        fish = self._fish
        self._last_behavior = self._behavior.select(fish)
        self._kinematics.step_fish(fish)
        self._kinematics.advance_bubbles(self._bubbles)

        target: Optional[Target] = None
        if self._planner.enabled:
            target = self._planner.steer(fish, self._bubbles)
            if target is not None:
                self._kinematics.settle(fish)

        self._bubbles, popped = self._collisions.resolve(fish, self._bubbles)
        expired = self._effects.age()
        culled = self._cull()

        self._tick += 1
        return StepResult(
            tick=self._tick,
            behavior=BehaviorMode.CHASE if target is not None else self._last_behavior,
            chased=target is not None,
            spawned=spawned,
            popped=popped,
            expired_effects=expired,
            culled=culled,
            snapshot=self.snapshot()
        )

    def run(self, ticks: int) -> List[StepResult]:
        """Run several ticks and return their results."""
        return [self.step() for _ in range(ticks)]

    def _cull(self) -> int:
        """Drop bubbles that floated out through the top of the tank."""
        culling = self._config.culling
        if not culling.enabled:
            return 0

        limit = -culling.margin
        before = len(self._bubbles)
        self._bubbles = [b for b in self._bubbles if b.y >= limit]
        culled = before - len(self._bubbles)
        if culled:
            logger.debug("Culled %d bubble(s) above the tank", culled)
        return culled

    def snapshot(self) -> AquariumSnapshot:
        """Read-only copy of the current state."""
        return build_snapshot(
            tick=self._tick,
            width=self._config.bounds.width,
            height=self._config.bounds.height,
            fish=self._fish,
            bubbles=self._bubbles,
            seaweed=self._seaweed,
            effects=self._effects.effects
        )

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with tank size, fish state and per-entity draw parameters.
        """
        fish = self._fish
        return {
            "width": self._config.bounds.width,
            "height": self._config.bounds.height,
            "render_scale": self._config.agent.render_scale,
            "fish": {
                "x": fish.x,
                "y": fish.y,
                "flipped": fish.flipped,
            },
            "seaweed": [{"x": s.x, "y": s.y} for s in self._seaweed],
            "bubbles": [{"x": b.x, "y": b.y, "scale": b.scale} for b in self._bubbles],
            "effects": [
                {"x": e.x, "y": e.y, "scale": e.scale, "alpha": e.alpha}
                for e in self._effects.effects
            ],
        }

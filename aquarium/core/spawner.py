"""
Spawner
=======

Creates seaweed once at startup and bubbles during the run.

Bubbles come from one of two sources, chosen by spawner.mode:
- "random": each tick has a spawn_probability chance of releasing a bubble at
  a random x along the bottom of the tank.
- "pointer": while the input trigger is held a bubble appears at the pointer,
  then the spawner waits cooldown_ticks before the next one.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from aquarium.core.capabilities import InputSource
from aquarium.core.config_loader import AquariumConfig, get_config
from aquarium.core.entities import Bubble, Seaweed

logger = logging.getLogger(__name__)


class Spawner:
    """Seaweed and bubble generator for one tank."""

    def __init__(
        self,
        config: Optional[AquariumConfig] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Aquarium configuration. Uses default if None.
            rng: Random source. A fresh unseeded one if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._params = config.spawner
        self._rng = rng if rng is not None else random.Random()
        self._cooldown: int = 0

    @property
    def rng(self) -> random.Random:
        return self._rng

    @rng.setter
    def rng(self, value: random.Random) -> None:
        self._rng = value

    @property
    def cooldown(self) -> int:
        """Ticks left before a pointer spawn is allowed again."""
        return self._cooldown

    def reset(self) -> None:
        self._cooldown = 0

    def spawn_seaweed(self) -> List[Seaweed]:
        """Place a random number of seaweed strands along the tank floor."""
        deco = self._config.decoration
        width = self._config.bounds.width
        y = float(self._config.bounds.height - deco.sprite_height)

        count = self._rng.randint(deco.count_min, deco.count_max)
        return [Seaweed(x=self._rng.random() * width, y=y) for _ in range(count)]

    def make_bubble(self, x: float, y: float) -> Bubble:
        """Create a bubble at (x, y) with a random scale."""
        p = self._params
        scale = p.scale_min + self._rng.random() * (p.scale_max - p.scale_min)
        return Bubble(x=x, y=y, vy=p.bubble_velocity, scale=scale)

    def tick(self, input_source: Optional[InputSource] = None) -> Optional[Bubble]:
        """
        Advance the spawner by one tick.

        Args:
            input_source: Pointer input, required for pointer mode.

        Returns:
            The newly spawned bubble, or None.
        """
        if self._params.mode == "random":
            return self._tick_random()
        return self._tick_pointer(input_source)

    def _tick_random(self) -> Optional[Bubble]:
        if self._rng.random() >= self._params.spawn_probability:
            return None
        x = self._rng.random() * self._config.bounds.width
        y = self._config.bounds.height - self._params.bottom_inset
        bubble = self.make_bubble(x, y)
        logger.debug("Random bubble spawned at (%.1f, %.1f)", bubble.x, bubble.y)
        return bubble

    def _tick_pointer(self, input_source: Optional[InputSource]) -> Optional[Bubble]:
        if self._cooldown > 0:
            self._cooldown -= 1

        if input_source is None:
            return None
        # Poll every tick, even while cooling down
        if not input_source.is_trigger_pressed() or self._cooldown > 0:
            return None

        x, y = input_source.pointer_position()
        bubble = self.make_bubble(float(x), float(y))
        self._cooldown = self._params.cooldown_ticks
        logger.debug("Pointer bubble spawned at (%.1f, %.1f)", bubble.x, bubble.y)
        return bubble

"""
Behavior Selector
=================

Chooses the fish's acceleration each tick: a small random wander, or - with a
small probability while not already lunging - a stronger lunge biased towards
the left and upwards.

The lunge state is latent: it exists only as Fish.lunge_count > 0 and ends
when the counter reaches zero. While a lunge is running no new lunge can be
triggered and the fish receives wander acceleration.
"""

from __future__ import annotations

import math
import random
from enum import Enum
from typing import Optional, Tuple

from aquarium.core.config_loader import AquariumConfig, get_config
from aquarium.core.entities import Fish


class BehaviorMode(str, Enum):
    """Acceleration source used for a tick."""
    WANDER = "wander"
    LUNGE = "lunge"
    CHASE = "chase"


class BehaviorSelector:
    """Stochastic wander/lunge state machine for the fish."""

    def __init__(
        self,
        config: Optional[AquariumConfig] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize behavior selector.

        Args:
            config: Aquarium configuration. Uses default if None.
            rng: Random source. A fresh unseeded one if None.
        """
        if config is None:
            config = get_config()

        self._params = config.behavior
        self._rng = rng if rng is not None else random.Random()

    @property
    def rng(self) -> random.Random:
        return self._rng

    @rng.setter
    def rng(self, value: random.Random) -> None:
        self._rng = value

    @property
    def max_wander_magnitude(self) -> float:
        """Largest acceleration magnitude the wander branch can produce."""
        return math.hypot(0.5 * self._params.wander_x_scale, 0.5 * self._params.wander_y_scale)

    @property
    def max_lunge_magnitude(self) -> float:
        """Largest acceleration magnitude the lunge branch can produce."""
        p = self._params
        return math.hypot(
            max(p.lunge_x_bias, 1.0 - p.lunge_x_bias) * p.lunge_x_scale,
            max(p.lunge_y_bias, 1.0 - p.lunge_y_bias) * p.lunge_y_scale
        )

    def wander_acceleration(self) -> Tuple[float, float]:
        p = self._params
        ax = (self._rng.random() - 0.5) * p.wander_x_scale
        ay = (self._rng.random() - 0.5) * p.wander_y_scale
        return ax, ay

    def lunge_acceleration(self) -> Tuple[float, float]:
        p = self._params
        ax = (self._rng.random() - p.lunge_x_bias) * p.lunge_x_scale
        ay = (self._rng.random() - p.lunge_y_bias) * p.lunge_y_scale
        return ax, ay

    def select(self, fish: Fish) -> BehaviorMode:
        """
        Set the fish's acceleration for this tick and advance the lunge counter.

        Returns:
            BehaviorMode.LUNGE if a lunge was triggered this tick, else WANDER.
        """
        p = self._params

        # The trigger draw only happens when idle
        if fish.lunge_count <= 0 and self._rng.random() < p.lunge_probability:
            fish.ax, fish.ay = self.lunge_acceleration()
            fish.lunge_count = self._rng.randint(p.lunge_duration_min, p.lunge_duration_max)
            mode = BehaviorMode.LUNGE
        else:
            fish.ax, fish.ay = self.wander_acceleration()
            mode = BehaviorMode.WANDER

        if fish.lunge_count > 0:
            fish.lunge_count -= 1

        return mode

"""
Seek/Intercept Planner
======================

Steers the fish towards the nearest bubble.

The planner picks the closest bubble (earliest one wins ties), extrapolates it
`prediction_horizon` ticks along its velocity and accelerates the fish towards
that point with a small proportional gain. It integrates the fish itself, so
callers must not integrate the chase acceleration again.

With `lead_x_with_vertical_velocity` set, the horizontal lead comes from the
bubble's vertical velocity, which is how the classic tank steered.

With no bubbles, or when the closest one has left the tank, the fish gets a
wander acceleration instead and is not moved.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from aquarium.core.config_loader import AquariumConfig, get_config
from aquarium.core.entities import Bubble, Fish


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


@dataclass
class Target:
    """Nearest bubble found by the planner."""
    index: int
    bubble: Bubble
    distance: float


def nearest_target(fish: Fish, bubbles: Sequence[Bubble]) -> Optional[Target]:
    """
    Find the bubble closest to the fish.

    Ties keep the earliest bubble in iteration order.

    Returns:
        The nearest Target, or None if there are no bubbles.
    """
    best: Optional[Target] = None
    for index, bubble in enumerate(bubbles):
        dist = distance(fish.x, fish.y, bubble.x, bubble.y)
        if best is None or dist < best.distance:
            best = Target(index, bubble, dist)
    return best


class SeekPlanner:
    """Nearest-bubble pursuit with linear lead prediction."""

    def __init__(
        self,
        config: Optional[AquariumConfig] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize planner.

        Args:
            config: Aquarium configuration. Uses default if None.
            rng: Random source for the wander fallback.
        """
        if config is None:
            config = get_config()

        self._params = config.planner
        self._width = config.bounds.width
        self._height = config.bounds.height
        self._rng = rng if rng is not None else random.Random()

    @property
    def rng(self) -> random.Random:
        return self._rng

    @rng.setter
    def rng(self, value: random.Random) -> None:
        self._rng = value

    @property
    def enabled(self) -> bool:
        return self._params.enabled

    def in_view(self, bubble: Bubble) -> bool:
        """True if the bubble is inside the visible tank (edges included)."""
        return 0 <= bubble.x <= self._width and 0 <= bubble.y <= self._height

    def predict(self, bubble: Bubble) -> Tuple[float, float]:
        """Where the bubble will be after prediction_horizon ticks."""
        horizon = self._params.prediction_horizon
        lead_vx = bubble.vy if self._params.lead_x_with_vertical_velocity else bubble.vx
        return bubble.x + lead_vx * horizon, bubble.y + bubble.vy * horizon

    def _wander(self, fish: Fish) -> None:
        fish.ax = (self._rng.random() - 0.5) * self._params.fallback_x_scale
        fish.ay = (self._rng.random() - 0.5) * self._params.fallback_y_scale

    def steer(self, fish: Fish, bubbles: Sequence[Bubble]) -> Optional[Target]:
        """
        Apply one chase step to the fish.

        Returns:
            The bubble being chased, or None if the fish fell back to wandering.
        """
        target = nearest_target(fish, bubbles)
        if target is None or not self.in_view(target.bubble):
            self._wander(fish)
            return None

        predicted_x, predicted_y = self.predict(target.bubble)
        fish.ax = (predicted_x - fish.x) * self._params.gain
        fish.ay = (predicted_y - fish.y) * self._params.gain

        fish.vx += fish.ax
        fish.vy += fish.ay
        fish.x += fish.vx
        fish.y += fish.vy
        return target

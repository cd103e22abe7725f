"""
Kinematics
==========

Explicit Euler integration for the fish and the bubbles.

Per tick the fish goes through: velocity cap, v += a, p += v, facing update,
wall handling, velocity cap again. Walls either damp the bounce by the
configured restitution ("clamp") or reflect it losslessly ("reflect").
"""

from __future__ import annotations

from typing import Iterable, Optional

from aquarium.core.config_loader import AquariumConfig, get_config
from aquarium.core.entities import Bubble, Fish


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class Kinematics:
    """Integrator and boundary policy for one tank."""

    def __init__(self, config: Optional[AquariumConfig] = None):
        """
        Initialize kinematics.

        Args:
            config: Aquarium configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._params = config.kinematics
        self._min_x, self._max_x, self._min_y, self._max_y = config.agent_limits

    def clamp_velocity(self, fish: Fish) -> None:
        """Clamp each velocity component to [-max_velocity, max_velocity] when enabled."""
        if not self._params.velocity_cap_enabled:
            return
        limit = self._params.max_velocity
        fish.vx = clamp(fish.vx, -limit, limit)
        fish.vy = clamp(fish.vy, -limit, limit)

    @staticmethod
    def integrate(fish: Fish) -> None:
        """One forward Euler step using the fish's current acceleration."""
        fish.vx += fish.ax
        fish.vy += fish.ay
        fish.x += fish.vx
        fish.y += fish.vy

    def update_facing(self, fish: Fish) -> None:
        """
        Flip the fish to face its horizontal direction of travel.

        Unflips above +flip_threshold, flips below -flip_threshold. With
        flip_min_dwell_ticks > 0 a new flip is refused until that many ticks
        have passed since the previous one. The first flip is never delayed.
        """
        if fish.ticks_since_flip is not None:
            fish.ticks_since_flip += 1
            if fish.ticks_since_flip <= self._params.flip_min_dwell_ticks:
                return

        threshold = self._params.flip_threshold
        if fish.vx > threshold and fish.flipped:
            fish.flipped = False
            fish.ticks_since_flip = 0
        elif fish.vx < -threshold and not fish.flipped:
            fish.flipped = True
            fish.ticks_since_flip = 0

    def apply_bounds(self, fish: Fish) -> None:
        """Clamp the fish into the tank and bounce the offending velocity component."""
        bounce = self._params.bounce_factor

        if fish.x < self._min_x:
            fish.x = self._min_x
            fish.vx = -fish.vx * bounce
        elif fish.x > self._max_x:
            fish.x = self._max_x
            fish.vx = -fish.vx * bounce

        if fish.y < self._min_y:
            fish.y = self._min_y
            fish.vy = -fish.vy * bounce
        elif fish.y > self._max_y:
            fish.y = self._max_y
            fish.vy = -fish.vy * bounce

    def settle(self, fish: Fish) -> None:
        """Re-apply walls and the velocity cap after an extra integration pass."""
        self.apply_bounds(fish)
        self.clamp_velocity(fish)

    def step_fish(self, fish: Fish) -> None:
        """Full per-tick motion update for the fish."""
        self.clamp_velocity(fish)
        self.integrate(fish)
        self.update_facing(fish)
        self.settle(fish)

    @staticmethod
    def advance_bubbles(bubbles: Iterable[Bubble]) -> None:
        """Move every bubble by its constant velocity."""
        for bubble in bubbles:
            bubble.x += bubble.vx
            bubble.y += bubble.vy

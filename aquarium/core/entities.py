"""
Entities
========

Plain state records for everything that lives in the tank.

The simulation owns one Fish and exclusive lists of Bubbles, Seaweed and
PopEffects. Components mutate these records in place; renderers only ever see
copies taken by the snapshot builder.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class Fish:
    """
    The single agent of the simulation.

    lunge_count is the number of ticks left in the current lunge (0 = idle).
    ticks_since_flip counts ticks since the facing flag last changed, or is
    None while the fish has never flipped.
    """
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    ax: float = 0.0
    ay: float = 0.0
    flipped: bool = False
    lunge_count: int = 0
    ticks_since_flip: Optional[int] = None

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.vx, self.vy

    @property
    def acceleration(self) -> Tuple[float, float]:
        return self.ax, self.ay

    @property
    def is_lunging(self) -> bool:
        return self.lunge_count > 0

    @property
    def speed(self) -> float:
        """Linear speed magnitude."""
        return math.sqrt(self.vx * self.vx + self.vy * self.vy)


@dataclass
class Bubble:
    """A rising bubble. vy is negative (upward) and never changes after spawn."""
    x: float
    y: float
    vy: float
    scale: float = 1.0
    vx: float = 0.0

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True)
class Seaweed:
    """Static decoration placed once at startup."""
    x: float
    y: float


@dataclass
class PopEffect:
    """
    Fading marker left where a bubble was popped.

    Goes Active -> Inactive exactly once, when frames or alpha runs out.
    """
    x: float
    y: float
    scale: float
    frames: int
    alpha: float
    active: bool = True

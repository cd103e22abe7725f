"""
State Snapshot
==============

Packs the tank state into read-only numpy arrays for renderers and tests.

A snapshot is a copy: mutating the simulation afterwards does not change it,
and its arrays are flagged non-writeable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np

from aquarium.core.entities import Bubble, Fish, PopEffect, Seaweed


def _frozen(values, dtype) -> np.ndarray:
    array = np.asarray(values, dtype=dtype)
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class AquariumSnapshot:
    """Tank state at the end of a tick."""
    tick: int
    width: int
    height: int

    # Fish
    fish_x: float
    fish_y: float
    fish_vx: float
    fish_vy: float
    fish_ax: float
    fish_ay: float
    fish_flipped: bool
    fish_lunge_count: int

    # Bubbles, shape (N,)
    bubble_x: np.ndarray
    bubble_y: np.ndarray
    bubble_vy: np.ndarray
    bubble_scale: np.ndarray

    # Seaweed, shape (M,)
    seaweed_x: np.ndarray
    seaweed_y: np.ndarray

    # Pop effects, shape (K,)
    effect_x: np.ndarray
    effect_y: np.ndarray
    effect_scale: np.ndarray
    effect_alpha: np.ndarray
    effect_frames: np.ndarray

    @property
    def bubble_count(self) -> int:
        return int(self.bubble_x.shape[0])

    @property
    def effect_count(self) -> int:
        return int(self.effect_x.shape[0])

    def to_dict(self) -> Dict[str, object]:
        """Flat dictionary of every field."""
        return {
            "tick": self.tick,
            "width": self.width,
            "height": self.height,
            "fish_x": self.fish_x,
            "fish_y": self.fish_y,
            "fish_vx": self.fish_vx,
            "fish_vy": self.fish_vy,
            "fish_ax": self.fish_ax,
            "fish_ay": self.fish_ay,
            "fish_flipped": self.fish_flipped,
            "fish_lunge_count": self.fish_lunge_count,
            "bubble_x": self.bubble_x,
            "bubble_y": self.bubble_y,
            "bubble_vy": self.bubble_vy,
            "bubble_scale": self.bubble_scale,
            "seaweed_x": self.seaweed_x,
            "seaweed_y": self.seaweed_y,
            "effect_x": self.effect_x,
            "effect_y": self.effect_y,
            "effect_scale": self.effect_scale,
            "effect_alpha": self.effect_alpha,
            "effect_frames": self.effect_frames,
        }


def build_snapshot(
    tick: int,
    width: int,
    height: int,
    fish: Fish,
    bubbles: Sequence[Bubble],
    seaweed: Sequence[Seaweed],
    effects: Sequence[PopEffect]
) -> AquariumSnapshot:
    """Copy the current tank state into an AquariumSnapshot."""
    return AquariumSnapshot(
        tick=tick,
        width=width,
        height=height,
        fish_x=fish.x,
        fish_y=fish.y,
        fish_vx=fish.vx,
        fish_vy=fish.vy,
        fish_ax=fish.ax,
        fish_ay=fish.ay,
        fish_flipped=fish.flipped,
        fish_lunge_count=fish.lunge_count,
        bubble_x=_frozen([b.x for b in bubbles], np.float64),
        bubble_y=_frozen([b.y for b in bubbles], np.float64),
        bubble_vy=_frozen([b.vy for b in bubbles], np.float64),
        bubble_scale=_frozen([b.scale for b in bubbles], np.float64),
        seaweed_x=_frozen([s.x for s in seaweed], np.float64),
        seaweed_y=_frozen([s.y for s in seaweed], np.float64),
        effect_x=_frozen([e.x for e in effects], np.float64),
        effect_y=_frozen([e.y for e in effects], np.float64),
        effect_scale=_frozen([e.scale for e in effects], np.float64),
        effect_alpha=_frozen([e.alpha for e in effects], np.float64),
        effect_frames=_frozen([e.frames for e in effects], np.int32),
    )

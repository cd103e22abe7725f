"""
Collision & Effects
===================

Pops bubbles that touch the fish and ages the resulting pop effects.

The fish hitbox is its sprite rectangle scaled by the render scale and grown
by `padding`, anchored at the fish position minus half the padding. A bubble
pops when its centre lies strictly inside that rectangle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from aquarium.core.capabilities import AudioSink
from aquarium.core.config_loader import AquariumConfig, get_config
from aquarium.core.entities import Bubble, Fish, PopEffect

logger = logging.getLogger(__name__)

# Alpha at or below this counts as fully faded (absorbs float drift)
ALPHA_EPSILON = 1e-9


@dataclass(frozen=True)
class Hitbox:
    """Axis-aligned rectangle."""
    left: float
    right: float
    top: float
    bottom: float

    def contains(self, x: float, y: float) -> bool:
        """Strict point-in-rectangle test; points on the border are outside."""
        return self.left < x < self.right and self.top < y < self.bottom


def fish_hitbox(fish: Fish, config: AquariumConfig) -> Hitbox:
    """Hitbox of the fish at its current position."""
    agent = config.agent
    padding = config.collision.padding
    width = agent.sprite_width * agent.render_scale + padding
    height = agent.sprite_height * agent.render_scale + padding
    return Hitbox(
        left=fish.x - padding / 2,
        right=fish.x + width - padding / 2,
        top=fish.y - padding / 2,
        bottom=fish.y + height - padding / 2,
    )


class EffectPool:
    """
    Owns the active pop effects.

    Each age() call takes one frame and one fade_step of alpha off every
    effect; an effect whose frames or alpha run out is deactivated and
    dropped on the same call.
    """

    def __init__(self, config: Optional[AquariumConfig] = None):
        if config is None:
            config = get_config()

        self._params = config.effects
        self._effects: List[PopEffect] = []

    @property
    def effects(self) -> List[PopEffect]:
        """Active effects, oldest first."""
        return self._effects

    def __len__(self) -> int:
        return len(self._effects)

    def spawn(self, x: float, y: float) -> PopEffect:
        effect = PopEffect(
            x=x,
            y=y,
            scale=self._params.initial_scale,
            frames=self._params.frame_budget,
            alpha=self._params.initial_alpha,
            active=True
        )
        self._effects.append(effect)
        return effect

    def age(self) -> int:
        """
        Age every active effect by one tick and compact out the inactive ones.

        Returns:
            Number of effects that expired on this tick.
        """
        fade = self._params.fade_step
        for effect in self._effects:
            if not effect.active:
                continue
            effect.frames -= 1
            effect.alpha -= fade
            if effect.frames <= 0 or effect.alpha <= ALPHA_EPSILON:
                effect.active = False
                effect.alpha = max(effect.alpha, 0.0)

        before = len(self._effects)
        self._effects = [effect for effect in self._effects if effect.active]
        return before - len(self._effects)

    def clear(self) -> None:
        self._effects = []


class CollisionSystem:
    """Fish/bubble contact resolution."""

    def __init__(
        self,
        effects: EffectPool,
        config: Optional[AquariumConfig] = None,
        audio: Optional[AudioSink] = None
    ):
        """
        Initialize collision system.

        Args:
            effects: Pool that receives a pop effect per popped bubble.
            config: Aquarium configuration. Uses default if None.
            audio: Sound player for pops. Silent if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._effects = effects
        self._audio = audio

    @property
    def enabled(self) -> bool:
        return self._config.collision.enabled

    def _play_pop(self) -> None:
        if self._audio is None:
            return
        try:
            self._audio.play_pop()
        except Exception:
            logger.warning("Pop sound failed", exc_info=True)

    def resolve(self, fish: Fish, bubbles: List[Bubble]) -> Tuple[List[Bubble], List[PopEffect]]:
        """
        Pop every bubble inside the fish hitbox.

        Args:
            fish: The fish.
            bubbles: Current bubbles (not modified).

        Returns:
            Tuple of (remaining bubbles in original order, effects created).
        """
        if not self.enabled:
            return bubbles, []

        hitbox = fish_hitbox(fish, self._config)
        remaining: List[Bubble] = []
        created: List[PopEffect] = []

        for bubble in bubbles:
            if hitbox.contains(bubble.x, bubble.y):
                self._play_pop()
                created.append(self._effects.spawn(bubble.x, bubble.y))
                logger.debug("Bubble popped at (%.1f, %.1f)", bubble.x, bubble.y)
                continue
            remaining.append(bubble)

        return remaining, created

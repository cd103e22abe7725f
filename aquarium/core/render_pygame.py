"""
Pygame Renderer
===============

Draws an aquarium from Aquarium.get_render_data(). The renderer holds no
simulation state; it only reads the dict it is handed each frame.

ScanlinePostProcess wraps any renderer and darkens every other row of its
output, giving the old-CRT look.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from aquarium.core.config_loader import AquariumConfig, get_config
from aquarium.core.sprite_loader import SpriteSet, load_sprites

WATER_COLOR = (65, 105, 225)


class PygameRenderer:
    """
    Sprite renderer using pygame.

    Supports:
    - Drawing onto any surface (window or offscreen)
    - RGB array output for headless use
    """

    def __init__(
        self,
        config: Optional[AquariumConfig] = None,
        sprites: Optional[SpriteSet] = None
    ):
        """
        Initialize renderer.

        Args:
            config: Aquarium configuration.
            sprites: Sprites to draw with. Placeholders if None.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        if not pygame.get_init():
            pygame.init()

        self._config = config
        self._sprites = sprites if sprites is not None else load_sprites(config=config)
        self._bg_color = WATER_COLOR

        # Scaled sprite cache keyed by (sprite name, scale rounded to 0.01)
        self._scaled_cache: Dict[Tuple[str, int], pygame.Surface] = {}

    @property
    def size(self) -> Tuple[int, int]:
        return (self._config.bounds.width, self._config.bounds.height)

    def _scaled(self, name: str, scale: float) -> "pygame.Surface":
        key = (name, int(round(scale * 100)))
        surface = self._scaled_cache.get(key)
        if surface is None:
            source = getattr(self._sprites, name)
            w = max(1, int(round(source.get_width() * scale)))
            h = max(1, int(round(source.get_height() * scale)))
            surface = pygame.transform.scale(source, (w, h))
            self._scaled_cache[key] = surface
        return surface

    def render(self, render_data: Dict[str, Any]) -> np.ndarray:
        """
        Render to RGB array.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((render_data["width"], render_data["height"]))
        self.render_to_surface(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_surface(self, surface: "pygame.Surface", render_data: Dict[str, Any]) -> None:
        """Draw the whole tank onto surface."""
        width = render_data["width"]
        height = render_data["height"]
        surface.fill(self._bg_color)

        self._draw_fish(surface, render_data["fish"], render_data["render_scale"])

        seabed = self._sprites.seabed
        seabed_y = height - seabed.get_height()
        for x in range(0, width, max(1, seabed.get_width())):
            surface.blit(seabed, (x, seabed_y))

        for weed in render_data["seaweed"]:
            surface.blit(self._sprites.seaweed, (int(weed["x"]), int(weed["y"])))

        for bubble in render_data["bubbles"]:
            sprite = self._scaled("bubble", bubble["scale"])
            surface.blit(sprite, (int(bubble["x"]), int(bubble["y"])))

        for effect in render_data["effects"]:
            sprite = self._scaled("pop", effect["scale"]).copy()
            sprite.set_alpha(int(max(0.0, min(1.0, effect["alpha"])) * 255))
            x = effect["x"] - sprite.get_width() / 2
            y = effect["y"] - sprite.get_height() / 2
            surface.blit(sprite, (int(x), int(y)))

    def _draw_fish(self, surface: "pygame.Surface", fish: Dict[str, Any], scale: float) -> None:
        sprite = self._scaled("fish", scale)
        if fish["flipped"]:
            sprite = pygame.transform.flip(sprite, True, False)
        surface.blit(sprite, (int(fish["x"]), int(fish["y"])))


class ScanlinePostProcess:
    """
    Post-process wrapper that dims every even row to 60% brightness.

    Holds a reference to the renderer it decorates and forwards to it, so it
    can stand in wherever a PygameRenderer is used.
    """

    def __init__(self, base: PygameRenderer, dim: float = 0.6):
        self._base = base
        self._dim = dim

    @property
    def base(self) -> PygameRenderer:
        return self._base

    @property
    def size(self) -> Tuple[int, int]:
        return self._base.size

    def _apply(self, array: np.ndarray) -> np.ndarray:
        """Dim even rows of a (width, height, 3) surfarray."""
        out = array.astype(np.float32)
        out[:, 0::2, :] *= self._dim
        return out.astype(np.uint8)

    def render(self, render_data: Dict[str, Any]) -> np.ndarray:
        """Render to a (height, width, 3) uint8 array with scanlines."""
        surface = pygame.Surface((render_data["width"], render_data["height"]))
        self.render_to_surface(surface, render_data)
        return np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2))

    def render_to_surface(self, surface: "pygame.Surface", render_data: Dict[str, Any]) -> None:
        offscreen = pygame.Surface(surface.get_size())
        self._base.render_to_surface(offscreen, render_data)
        pygame.surfarray.blit_array(surface, self._apply(pygame.surfarray.array3d(offscreen)))

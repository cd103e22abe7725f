"""
Sprite Loader
=============

Loads the tank sprites from an asset directory, or generates simple
placeholder sprites when no directory is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from aquarium.core.config_loader import AquariumConfig, get_config

# File name expected in the asset directory for each sprite
SPRITE_FILES = {
    "fish": "fish.png",
    "bubble": "bubble.png",
    "seaweed": "seaweed.png",
    "seabed": "seabed.png",
    "pop": "pop.png",
}

FISH_COLOR = (255, 140, 40)
FISH_EYE_COLOR = (20, 20, 20)
BUBBLE_COLOR = (200, 235, 255)
SEAWEED_COLOR = (40, 150, 70)
SEABED_COLOR = (194, 170, 110)
POP_COLOR = (255, 255, 255)

BUBBLE_SIZE = 12
POP_SIZE = 16
SEAWEED_WIDTH = 8
SEABED_TILE_WIDTH = 32


@dataclass
class SpriteSet:
    """Unscaled source surfaces for every drawable."""
    fish: "pygame.Surface"
    bubble: "pygame.Surface"
    seaweed: "pygame.Surface"
    seabed: "pygame.Surface"
    pop: "pygame.Surface"


def _placeholder_sprites(config: AquariumConfig) -> Dict[str, "pygame.Surface"]:
    """Flat-coloured stand-ins sized from the configuration."""
    fish_w = max(1, int(config.agent.sprite_width))
    fish_h = max(1, int(config.agent.sprite_height))
    fish = pygame.Surface((fish_w, fish_h), pygame.SRCALPHA)
    pygame.draw.ellipse(fish, FISH_COLOR, fish.get_rect())
    # Eye on the right so an unflipped fish faces right
    eye = max(1, fish_h // 6)
    pygame.draw.circle(fish, FISH_EYE_COLOR, (fish_w - fish_w // 4, fish_h // 3), eye)

    bubble = pygame.Surface((BUBBLE_SIZE, BUBBLE_SIZE), pygame.SRCALPHA)
    pygame.draw.circle(bubble, BUBBLE_COLOR, (BUBBLE_SIZE // 2, BUBBLE_SIZE // 2), BUBBLE_SIZE // 2, 1)

    weed_h = max(1, int(config.decoration.sprite_height))
    seaweed = pygame.Surface((SEAWEED_WIDTH, weed_h), pygame.SRCALPHA)
    pygame.draw.rect(seaweed, SEAWEED_COLOR, (SEAWEED_WIDTH // 4, 0, SEAWEED_WIDTH // 2, weed_h))

    bed_h = max(1, int(config.bounds.seabed_height))
    seabed = pygame.Surface((SEABED_TILE_WIDTH, bed_h))
    seabed.fill(SEABED_COLOR)

    pop = pygame.Surface((POP_SIZE, POP_SIZE), pygame.SRCALPHA)
    center = POP_SIZE // 2
    for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (-1, -1), (1, -1), (-1, 1)):
        pygame.draw.line(
            pop, POP_COLOR,
            (center + dx * 3, center + dy * 3),
            (center + dx * (center - 1), center + dy * (center - 1))
        )

    return {"fish": fish, "bubble": bubble, "seaweed": seaweed, "seabed": seabed, "pop": pop}


def load_sprites(
    assets_dir: Optional[Union[str, Path]] = None,
    config: Optional[AquariumConfig] = None
) -> SpriteSet:
    """
    Load sprites.

    Args:
        assets_dir: Directory holding the files in SPRITE_FILES. When None,
            placeholder sprites are generated.
        config: Aquarium configuration, used for placeholder sizes.

    Returns:
        SpriteSet with one surface per drawable.

    Raises:
        ImportError: If pygame is not installed.
        FileNotFoundError: If assets_dir is given but a sprite file is missing.
    """
    if not PYGAME_AVAILABLE:
        raise ImportError("pygame required for sprite loading")

    if config is None:
        config = get_config()

    if not pygame.get_init():
        pygame.init()

    if assets_dir is None:
        return SpriteSet(**_placeholder_sprites(config))

    assets_dir = Path(assets_dir)
    surfaces = {}
    for name, filename in SPRITE_FILES.items():
        path = assets_dir / filename
        if not path.exists():
            raise FileNotFoundError(f"Sprite not found: {path}")
        surface = pygame.image.load(str(path))
        # convert_alpha needs a display; keep the raw surface headless
        if pygame.display.get_surface() is not None:
            surface = surface.convert_alpha()
        surfaces[name] = surface
    return SpriteSet(**surfaces)

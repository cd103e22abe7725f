"""
Aquarium Window
===============

Run the aquarium in a pygame window.

Controls:
    - Left mouse (pointer profiles): release bubbles at the cursor
    - R: Restart
    - ESC: Quit

Usage:
    python -m aquarium.play_aquarium [--profile NAME] [--seed SEED] [--no-crt]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from aquarium.core.config_loader import AquariumConfig, list_profiles, load_config
from aquarium.core.render_pygame import PygameRenderer, ScanlinePostProcess
from aquarium.core.simulation import Aquarium
from aquarium.core.sprite_loader import load_sprites

logger = logging.getLogger("aquarium.play")


class MouseInput:
    """Left mouse button and cursor, mapped back into tank coordinates."""

    def __init__(self, window_scale: int):
        self._window_scale = window_scale

    def is_trigger_pressed(self) -> bool:
        return pygame.mouse.get_pressed()[0]

    def pointer_position(self) -> Tuple[float, float]:
        x, y = pygame.mouse.get_pos()
        return (x / self._window_scale, y / self._window_scale)


class PopSound:
    """Pop sound played through pygame.mixer."""

    def __init__(self, path: Path):
        if not path.exists():
            raise FileNotFoundError(f"Sound not found: {path}")
        if not pygame.mixer.get_init():
            pygame.mixer.init(frequency=48000)
        self._sound = pygame.mixer.Sound(str(path))

    def play_pop(self) -> None:
        # Restart from the beginning if it is still playing
        self._sound.stop()
        self._sound.play()


class AquariumWindow:
    """Fixed-rate window loop: one simulation step per frame."""

    def __init__(
        self,
        config: AquariumConfig,
        seed: Optional[int],
        crt: bool,
        window_scale: int,
        fps: int,
        assets_dir: Optional[Path],
        sound_path: Optional[Path]
    ):
        pygame.init()
        width, height = config.bounds.width, config.bounds.height
        self._window_scale = window_scale
        self._screen = pygame.display.set_mode((width * window_scale, height * window_scale))
        pygame.display.set_caption("Aquarium")
        self._frame = pygame.Surface((width, height))

        sprites = load_sprites(assets_dir, config)
        renderer = PygameRenderer(config, sprites)
        self._renderer = ScanlinePostProcess(renderer) if crt else renderer

        audio = PopSound(sound_path) if sound_path is not None else None
        self._seed = seed
        self._aquarium = Aquarium(
            config,
            seed=seed,
            audio=audio,
            input_source=MouseInput(window_scale)
        )

        self._clock = pygame.time.Clock()
        self._fps = fps
        self._running = True

    def run(self) -> int:
        """Run until the window is closed. Returns the number of ticks simulated."""
        total_ticks = 0
        while self._running:
            self._handle_events()
            self._aquarium.step()
            total_ticks += 1
            self._render()
            self._clock.tick(self._fps)

        pygame.quit()
        return total_ticks

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._aquarium.reset(seed=self._seed)

    def _render(self) -> None:
        self._renderer.render_to_surface(self._frame, self._aquarium.get_render_data())
        if self._window_scale == 1:
            self._screen.blit(self._frame, (0, 0))
        else:
            pygame.transform.scale(self._frame, self._screen.get_size(), self._screen)
        pygame.display.flip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the aquarium in a window")
    parser.add_argument("--profile", type=str, default=None,
                        help=f"Config profile (one of: {', '.join(list_profiles())})")
    parser.add_argument("--config", type=str, default=None, help="Path to a config YAML")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--crt", dest="crt", action="store_true", default=True,
                        help="Enable scanline effect (default)")
    parser.add_argument("--no-crt", dest="crt", action="store_false",
                        help="Disable scanline effect")
    parser.add_argument("--scale", type=int, default=2, help="Window pixel scale (default: 2)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--assets", type=str, default=None, help="Sprite directory")
    parser.add_argument("--sound", type=str, default=None, help="Pop sound file")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if not PYGAME_AVAILABLE:
        print("Error: pygame is required to run the aquarium window")
        return 1

    try:
        config = load_config(args.config, profile=args.profile)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    window = AquariumWindow(
        config=config,
        seed=args.seed,
        crt=args.crt,
        window_scale=max(1, args.scale),
        fps=args.fps,
        assets_dir=Path(args.assets) if args.assets else None,
        sound_path=Path(args.sound) if args.sound else None
    )
    ticks = window.run()
    logger.info("Simulated %d ticks", ticks)
    return 0


if __name__ == "__main__":
    sys.exit(main())

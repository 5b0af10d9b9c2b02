"""Command-line entry point: parse a map, open a window and run the game."""

from __future__ import annotations

import argparse
import os
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass

import pygame

from .game import Game, GameExit, Key
from .image import Image
from .mapdata import MapError, parse_map
from .render import Renderer, window_size
from .textures import TextureError, load_all_textures

DEFAULT_ASSET_DIR = "./assets"
USAGE = "Usage: babalong maps/your_map.ber"
MANDATORY_TITLE = "so_long"
BONUS_TITLE = "Baba Is You"

_KEYMAP = {
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_ESCAPE: Key.ESC,
}


class UsageError(Exception):
    """Raised when the command line is not a single map path plus options."""


@dataclass(frozen=True)
class Options:
    """What the command line asks for."""

    map_path: str
    bonus: bool = False
    asset_dir: str = DEFAULT_ASSET_DIR


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="babalong", add_help=False)
    parser.add_argument("map_path")
    parser.add_argument("--bonus", action="store_true")
    parser.add_argument("--assets", dest="asset_dir", default=DEFAULT_ASSET_DIR)
    return parser


def parse_args(argv: Sequence[str]) -> Options:
    """Parse the arguments after the program name into Options."""
    namespace = _build_parser().parse_args(list(argv))
    return Options(namespace.map_path, namespace.bonus, namespace.asset_dir)


def translate_key(pygame_key: int) -> Key | None:
    """Map a pygame key constant to the game's key code, or None."""
    return _KEYMAP.get(pygame_key)


def _report(message: str) -> None:
    print(f"Error\n{message}", file=sys.stderr)


def _image_to_surface(image: Image) -> pygame.Surface:
    raw = b"".join((p & 0xFFFFFF).to_bytes(3, "big") for p in image.pixels)
    return pygame.image.frombuffer(raw, (image.width, image.height), "RGB")


def _present(screen: pygame.Surface, image: Image) -> None:
    screen.blit(_image_to_surface(image), (0, 0))
    pygame.display.flip()


def _loop(game: Game, renderer: Renderer, screen: pygame.Surface) -> None:
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                raise GameExit(0)
            # Moves are taken when a key is released, as the key hook fires then.
            if event.type == pygame.KEYUP:
                key = translate_key(event.key)
                if key is not None:
                    game.handle_keypress(key)
        if renderer.render_frame():
            _present(screen, renderer.window)
        time.sleep(0.001)


def run_game(map_path: str | os.PathLike[str], bonus: bool = False,
             asset_dir: str | os.PathLike[str] = DEFAULT_ASSET_DIR) -> int:
    """Run the game on a map file and return the process exit status."""
    print("Checkpoint 1: Initializing data...")
    print("Checkpoint 2: Parsing map...")
    try:
        game_map = parse_map(map_path, bonus)
    except MapError as exc:
        _report(str(exc))
        return 1
    print("[CHECK] Map is fully valid!")
    game = Game(game_map, bonus)
    print("Checkpoint 3: Initializing display...")
    try:
        pygame.display.init()
        screen = pygame.display.set_mode(window_size(game_map, bonus))
        pygame.display.set_caption(BONUS_TITLE if bonus else MANDATORY_TITLE)
        print("Checkpoint 4: Loading all textures...")
        textures = load_all_textures(asset_dir, bonus)
        print("Checkpoint 5: All textures loaded. Setting up hooks...")
        renderer = Renderer(game, textures, bonus)
        print("Checkpoint 6: Starting game loop...")
        _loop(game, renderer, screen)
    except GameExit as exc:
        return exc.status
    except (pygame.error, TextureError) as exc:
        _report(str(exc))
        return 1
    finally:
        pygame.display.quit()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point; returns the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except UsageError:
        _report(USAGE)
        return 1
    return run_game(options.map_path, options.bonus, options.asset_dir)


if __name__ == "__main__":
    sys.exit(main())
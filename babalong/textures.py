"""Loading sprite sheets and cutting them into scaled animation frames."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import pygame

from .image import Image, unpack_sprite, upscale_sprite

ORIGINAL_TILE_SIZE = 25
SCALE_FACTOR = 2.0
TILE_SIZE = 50
BABA_WALK_FRAMES = 12
OBJECT_FRAMES = 3

BABA_SHEET = "characters/Baba.xpm"
DOOR_SHEET = "statics/Door.xpm"
KEY_SHEET = "statics/Key.xpm"
FORT_SHEET = "tiles/Fort.xpm"
ROCK_SHEET = "statics/Rock.xpm"
FONT_SHEET = "texts/Font.xpm"
IS_SHEET = "texts/Is-Text.xpm"
MOVE_SHEET = "texts/Move-Text.xpm"
OPEN_SHEET = "texts/Open-Text.xpm"
PUSH_SHEET = "texts/Push-Text.xpm"
WIN_SHEET = "texts/Win-Text.xpm"
YOU_SHEET = "texts/You-Text.xpm"
WALL_SHEET = "tiles/Wall.xpm"

MANDATORY_SHEETS = (BABA_SHEET, FORT_SHEET, KEY_SHEET, DOOR_SHEET)
BONUS_SHEETS = (
    BABA_SHEET, DOOR_SHEET, KEY_SHEET, FORT_SHEET, ROCK_SHEET, FONT_SHEET,
    IS_SHEET, MOVE_SHEET, OPEN_SHEET, PUSH_SHEET, WIN_SHEET, YOU_SHEET,
    WALL_SHEET,
)

DIGIT_COORDS: tuple[tuple[int, int], ...] = (
    (250, 225), (300, 225), (0, 300), (50, 300), (100, 300),
    (150, 300), (200, 300), (250, 300), (300, 300), (0, 375),
)


class TextureError(Exception):
    """Raised when a sprite sheet cannot be loaded."""


@dataclass
class Animation:
    """A sequence of equally sized frames."""

    frames: list[Image] = field(default_factory=list)

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def __bool__(self) -> bool:
        return bool(self.frames)


def _empty_digits() -> list[Animation]:
    return [Animation() for _ in range(10)]


@dataclass
class Textures:
    """Every animation the game draws; unused ones stay empty."""

    player_down: Animation = field(default_factory=Animation)
    player_up: Animation = field(default_factory=Animation)
    player_left: Animation = field(default_factory=Animation)
    player_right: Animation = field(default_factory=Animation)
    key: Animation = field(default_factory=Animation)
    door: Animation = field(default_factory=Animation)
    fort_wall: Animation = field(default_factory=Animation)
    player_txt: Animation = field(default_factory=Animation)
    wall: Animation = field(default_factory=Animation)
    wall_txt: Animation = field(default_factory=Animation)
    key_txt: Animation = field(default_factory=Animation)
    door_txt: Animation = field(default_factory=Animation)
    rock: Animation = field(default_factory=Animation)
    rock_txt: Animation = field(default_factory=Animation)
    you_txt: Animation = field(default_factory=Animation)
    open_txt: Animation = field(default_factory=Animation)
    push_txt: Animation = field(default_factory=Animation)
    win_txt: Animation = field(default_factory=Animation)
    is_txt: Animation = field(default_factory=Animation)
    ui_move_icon: Animation = field(default_factory=Animation)
    ui_key_icon: Animation = field(default_factory=Animation)
    ui_x_icon: Animation = field(default_factory=Animation)
    ui_digits: list[Animation] = field(default_factory=_empty_digits)
    digit_coords: tuple[tuple[int, int], ...] = DIGIT_COORDS


def surface_to_image(surface: pygame.Surface) -> Image:
    """Convert a pygame surface to an Image; transparent pixels become 0."""
    width, height = surface.get_size()
    rgba = pygame.Surface((width, height), pygame.SRCALPHA, 32)
    rgba.fill((0, 0, 0, 0))
    rgba.blit(surface, (0, 0))
    raw = pygame.image.tostring(rgba, "RGBA")
    pixels = [
        0 if a == 0 else (r << 16) | (g << 8) | b
        for r, g, b, a in zip(raw[0::4], raw[1::4], raw[2::4], raw[3::4])
    ]
    return Image(width, height, pixels)


def load_sheet(path: str | os.PathLike[str]) -> Image:
    """Load an image file as a sprite sheet."""
    try:
        surface = pygame.image.load(os.fspath(path))
    except (pygame.error, OSError) as exc:
        raise TextureError(f"Failed to load texture: {path}") from exc
    return surface_to_image(surface)


def process_one_frame(sheet: Image, pos: tuple[int, int]) -> Image:
    """Cut one tile at pos out of sheet and scale it to the on-screen size."""
    small = Image(ORIGINAL_TILE_SIZE, ORIGINAL_TILE_SIZE)
    unpack_sprite(small, sheet, pos)
    final = Image(TILE_SIZE, TILE_SIZE)
    upscale_sprite(final, small)
    return final


def load_animation(sheet: Image, frame_count: int,
                   start_pos: tuple[int, int]) -> Animation:
    """Read frame_count frames stacked downwards from start_pos."""
    x, y = start_pos
    return Animation([
        process_one_frame(sheet, (x, y + i * ORIGINAL_TILE_SIZE))
        for i in range(frame_count)
    ])


def load_baba_animation(sheet: Image, start_col: int) -> Animation:
    """Read the twelve walking frames: three rows of four poses."""
    return Animation([
        process_one_frame(
            sheet,
            ((start_col + pose) * ORIGINAL_TILE_SIZE, row * ORIGINAL_TILE_SIZE),
        )
        for row in range(3)
        for pose in range(4)
    ])


def _mandatory_textures(sheet) -> Textures:
    baba = sheet(BABA_SHEET)
    return Textures(
        player_right=load_animation(baba, 1, (25, 0)),
        player_up=load_animation(baba, 1, (125, 0)),
        player_left=load_animation(baba, 1, (225, 0)),
        player_down=load_animation(baba, 1, (325, 0)),
        fort_wall=load_animation(sheet(FORT_SHEET), 1, (50, 0)),
        key=load_animation(sheet(KEY_SHEET), 1, (100, 0)),
        door=load_animation(sheet(DOOR_SHEET), 1, (100, 0)),
    )


def _bonus_textures(sheet) -> Textures:
    baba = sheet(BABA_SHEET)
    n = OBJECT_FRAMES
    font = sheet(FONT_SHEET)
    return Textures(
        player_right=load_baba_animation(baba, 1),
        player_up=load_baba_animation(baba, 5),
        player_left=load_baba_animation(baba, 9),
        player_down=load_baba_animation(baba, 13),
        wall=load_animation(sheet(WALL_SHEET), n, (50, 0)),
        fort_wall=load_animation(sheet(FORT_SHEET), n, (50, 0)),
        key=load_animation(sheet(KEY_SHEET), n, (100, 0)),
        door=load_animation(sheet(DOOR_SHEET), n, (100, 0)),
        rock=load_animation(sheet(ROCK_SHEET), n, (100, 0)),
        player_txt=load_animation(baba, n, (0, 0)),
        wall_txt=load_animation(sheet(WALL_SHEET), n, (25, 0)),
        key_txt=load_animation(sheet(KEY_SHEET), n, (75, 0)),
        door_txt=load_animation(sheet(DOOR_SHEET), n, (75, 0)),
        rock_txt=load_animation(sheet(ROCK_SHEET), n, (75, 0)),
        you_txt=load_animation(sheet(YOU_SHEET), n, (50, 0)),
        is_txt=load_animation(sheet(IS_SHEET), n, (0, 0)),
        open_txt=load_animation(sheet(OPEN_SHEET), n, (50, 0)),
        push_txt=load_animation(sheet(PUSH_SHEET), n, (0, 0)),
        win_txt=load_animation(sheet(WIN_SHEET), n, (25, 0)),
        ui_digits=[load_animation(font, 1, pos) for pos in DIGIT_COORDS],
        ui_key_icon=load_animation(sheet(KEY_SHEET), n, (100, 0)),
        ui_move_icon=load_animation(sheet(MOVE_SHEET), n, (50, 0)),
        ui_x_icon=load_animation(font, n, (100, 225)),
    )


def build_textures(sheets: Mapping[str, Image], bonus: bool) -> Textures:
    """Cut every animation out of already loaded sheets, keyed by sheet name."""
    def sheet(name: str) -> Image:
        try:
            return sheets[name]
        except KeyError:
            raise TextureError(f"Failed to load texture: {name}") from None

    return _bonus_textures(sheet) if bonus else _mandatory_textures(sheet)


def load_all_textures(asset_dir: str | os.PathLike[str],
                      bonus: bool) -> Textures:
    """Load every sheet the game needs from asset_dir and build the textures."""
    base = Path(asset_dir)
    names = BONUS_SHEETS if bonus else MANDATORY_SHEETS
    sheets = {name: load_sheet(base / name) for name in names}
    return build_textures(sheets, bonus)
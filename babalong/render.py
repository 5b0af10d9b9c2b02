"""Drawing the game state into an off-screen buffer and the window image."""

from __future__ import annotations

import time

from .game import Direction, Game
from .image import Image, draw_sprite_to_buffer
from .mapdata import GameMap
from .textures import TILE_SIZE, Animation, Textures

FRAME_DURATION = 16666
ANIM_FRAME_DURATION = 80000
ANIMATION_SPEED = 20
UI_HEIGHT = 60
UI_MARGIN = 20
UI_TOP = 10


def get_time_in_usec() -> int:
    """Return the current wall-clock time in microseconds."""
    return time.time_ns() // 1000


def get_object_anim(textures: Textures, tile: str,
                    bonus: bool) -> Animation | None:
    """Return the animation drawn for a map tile, or None for nothing."""
    if not bonus:
        mandatory = {
            "1": textures.fort_wall,
            "C": textures.key,
            "E": textures.door,
        }
        return mandatory.get(tile)
    table = {
        "1": textures.fort_wall,
        "C": textures.key,
        "c": textures.key_txt,
        "E": textures.door,
        "e": textures.door_txt,
        "W": textures.wall,
        "w": textures.wall_txt,
        "R": textures.rock,
        "r": textures.rock_txt,
        "p": textures.player_txt,
        "y": textures.you_txt,
        "n": textures.win_txt,
        "o": textures.open_txt,
        "u": textures.push_txt,
        "i": textures.is_txt,
    }
    return table.get(tile)


def window_size(game_map: GameMap, bonus: bool) -> tuple[int, int]:
    """Window width and height in pixels; the bonus window adds a UI strip."""
    width = game_map.width * TILE_SIZE
    height = game_map.height * TILE_SIZE
    if bonus:
        height += UI_HEIGHT
    return width, height


def _blit(dest: Image, src: Image, pos: tuple[int, int]) -> None:
    """Copy every pixel of src onto dest at pos, black included."""
    ox, oy = pos
    for y in range(src.height):
        for x in range(src.width):
            dest.put_pixel(ox + x, oy + y, src.get_pixel(x, y))


class Renderer:
    """Renders a Game with a set of Textures into a window-sized image."""

    def __init__(self, game: Game, textures: Textures,
                 bonus: bool | None = None) -> None:
        self.game = game
        self.textures = textures
        self.bonus = game.bonus if bonus is None else bonus
        game_map = game.map
        self.buffer = Image(game_map.width * TILE_SIZE,
                            game_map.height * TILE_SIZE)
        self.window = Image(*window_size(game_map, self.bonus))
        self.last_time = 0
        self.last_anim_time = 0
        self.anim_timer = 0

    @property
    def buffer_offset(self) -> tuple[int, int]:
        return (0, UI_HEIGHT) if self.bonus else (0, 0)

    def render_frame(self, now: int | None = None) -> bool:
        """Draw a frame if a full frame time has passed; True when drawn."""
        if now is None:
            now = get_time_in_usec()
        if self.last_time == 0:
            self.last_time = now
        if now - self.last_time < FRAME_DURATION:
            return False
        self.draw_frame(now)
        self.last_time = now
        return True

    def _advance_animation(self, now: int) -> None:
        if self.bonus:
            if self.last_anim_time == 0:
                self.last_anim_time = now
            if now - self.last_anim_time > ANIM_FRAME_DURATION:
                self.game.anim_frame += 1
                self.last_anim_time = now
            return
        self.anim_timer += 1
        if self.anim_timer >= ANIMATION_SPEED:
            self.anim_timer = 0
            self.game.anim_frame += 1

    def draw_frame(self, now: int | None = None) -> None:
        """Advance animations, redraw the buffer and present it."""
        if now is None:
            now = get_time_in_usec()
        self._advance_animation(now)
        self.buffer.clear(0)
        self.draw_map()
        self.draw_player()
        _blit(self.window, self.buffer, self.buffer_offset)
        self.draw_ui()

    def draw_map(self) -> None:
        """Draw every map tile that has an animation into the buffer."""
        for y, row in enumerate(self.game.map.grid):
            for x, tile in enumerate(row):
                anim = get_object_anim(self.textures, tile, self.bonus)
                if not anim:
                    continue
                index = (self.game.anim_frame % anim.frame_count
                         if self.bonus else 0)
                draw_sprite_to_buffer(self.buffer, anim.frames[index],
                                      (x * TILE_SIZE, y * TILE_SIZE))

    def _player_animation(self) -> Animation:
        textures = self.textures
        return {
            Direction.UP: textures.player_up,
            Direction.DOWN: textures.player_down,
            Direction.LEFT: textures.player_left,
        }.get(self.game.player_dir, textures.player_right)

    def draw_player(self) -> None:
        """Draw the player sprite, walking frames only while moving (bonus)."""
        anim = self._player_animation()
        if not anim:
            return
        index = 0
        if self.bonus and self.game.is_moving:
            index = self.game.anim_frame % anim.frame_count
        x, y = self.game.player_pos
        draw_sprite_to_buffer(self.buffer, anim.frames[index],
                              (x * TILE_SIZE, y * TILE_SIZE))

    def draw_ui(self) -> None:
        """Draw the move and key counters in the UI strip (bonus only)."""
        if not self.bonus:
            return
        self._draw_ui_left()
        self._draw_ui_right()

    def _draw_ui_left(self) -> None:
        textures = self.textures
        if textures.ui_move_icon:
            _blit(self.window, textures.ui_move_icon.frames[0],
                  (UI_MARGIN, UI_TOP))
        if textures.ui_x_icon:
            _blit(self.window, textures.ui_x_icon.frames[0],
                  (UI_MARGIN + TILE_SIZE, UI_TOP))
        self.draw_number(self.game.move_count,
                         (UI_MARGIN + 2 * TILE_SIZE, UI_TOP))

    def _draw_ui_right(self) -> None:
        textures = self.textures
        keys = self.game.keys_collected
        counter_width = TILE_SIZE * 2 + len(str(keys)) * TILE_SIZE
        left = self.game.map.width * TILE_SIZE - counter_width - UI_MARGIN
        if textures.ui_key_icon:
            _blit(self.window, textures.ui_key_icon.frames[0], (left, UI_TOP))
        if textures.ui_x_icon:
            _blit(self.window, textures.ui_x_icon.frames[0],
                  (left + TILE_SIZE, UI_TOP))
        self.draw_number(keys, (left + 2 * TILE_SIZE, UI_TOP))

    def draw_number(self, n: int, pos: tuple[int, int]) -> None:
        """Draw n with the digit sprites, one tile per digit, from pos."""
        x, y = pos
        for i, char in enumerate(str(n)):
            if not char.isdigit():
                continue
            anim = self.textures.ui_digits[int(char)]
            if anim:
                _blit(self.window, anim.frames[0], (x + i * TILE_SIZE, y))
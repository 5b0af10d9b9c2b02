"""Player movement, pushing and text-block rules."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, IntEnum

from .mapdata import COLLECTIBLE, EMPTY, EXIT, WALL, GameMap


class Direction(IntEnum):
    """The way the player faces."""

    DOWN = 0
    UP = 1
    LEFT = 2
    RIGHT = 3


class Key(IntEnum):
    """X11 key codes the game reacts to."""

    W = 119
    A = 97
    S = 115
    D = 100
    ESC = 65307


_MOVE_KEYS = frozenset((Key.W, Key.A, Key.S, Key.D))

_KEY_DIRECTION = {
    Key.W: Direction.UP,
    Key.A: Direction.LEFT,
    Key.S: Direction.DOWN,
    Key.D: Direction.RIGHT,
}

_STEP = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_PUSHABLE_TEXT = frozenset("pcewrynisuo")
_IS = "i"


class _Noun(str, Enum):
    WALL = "w"
    KEY = "c"
    ROCK = "r"


class _Property(str, Enum):
    PUSH = "u"
    OPEN = "o"


@dataclass
class Rules:
    """The rules currently spelled out by text blocks on the map."""

    key_is_activated: bool = False
    wall_is_pushable: bool = False
    rock_is_pushable: bool = False


class GameExit(Exception):
    """Raised when the game ends, carrying the process exit status."""

    def __init__(self, status: int = 0) -> None:
        super().__init__(status)
        self.status = status


class Game:
    """Game state and the reactions to keyboard input."""

    def __init__(self, game_map: GameMap, bonus: bool = False,
                 output: Callable[[str], object] = print) -> None:
        self.map = game_map
        self.bonus = bonus
        self.player_pos: tuple[int, int] = game_map.player_pos
        self.move_count = 0
        self.keys_collected = 0
        self.player_dir = Direction.DOWN if bonus else Direction.RIGHT
        self.is_moving = False
        self.anim_frame = 0
        self.rules = Rules()
        self._output = output

    # --- input -----------------------------------------------------------

    def handle_keypress(self, keycode: int) -> None:
        """React to a key being pressed."""
        if keycode == Key.ESC:
            raise GameExit(0)
        if keycode not in _MOVE_KEYS:
            return
        if not self.bonus:
            dx, dy = _STEP[_KEY_DIRECTION[Key(keycode)]]
            x, y = self.player_pos
            self._process_move((x + dx, y + dy))
            return
        self.update_player_direction(keycode)
        next_pos = self._step(self.player_pos)
        if self.check_collisions(next_pos):
            return
        if self.process_interactions(next_pos):
            return
        self.finalize_move(next_pos)

    def handle_keyrelease(self, keycode: int) -> None:
        """Stop the walking animation when a movement key is released."""
        if keycode in _MOVE_KEYS:
            self.is_moving = False
            self.anim_frame = 0

    def update_player_direction(self, keycode: int) -> None:
        """Face the direction of a movement key and start moving."""
        self.is_moving = True
        if keycode in _MOVE_KEYS:
            self.player_dir = _KEY_DIRECTION[Key(keycode)]

    # --- movement --------------------------------------------------------

    def _step(self, pos: tuple[int, int]) -> tuple[int, int]:
        dx, dy = _STEP[self.player_dir]
        return pos[0] + dx, pos[1] + dy

    def _process_move(self, next_pos: tuple[int, int]) -> None:
        x, y = next_pos
        tile = self.map.tile(x, y)
        if tile == WALL:
            return
        if tile == EXIT:
            if self.keys_collected >= self.map.collectibles:
                self._output(f"You Win!\nTotal moves: {self.move_count + 1}")
                raise GameExit(0)
            return
        if tile == COLLECTIBLE:
            self.keys_collected += 1
            self.map.set_tile(x, y, EMPTY)
        self.finalize_move(next_pos)

    def check_collisions(self, next_pos: tuple[int, int]) -> bool:
        """Return True when the move is blocked; pushes a block if possible."""
        tile = self.map.tile(*next_pos)
        if tile == WALL:
            return True
        if tile == "W" and not self.rules.wall_is_pushable:
            return True
        if tile == "R" and not self.rules.rock_is_pushable:
            return True
        if self.is_pushable(tile) and not self.handle_push(next_pos):
            return True
        return False

    def process_interactions(self, next_pos: tuple[int, int]) -> bool:
        """Collect keys and try the exit; True means the player stays put."""
        x, y = next_pos
        tile = self.map.tile(x, y)
        if tile == EXIT:
            if (self.keys_collected >= self.map.collectibles
                    and self.rules.key_is_activated):
                self._output(f"YOU WIN! Final moves: {self.move_count + 1}")
                raise GameExit(0)
            return True
        if tile == COLLECTIBLE:
            self.keys_collected += 1
            self.map.set_tile(x, y, EMPTY)
            self._output(
                f"Key collected! Total: {self.keys_collected} "
                f"of {self.map.collectibles}"
            )
        return False

    def finalize_move(self, next_pos: tuple[int, int]) -> None:
        """Move the player and count the move."""
        self.player_pos = next_pos
        self.move_count += 1
        self._output(f"Move count: {self.move_count}")

    # --- rules and pushing ----------------------------------------------

    def is_pushable(self, tile: str) -> bool:
        """Whether a tile can be pushed under the current rules."""
        if tile in _PUSHABLE_TEXT:
            return True
        if tile == "W" and self.rules.wall_is_pushable:
            return True
        if tile == "R" and self.rules.rock_is_pushable:
            return True
        return False

    def _set_rule(self, noun: str, prop: str) -> None:
        if noun == _Noun.WALL and prop == _Property.PUSH:
            self.rules.wall_is_pushable = True
        if noun == _Noun.KEY and prop == _Property.OPEN:
            self.rules.key_is_activated = True
        if noun == _Noun.ROCK and prop == _Property.PUSH:
            self.rules.rock_is_pushable = True

    def update_game_rules(self) -> None:
        """Reset the rules and re-read every NOUN IS PROPERTY sentence."""
        self.rules = Rules()
        width, height = self.map.width, self.map.height
        for y, row in enumerate(self.map.grid):
            for x, tile in enumerate(row):
                if tile != _IS:
                    continue
                if 0 < x < width - 1:
                    self._set_rule(row[x - 1], row[x + 1])
                if 0 < y < height - 1:
                    self._set_rule(self.map.tile(x, y - 1),
                                   self.map.tile(x, y + 1))

    def handle_push(self, obj_pos: tuple[int, int]) -> bool:
        """Push the block at obj_pos one tile onward if that tile is empty."""
        bx, by = self._step(obj_pos)
        if not (0 <= bx < self.map.width and 0 <= by < self.map.height):
            return False
        if self.map.tile(bx, by) != EMPTY:
            return False
        ox, oy = obj_pos
        self.map.set_tile(bx, by, self.map.tile(ox, oy))
        self.map.set_tile(ox, oy, EMPTY)
        self.update_game_rules()
        return True
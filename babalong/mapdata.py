"""Reading, building and validating `.ber` game maps."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

WALL = "1"
EMPTY = "0"
PLAYER = "P"
COLLECTIBLE = "C"
EXIT = "E"

_FILLED = "F"
_MANDATORY_CHARS = frozenset("01PCE")
_BONUS_CHARS = frozenset("01PCEWRpceuwryniso")


class MapError(Exception):
    """Raised when a map file cannot be read or is not a valid map."""


@dataclass
class GameMap:
    """A rectangular tile grid together with the counts found in it."""

    grid: list[list[str]]
    width: int
    height: int
    collectibles: int = 0
    players: int = 0
    exits: int = 0
    player_pos: tuple[int, int] = (0, 0)
    bonus: bool = False
    _unused: None = field(default=None, repr=False, compare=False)

    def tile(self, x: int, y: int) -> str:
        """Return the tile character at column x, row y."""
        return self.grid[y][x]

    def set_tile(self, x: int, y: int, value: str) -> None:
        """Replace the tile character at column x, row y."""
        self.grid[y][x] = value

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def rows(self) -> list[str]:
        """The grid as a list of strings, top row first."""
        return ["".join(row) for row in self.grid]


def _split_lines(text: str) -> Iterator[str]:
    """Yield lines the way a line reader would: each keeps its newline."""
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        if end == -1:
            yield text[start:]
            return
        yield text[start:end + 1]
        start = end + 1


def _strip_newline(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


def read_map_lines(path: str | os.PathLike[str]) -> list[str]:
    """Read a map file into its lines, each keeping its trailing newline."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise MapError(f"Error opening map file: {exc.strerror or exc}") from exc
    lines = list(_split_lines(text))
    if not lines:
        raise MapError("Map file is empty.")
    return lines


def build_map(lines: Iterable[str]) -> GameMap:
    """Turn raw lines into a GameMap, requiring every row to be as wide as the first."""
    rows = [_strip_newline(line) for line in lines]
    if not rows:
        raise MapError("Map file is empty.")
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise MapError("Map is not rectangular.")
    return GameMap(grid=[list(row) for row in rows], width=width, height=len(rows))


def _check_walls(game_map: GameMap) -> None:
    last = game_map.height - 1
    for y, row in enumerate(game_map.grid):
        if y in (0, last):
            enclosed = all(tile == WALL for tile in row)
        else:
            enclosed = bool(row) and row[0] == WALL and row[-1] == WALL
        if not enclosed:
            raise MapError("Map is not enclosed by walls.")


def _count_components(game_map: GameMap, valid_chars: frozenset[str]) -> None:
    for y, row in enumerate(game_map.grid):
        for x, tile in enumerate(row):
            if tile not in valid_chars:
                raise MapError("Map contains invalid characters.")
            if tile == PLAYER:
                game_map.players += 1
                game_map.player_pos = (x, y)
                row[x] = EMPTY
            elif tile == COLLECTIBLE:
                game_map.collectibles += 1
            elif tile == EXIT:
                game_map.exits += 1


def validate_map_content(game_map: GameMap, bonus: bool) -> None:
    """Check walls, characters and component counts; record the player start.

    The player's start tile is replaced by an empty tile.
    """
    game_map.bonus = bonus
    _check_walls(game_map)
    _count_components(game_map, _BONUS_CHARS if bonus else _MANDATORY_CHARS)
    if game_map.players != 1:
        raise MapError("Map must have exactly one starting position ('P').")
    if game_map.collectibles < 1:
        raise MapError("Map must have at least one collectible ('C').")
    if game_map.exits != 1:
        raise MapError("Map must have exactly one exit ('E').")


def _flood_fill(grid: list[list[str]], width: int, height: int,
                start: tuple[int, int]) -> None:
    stack = [start]
    while stack:
        x, y = stack.pop()
        if not (0 <= x < width and 0 <= y < height):
            continue
        if grid[y][x] in (WALL, _FILLED):
            continue
        grid[y][x] = _FILLED
        stack.extend(((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)))


def validate_path(game_map: GameMap) -> None:
    """Require every collectible and the exit to be reachable from the player."""
    filled = [row.copy() for row in game_map.grid]
    _flood_fill(filled, game_map.width, game_map.height, game_map.player_pos)
    for original, reached in zip(game_map.grid, filled):
        for tile, mark in zip(original, reached):
            if tile in (COLLECTIBLE, EXIT) and mark != _FILLED:
                if game_map.bonus:
                    raise MapError("No valid path to collectibles or the exit.")
                raise MapError("Invalid path: Not all items are reachable.")


def parse_map_text(text: str, bonus: bool) -> GameMap:
    """Build and fully validate a map from the text of a map file."""
    lines = list(_split_lines(text))
    if not lines:
        raise MapError("Map file is empty.")
    game_map = build_map(lines)
    validate_map_content(game_map, bonus)
    validate_path(game_map)
    return game_map


def parse_map(path: str | os.PathLike[str], bonus: bool) -> GameMap:
    """Read, build and fully validate the map stored at path."""
    game_map = build_map(read_map_lines(path))
    validate_map_content(game_map, bonus)
    validate_path(game_map)
    return game_map
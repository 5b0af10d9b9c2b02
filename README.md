# babalong

A small tile-based puzzle game played on rectangular text maps (`.ber` files).
Walk the player around the map, collect every key and reach the exit.

There are two modes:

* **Standard mode**: walls, keys, one exit and one player start.
* **Bonus mode**: adds inner walls and rocks, text blocks that can be pushed
  and that form rules such as *WALL IS PUSH* or *KEY IS OPEN*, animated
  sprites and a counter strip above the map showing moves and keys.

## Installation

```
pip install .
```

This installs the `babalong` command and its one dependency, `pygame`.
For the tests, install the `test` extra: `pip install .[test]`.

## Running

```
babalong maps/level.ber
babalong --bonus maps/level.ber
babalong --assets path/to/assets maps/level.ber
```

The command takes one map path and two options:

| Option          | Effect                                              |
|-----------------|-----------------------------------------------------|
| `--bonus`       | play in bonus mode                                  |
| `--assets DIR`  | read sprite sheets from `DIR` (default `./assets`)  |

Any other argument, or a missing map path, prints a usage message on standard
error and exits with status 1. A map that fails to load is reported as
`Error` followed by the reason, also with status 1.

Controls:

| Key       | Action       |
|-----------|--------------|
| W A S D   | move (taken when the key is released) |
| Esc       | quit         |

Closing the window also quits. After every move `Move count: N` is printed to
standard output; winning prints the final move count.

### Sprite sheets

The asset directory must hold these files, relative to it:

* standard mode: `characters/Baba.xpm`, `tiles/Fort.xpm`, `statics/Key.xpm`,
  `statics/Door.xpm`
* bonus mode, in addition: `statics/Rock.xpm`, `tiles/Wall.xpm`,
  `texts/Font.xpm`, `texts/Is-Text.xpm`, `texts/Move-Text.xpm`,
  `texts/Open-Text.xpm`, `texts/Push-Text.xpm`, `texts/Win-Text.xpm`,
  `texts/You-Text.xpm`

Sheets are cut into 25×25 pixel tiles and drawn at 50×50. Fully transparent
and pure black pixels are not drawn. No sheets ship with the package.

## Map format

A map is a rectangle of characters, one row per line, fully surrounded by `1`.

| Char | Meaning              |
|------|----------------------|
| `0`  | empty floor          |
| `1`  | wall                 |
| `P`  | player start (exactly one) |
| `C`  | key (at least one)   |
| `E`  | exit (exactly one)   |

In bonus mode these are also allowed:

| Char | Meaning                                  |
|------|------------------------------------------|
| `W`  | inner wall, solid unless walls are pushable |
| `R`  | rock, solid unless rocks are pushable    |
| `p` `c` `e` `w` `r` | text blocks: player, key, door, wall, rock |
| `i`  | the word IS                              |
| `y` `n` `o` `u` | text blocks: you, win, open, push  |
| `s`  | a pushable block with no sprite          |

Text blocks can always be pushed, one tile at a time, into an empty floor
tile. A line of three tiles reading *noun IS property*, across or down,
switches a rule on; the rules are re-read after every push:

* `w i u` — inner walls can be pushed
* `r i u` — rocks can be pushed
* `c i o` — the exit opens once every key is collected

In standard mode the exit opens once every key is collected. In bonus mode it
opens only while *KEY IS OPEN* also holds.

Every map is checked when it is loaded: it must not be empty, must be
rectangular, enclosed by walls, hold only valid characters, have exactly one
player and one exit and at least one key, and every key and the exit must be
reachable from the start. The reachability check treats every tile other
than `1` as passable.

Example:

```
1111111111
1P0C00i001
10000000E1
1111111111
```

## Using it as a library

```python
from babalong.mapdata import parse_map_text
from babalong.game import Game, Key

game_map = parse_map_text("11111\n1PCE1\n11111\n", bonus=False)
game = Game(game_map, bonus=False, output=print)
game.handle_keypress(Key.D)   # collects the key, prints "Move count: 1"
print(game.player_pos, game.keys_collected)
```

The modules:

* `babalong.mapdata` — `parse_map(path, bonus)`, `parse_map_text(text, bonus)`,
  `build_map`, `validate_map_content`, `validate_path` and the `GameMap`
  dataclass. Problems raise `MapError`.
* `babalong.game` — `Game`, with `handle_keypress`, `handle_keyrelease`,
  `is_pushable`, `handle_push`, `update_game_rules`; `Key` codes, `Direction`
  and `Rules`. Winning or pressing Esc raises `GameExit`, whose `status` is
  the exit status.
* `babalong.image` — `Image`, a plain grid of 32-bit colours, with
  `unpack_sprite`, `upscale_sprite` and `draw_sprite_to_buffer`.
* `babalong.textures` — `load_all_textures(asset_dir, bonus)`,
  `build_textures(sheets, bonus)` from already loaded `Image` sheets, and the
  `Textures` and `Animation` containers. Missing sheets raise `TextureError`.
* `babalong.render` — `Renderer`, which draws a `Game` into its `window`
  image, limited to about 60 frames a second by `render_frame`.
* `babalong.app` — `main(argv=None)` and `run_game(map_path, bonus, asset_dir)`.

## What it does not do

There is one map per run: no level selection, saving, sound or settings. The
bonus-mode walking animation is started by a move but is not stopped again
when the key is let go.
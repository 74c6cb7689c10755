# solong

A small top-down tile puzzle game. Walk around a walled map, pick up every
collectible, keep clear of the enemies and step onto the exit once it opens.

## Installing

```
pip install .
```

## Playing

```
solong path/to/level.ber
```

The command takes exactly one argument, the map file. With any other number
of arguments it prints a usage line and exits with status 1. If the map cannot
be loaded or is invalid, it prints `Error` and the reason and exits with
status 1.

Move with the arrow keys or `W`/`A`/`S`/`D`; moves happen when the key is
released. Press `Esc` or close the window to quit. Each successful step is
counted and printed as `Moves: N`. Walking into an enemy ends the game with
`You died!`. Stepping onto the exit with nothing left to collect wins it.

The window is as large as the map (64 pixels per tile) but no larger than
1200x900; on bigger maps the view follows the player. The number of
collectibles remaining and the move count are drawn in the top left corner.

## Sprites

Sprites are read as XPM files from `assets/img`, relative to the current
directory:

`tilewater1.xpm`, `tilewater2.xpm`, `stone_water.xpm`, `exit_open.xpm`,
`exit_closed.xpm`, `front.xpm`, `back.xpm`, `left.xpm`, `right.xpm`,
`collectible.xpm`, `collectible2.xpm`, `enemy1.xpm`, `enemy2.xpm`.

Floor, collectible and enemy sprites alternate between their two images on
every move. The player sprite follows the last direction moved.

## Map files

Maps are plain text files whose names end in `.ber`. Each line is one row of
tiles:

| Tile | Meaning      |
|------|--------------|
| `1`  | wall         |
| `0`  | floor        |
| `P`  | player start |
| `C`  | collectible  |
| `E`  | exit         |

A map must meet all of these conditions:

- every row has the same length;
- it is enclosed by walls;
- it has exactly one player, exactly one exit and at least one collectible;
- the player can reach every collectible and the exit.

When a map loads, enemies (`X`) are placed on some interior floor tiles
(those where column plus row is a multiple of 5). An enemy is only kept where
every collectible and the exit stay reachable, and at most a third of the
map's cells receive one.

Example:

```
1111111111
1P0C00C0E1
1000110001
1111111111
```

## Library use

The modules can also be used without opening a window:

```python
from pathlib import Path

from solong.maps import parse_map, find_player
from solong.validate import validate_map

rows = parse_map(Path("level.ber").read_text())
validate_map(rows, "level.ber")   # raises solong.maps.MapError on a bad map
print(find_player(rows))          # (x, y) of the player
```

- `solong.maps`: `parse_map`, `load_map`, `count_tiles`, `find_player`,
  `MapError`.
- `solong.validate`: `check_extension`, `is_rectangular`, `has_walls`,
  `has_valid_elements`, `flood_fill`, `is_playable`, `validate_map`.
- `solong.enemies`: `place_enemies`.
- `solong.game`: `new_game` builds a `Game` that you drive with `Game.move`
  or `Game.handle_key`; the end of a game is signalled by a `GameOver`
  exception carrying an `Outcome`. `window_size` gives the window size for a
  map.
- `solong.render`: `sprite_for`, `visible_cells`, `load_sprites`, `draw` and
  the `main` entry point behind the `solong` command.
- `solong.xpm`: `read_xpm` and `load_xpm_text` decode XPM images into
  `XpmImage` objects; `channel_shifts` and `to_visual_color` convert colours
  for displays with fewer than 24 bits per pixel.
- `solong.colors`: `find_color` looks up X11 colour names; `color_names`
  lists them.

## What is not included

The package ships no sprite images and no sample maps. The game cannot start
a window without the thirteen XPM files listed above in `assets/img`. The XPM
reader handles only the `c` (colour) key of colour definitions.

## Tests

```
pip install .[test]
pytest
```
"""Map validation: shape, walls, elements and reachability."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Sequence

from solong.maps import MapError, count_tiles, find_player

_BLOCKING = frozenset("1X")


def check_extension(path: str | Path) -> bool:
    """Tell whether the file name ends in ``.ber``."""
    name = str(path)
    return len(name) >= 4 and name.endswith(".ber")


def _width(row: Sequence[str]) -> int:
    length = len(row)
    if length and row[length - 1] == "\n":
        length -= 1
    return length


def is_rectangular(rows: Sequence[Sequence[str]]) -> bool:
    """Tell whether every row has the width of the first."""
    if not rows or not rows[0]:
        return False
    width = _width(rows[0])
    return all(_width(row) == width for row in rows[1:])


def has_walls(rows: Sequence[Sequence[str]]) -> bool:
    """Tell whether the map border is made of walls."""
    if not rows or not rows[0]:
        return False
    width = _width(rows[0])
    for row in rows:
        if len(row) < width or row[0] != "1" or row[width - 1] != "1":
            return False
    top, bottom = rows[0], rows[-1]
    return all(a == "1" and b == "1" for a, b in zip(top[:width], bottom[: _width(bottom)]))


def has_valid_elements(rows: Sequence[Sequence[str]]) -> bool:
    """Tell whether there is one player, one exit and some collectibles."""
    return (
        count_tiles(rows, "P") == 1
        and count_tiles(rows, "C") >= 1
        and count_tiles(rows, "E") == 1
    )


def flood_fill(rows: Sequence[Sequence[str]], x: int, y: int) -> frozenset[tuple[int, int]]:
    """Return every (x, y) reachable from the start without crossing walls or enemies."""
    reached: set[tuple[int, int]] = set()
    pending = deque([(x, y)])
    while pending:
        cx, cy = pending.popleft()
        if (cx, cy) in reached or cx < 0 or cy < 0 or cy >= len(rows):
            continue
        row = rows[cy]
        if cx >= len(row) or row[cx] in _BLOCKING:
            continue
        reached.add((cx, cy))
        pending.extend(((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)))
    return frozenset(reached)


def is_playable(rows: Sequence[Sequence[str]], start_x: int, start_y: int) -> bool:
    """Tell whether every collectible and exit can be reached from the start."""
    reached = flood_fill(rows, start_x, start_y)
    return all(
        (x, y) in reached
        for y, row in enumerate(rows)
        for x, cell in enumerate(row)
        if cell in ("C", "E")
    )


def validate_map(rows: Sequence[Sequence[str]], path: str | Path) -> None:
    """Raise MapError describing the first problem found with the map."""
    if not check_extension(path):
        raise MapError("Invalid file extension")
    if not is_rectangular(rows):
        raise MapError("Map is not rectangular")
    if not has_walls(rows):
        raise MapError("Map is not surrounded by walls")
    if not has_valid_elements(rows):
        raise MapError("Invalid map elements")
    player_x, player_y = find_player(rows)
    if not is_playable(rows, player_x, player_y):
        raise MapError("Map is not playable")
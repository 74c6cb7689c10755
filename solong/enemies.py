"""Placing enemies on a map without making it unwinnable."""

from __future__ import annotations

from typing import Sequence

from solong.validate import is_playable


def place_enemies(rows: Sequence[str], player_x: int, player_y: int) -> list[str]:
    """Return the map with enemies set on some floor cells.

    Candidates are interior floor cells where x + y is a multiple of 5,
    taken in reading order. An enemy is kept only if every collectible and
    the exit stay reachable, and at most a third of the map's cells get one.
    """
    grid = [list(row) for row in rows]
    if not grid:
        return []
    height = len(grid)
    width = len(grid[0])
    limit = (width * height) // 3
    placed = 0
    for y in range(1, height - 1):
        row = grid[y]
        for x in range(1, min(width - 1, len(row))):
            if row[x] != "0" or placed >= limit or (x + y) % 5 != 0:
                continue
            row[x] = "X"
            if is_playable(grid, player_x, player_y):
                placed += 1
            else:
                row[x] = "0"
    return ["".join(row) for row in grid]
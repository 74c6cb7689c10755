"""Loading map files and simple queries on map rows."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class MapError(ValueError):
    """Raised when a map cannot be loaded or is not a valid map."""


def parse_map(text: str) -> list[str]:
    """Split map text into rows, without their line endings.

    A final newline does not start an extra row. Empty text is an error.
    """
    if not text:
        raise MapError("Empty file")
    rows = text.split("\n")
    if text.endswith("\n"):
        rows.pop()
    return rows


def load_map(path: str | Path) -> list[str]:
    """Read a map file and return its rows."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise MapError(f"Error loading map: {exc}") from exc
    return parse_map(text)


def count_tiles(rows: Sequence[Sequence[str]], tile: str) -> int:
    """Count how many cells of the map hold ``tile``."""
    return sum(1 for row in rows for cell in row if cell == tile)


def find_player(rows: Sequence[Sequence[str]]) -> tuple[int, int]:
    """Return the (x, y) of the first player tile in reading order."""
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if cell == "P":
                return x, y
    raise MapError("Player not found")
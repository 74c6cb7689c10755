"""Game state: starting a game, moving the player and following it with the camera."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from solong.enemies import place_enemies
from solong.maps import MapError, count_tiles, find_player, load_map
from solong.validate import validate_map

DEFAULT_TILE_SIZE = 64
MAX_WINDOW_WIDTH = 1200
MAX_WINDOW_HEIGHT = 900


class Direction(Enum):
    """The way the player sprite faces."""

    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


class Outcome(Enum):
    """What a key press or a move led to."""

    MOVED = "moved"
    BLOCKED = "blocked"
    IGNORED = "ignored"
    WON = "won"
    DIED = "died"
    QUIT = "quit"


class GameOver(Exception):
    """Raised when the game ends: won, died or quit."""

    def __init__(self, outcome: Outcome, message: str) -> None:
        super().__init__(message)
        self.outcome = outcome
        self.message = message


_KEYS: dict[str, tuple[Direction, int, int]] = {
    "up": (Direction.BACK, 0, -1),
    "w": (Direction.BACK, 0, -1),
    "down": (Direction.FRONT, 0, 1),
    "s": (Direction.FRONT, 0, 1),
    "left": (Direction.LEFT, -1, 0),
    "a": (Direction.LEFT, -1, 0),
    "right": (Direction.RIGHT, 1, 0),
    "d": (Direction.RIGHT, 1, 0),
}
_QUIT_KEYS = frozenset({"escape"})


def window_size(map_width: int, map_height: int, tile_size: int) -> tuple[int, int]:
    """Return the window size in pixels for a map, capped at 1200x900."""
    return (
        min(map_width * tile_size, MAX_WINDOW_WIDTH),
        min(map_height * tile_size, MAX_WINDOW_HEIGHT),
    )


@dataclass
class Game:
    """A running game: the map, the player and the view onto the map."""

    rows: list[list[str]]
    player_x: int
    player_y: int
    collectibles: int
    tile_size: int
    window_width: int
    window_height: int
    moves: int = 0
    camera_x: int = 0
    camera_y: int = 0
    direction: Direction = Direction.FRONT
    on_exit: bool = field(default=False)

    @property
    def width(self) -> int:
        """Map width in tiles."""
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        """Map height in tiles."""
        return len(self.rows)

    def _cell(self, x: int, y: int) -> str | None:
        if 0 <= y < len(self.rows) and 0 <= x < len(self.rows[y]):
            return self.rows[y][x]
        return None

    def move(self, dx: int, dy: int) -> Outcome:
        """Move the player by one step, unless a wall is in the way.

        Raises GameOver when the player meets an enemy or reaches the open exit.
        """
        new_x, new_y = self.player_x + dx, self.player_y + dy
        target = self._cell(new_x, new_y)
        if target is None or target == "1":
            return Outcome.BLOCKED
        if target == "C":
            self.collectibles -= 1
        if target == "X":
            raise GameOver(Outcome.DIED, "You died! ☠️")
        self.rows[self.player_y][self.player_x] = "E" if self.on_exit else "0"
        self.player_x, self.player_y = new_x, new_y
        self.on_exit = target == "E"
        if self.collectibles == 0 and self.on_exit:
            raise GameOver(Outcome.WON, "You won!🥳🥳")
        self.rows[new_y][new_x] = "P"
        self.moves += 1
        self.update_camera()
        return Outcome.MOVED

    def handle_key(self, key: str) -> Outcome:
        """React to a released key, given by name ("w", "up", "escape", ...)."""
        name = key.lower()
        if name in _KEYS:
            direction, dx, dy = _KEYS[name]
            self.direction = direction
            return self.move(dx, dy)
        if name in _QUIT_KEYS:
            raise GameOver(Outcome.QUIT, "Exiting game")
        return Outcome.IGNORED

    def update_camera(self) -> None:
        """Centre the view on the player, or centre the map if it fits."""
        tiles_x = self.window_width // self.tile_size
        tiles_y = self.window_height // self.tile_size
        if self.width <= tiles_x:
            camera_x = (tiles_x - self.width) // 2
        else:
            camera_x = self.player_x - tiles_x // 2
        if self.height <= tiles_y:
            camera_y = (tiles_y - self.height) // 2
        else:
            camera_y = self.player_y - tiles_y // 2
        camera_x = max(camera_x, 0)
        camera_y = max(camera_y, 0)
        camera_x = min(camera_x, self.width - tiles_x)
        camera_y = min(camera_y, self.height - tiles_y)
        self.camera_x, self.camera_y = camera_x, camera_y

    def status_lines(self) -> list[str]:
        """Return the status text shown over the map."""
        return [
            f"Collectibles remaining: {self.collectibles}",
            f"Moves: {self.moves}",
        ]


def new_game(path: str | Path, tile_size: int = DEFAULT_TILE_SIZE) -> Game:
    """Load, populate with enemies and validate a map, then start a game on it."""
    rows = load_map(path)
    try:
        player_x, player_y = find_player(rows)
    except MapError:
        raise MapError("No player found") from None
    rows = place_enemies(rows, player_x, player_y)
    validate_map(rows, path)
    width = len(rows[0])
    window_width, window_height = window_size(width, len(rows), tile_size)
    game = Game(
        rows=[list(row) for row in rows],
        player_x=player_x,
        player_y=player_y,
        collectibles=count_tiles(rows, "C"),
        tile_size=tile_size,
        window_width=window_width,
        window_height=window_height,
    )
    game.update_camera()
    return game
"""Drawing the game with pygame, loading its sprites, and the command entry point."""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Mapping

import pygame

from solong.game import Direction, Game, GameOver, Outcome, new_game
from solong.maps import MapError
from solong.xpm import XpmError, read_xpm

ASSET_DIR = Path("assets/img")
STATUS_COLOR = (255, 255, 255)

SPRITE_FILES: dict[str, str] = {
    "floor1": "tilewater1.xpm",
    "floor2": "tilewater2.xpm",
    "wall": "stone_water.xpm",
    "exit_open": "exit_open.xpm",
    "exit_closed": "exit_closed.xpm",
    "player_front": "front.xpm",
    "player_back": "back.xpm",
    "player_left": "left.xpm",
    "player_right": "right.xpm",
    "collectible": "collectible.xpm",
    "collectible2": "collectible2.xpm",
    "enemy1": "enemy1.xpm",
    "enemy2": "enemy2.xpm",
}

_PLAYER_SPRITES = {
    Direction.FRONT: "player_front",
    Direction.BACK: "player_back",
    Direction.LEFT: "player_left",
    Direction.RIGHT: "player_right",
}


def sprite_for(game: Game, tile: str) -> str | None:
    """Return the sprite name used for a tile in the current game state."""
    even = game.moves % 2 == 0
    if tile == "1":
        return "wall"
    if tile == "0":
        return "floor1" if even else "floor2"
    if tile == "P":
        return _PLAYER_SPRITES[game.direction]
    if tile == "E":
        return "exit_open" if game.collectibles == 0 else "exit_closed"
    if tile == "C":
        return "collectible" if even else "collectible2"
    if tile == "X":
        return "enemy1" if even else "enemy2"
    return None


def visible_cells(game: Game) -> Iterator[tuple[int, int, str]]:
    """Yield (pixel x, pixel y, tile) for every cell inside the window."""
    for y, row in enumerate(game.rows):
        for x, tile in enumerate(row):
            draw_x = (x - game.camera_x) * game.tile_size
            draw_y = (y - game.camera_y) * game.tile_size
            if 0 <= draw_x < game.window_width and 0 <= draw_y < game.window_height:
                yield draw_x, draw_y, tile


def load_sprites(asset_dir: str | Path) -> dict[str, pygame.Surface]:
    """Load every sprite from XPM files in ``asset_dir``."""
    base = Path(asset_dir)
    sprites: dict[str, pygame.Surface] = {}
    for name, filename in SPRITE_FILES.items():
        try:
            image = read_xpm(base / filename)
        except XpmError as exc:
            raise XpmError(f"Error loading img_{name}") from exc
        data = image.to_bytes(3, big_endian=True)
        surface = pygame.image.frombuffer(data, (image.width, image.height), "RGB")
        sprites[name] = surface.copy()
    return sprites


@lru_cache(maxsize=1)
def _status_font() -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, 20)


def draw(game: Game, screen: pygame.Surface, sprites: Mapping[str, pygame.Surface]) -> None:
    """Clear the screen, draw the visible map and the status text."""
    screen.fill((0, 0, 0))
    for draw_x, draw_y, tile in visible_cells(game):
        name = sprite_for(game, tile)
        if name is not None:
            screen.blit(sprites[name], (draw_x, draw_y))
    font = _status_font()
    for line, y in zip(game.status_lines(), (10, 30)):
        screen.blit(font.render(line, True, STATUS_COLOR), (10, y))


def _redraw(game: Game, screen: pygame.Surface, sprites: Mapping[str, pygame.Surface]) -> None:
    draw(game, screen, sprites)
    pygame.display.flip()


def main(argv: list[str] | None = None) -> int:
    """Run the game on the map file named in ``argv``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: so_long <map.ber>", file=sys.stderr)
        return 1
    try:
        game = new_game(args[0])
    except MapError as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    pygame.init()
    try:
        screen = pygame.display.set_mode((game.window_width, game.window_height))
        pygame.display.set_caption("so_long")
        try:
            sprites = load_sprites(ASSET_DIR)
        except XpmError as exc:
            print(f"Error\n{exc}", file=sys.stderr)
            return 1
        clock = pygame.time.Clock()
        _redraw(game, screen, sprites)
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    print("Exiting game")
                    return 0
                if event.type == pygame.KEYUP:
                    try:
                        outcome = game.handle_key(pygame.key.name(event.key))
                    except GameOver as over:
                        print(over.message)
                        return 0
                    if outcome is Outcome.MOVED:
                        print(f"Moves: {game.moves}")
                        _redraw(game, screen, sprites)
            clock.tick(60)
    finally:
        pygame.quit()
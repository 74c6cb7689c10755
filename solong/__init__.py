"""A tile puzzle game: collect everything, avoid enemies, reach the exit."""

__version__ = "0.1.0"
__all__ = ["colors", "xpm", "maps", "validate", "enemies", "game", "render"]
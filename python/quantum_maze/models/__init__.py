from quantum_maze.models.direction import Direction, Located, Position, Side, mirror
from quantum_maze.models.grid import Grid
from quantum_maze.models.level import Level, MechanicsSpec, load_levels
from quantum_maze.models.scoring import calculate_stars
from quantum_maze.models.tiles import Tile, TileCode, TileKind, decode_tile

__all__ = [
    "Direction",
    "Grid",
    "Level",
    "Located",
    "MechanicsSpec",
    "Position",
    "Side",
    "Tile",
    "TileCode",
    "TileKind",
    "calculate_stars",
    "decode_tile",
    "load_levels",
    "mirror",
]

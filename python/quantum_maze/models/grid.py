"""Grid model for one half of a dual maze."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from quantum_maze.errors import InvalidLevel, MissingAnchor
from quantum_maze.models.direction import Direction, Position
from quantum_maze.models.tiles import Tile, TileKind, decode_char, decode_tile


@dataclass(frozen=True)
class Grid:
    """A rectangular, immutable array of tiles.

    Shape is validated on construction.  Anchors (Start/Goal) are checked
    lazily by ``start``/``goal`` so the solver can report ``MissingAnchor``
    for a grid that is otherwise well formed.
    """

    tiles: tuple[tuple[Tile, ...], ...]

    def __post_init__(self) -> None:
        if not self.tiles or not self.tiles[0]:
            raise InvalidLevel("Grid must have at least one row and one column.")
        width = len(self.tiles[0])
        for r, row in enumerate(self.tiles):
            if len(row) != width:
                raise InvalidLevel(
                    f"Grid is not rectangular: row {r} has {len(row)} tiles, "
                    f"expected {width}."
                )

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_codes(cls, rows: Sequence[Sequence[int | dict]]) -> Grid:
        """Create a grid from level-record tile cells.

        Example::

            Grid.from_codes([[3, 0, 2]])
        """
        if not isinstance(rows, Sequence) or isinstance(rows, str):
            raise InvalidLevel("Grid must be a 2D array of tile codes.")
        decoded: list[tuple[Tile, ...]] = []
        for row in rows:
            if not isinstance(row, Sequence) or isinstance(row, str):
                raise InvalidLevel("Grid must be a 2D array of tile codes.")
            decoded.append(tuple(decode_tile(cell) for cell in row))
        return cls(tiles=tuple(decoded))

    @classmethod
    def from_ascii(cls, lines: Sequence[str] | str) -> Grid:
        """Create a grid from the compact text layout (see ``decode_char``).

        Example::

            Grid.from_ascii(["@.a", "#.*"])
        """
        if isinstance(lines, str):
            lines = [line.strip() for line in lines.strip().splitlines()]
        return cls(tiles=tuple(tuple(decode_char(ch) for ch in line) for line in lines))

    # -- queries --------------------------------------------------------------

    @property
    def rows(self) -> int:
        return len(self.tiles)

    @property
    def cols(self) -> int:
        return len(self.tiles[0])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos[0] < self.rows and 0 <= pos[1] < self.cols

    def tile_at(self, pos: Position) -> Tile:
        """Return the tile at *pos*; raises ``IndexError`` when out of bounds."""
        if not self.in_bounds(pos):
            raise IndexError(f"Position {tuple(pos)} outside {self.rows}x{self.cols} grid")
        return self.tiles[pos[0]][pos[1]]

    def get(self, pos: Position) -> Tile | None:
        return self.tiles[pos[0]][pos[1]] if self.in_bounds(pos) else None

    def cells(self) -> Iterator[tuple[Position, Tile]]:
        """Yield every ``(position, tile)`` in row-major scan order."""
        for r, row in enumerate(self.tiles):
            for c, tile in enumerate(row):
                yield Position(r, c), tile

    def find(self, kind: TileKind) -> list[Position]:
        return [pos for pos, tile in self.cells() if tile.kind is kind]

    def neighbors(self, pos: Position) -> list[tuple[Direction, Position]]:
        """In-bounds orthogonal neighbors of *pos*, ignoring tile contents."""
        result: list[tuple[Direction, Position]] = []
        for direction in Direction:
            nxt = Position(*pos).step(direction)
            if self.in_bounds(nxt):
                result.append((direction, nxt))
        return result

    @property
    def start(self) -> Position:
        starts = self.find(TileKind.START)
        if not starts:
            raise MissingAnchor("Start position not found in grid")
        if len(starts) > 1:
            raise InvalidLevel(f"Grid has {len(starts)} start tiles, expected one")
        return starts[0]

    @property
    def goal(self) -> Position:
        """First Goal tile in scan order."""
        goals = self.find(TileKind.GOAL)
        if not goals:
            raise MissingAnchor("Goal position not found in grid")
        return goals[0]

    def validate_anchors(self) -> tuple[Position, Position]:
        return self.start, self.goal

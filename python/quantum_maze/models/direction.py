"""Directions, grid sides and positions."""

from __future__ import annotations

from enum import StrEnum
from typing import NamedTuple

from quantum_maze.errors import InvalidDirection


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: object) -> Direction:
        """Coerce *value* to a ``Direction``.

        Accepts members, their names or values in any case, and the single
        letters ``u``/``d``/``l``/``r``.  Anything else raises
        ``InvalidDirection``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key == member.value or (len(key) == 1 and member.value[0] == key):
                    return member
        raise InvalidDirection(value)

    @property
    def vector(self) -> tuple[int, int]:
        return _VECTORS[self]

    def mirrored(self) -> Direction:
        """Reflect the horizontal axis only; UP and DOWN are unchanged."""
        return _MIRRORED[self]


_VECTORS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_MIRRORED = {
    Direction.UP: Direction.UP,
    Direction.DOWN: Direction.DOWN,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def mirror(direction: Direction) -> Direction:
    return direction.mirrored()


class Side(StrEnum):
    LEFT = "left"
    RIGHT = "right"


class Position(NamedTuple):
    row: int
    col: int

    def step(self, direction: Direction) -> Position:
        dr, dc = direction.vector
        return Position(self.row + dr, self.col + dc)

    def direction_to(self, other: Position) -> Direction | None:
        """Direction of a single orthogonal step to *other*, else ``None``."""
        for direction in Direction:
            if self.step(direction) == other:
                return direction
        return None

    def to_dict(self) -> dict[str, int]:
        return {"row": self.row, "col": self.col}

    @classmethod
    def from_dict(cls, data: dict) -> Position:
        return cls(int(data["row"]), int(data["col"]))


class Located(NamedTuple):
    """A position qualified by the grid it lives on."""

    side: Side
    pos: Position

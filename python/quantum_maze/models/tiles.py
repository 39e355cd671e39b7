"""Tile kinds and the integer tile codes used by level records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

from quantum_maze.config import VARIANT_NAMES
from quantum_maze.errors import InvalidLevel
from quantum_maze.models.direction import Direction


class TileKind(StrEnum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    GOAL = "goal"
    SWITCH = "switch"
    DOOR = "door"
    PORTAL = "portal"
    COIN = "coin"
    ONE_WAY = "one_way"


class TileCode(IntEnum):
    EMPTY = 0
    WALL = 1
    GOAL = 2
    START = 3
    SWITCH = 4
    DOOR = 5
    PORTAL = 6
    COIN = 7
    SWITCH_1 = 10
    DOOR_1 = 20
    PORTAL_1 = 30
    ONE_WAY_UP = 40


# Numbered switches, doors and portals each occupy a block of seven codes.
NUMBERED_SLOTS = 7

_ONE_WAY_ORDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

_PLAIN = {
    TileCode.EMPTY: TileKind.EMPTY,
    TileCode.WALL: TileKind.WALL,
    TileCode.GOAL: TileKind.GOAL,
    TileCode.START: TileKind.START,
    TileCode.SWITCH: TileKind.SWITCH,
    TileCode.DOOR: TileKind.DOOR,
    TileCode.PORTAL: TileKind.PORTAL,
    TileCode.COIN: TileKind.COIN,
}

_NUMBERED = (
    (TileCode.SWITCH_1, TileKind.SWITCH),
    (TileCode.DOOR_1, TileKind.DOOR),
    (TileCode.PORTAL_1, TileKind.PORTAL),
)


@dataclass(frozen=True)
class Tile:
    """One grid cell.

    ``group`` is the switch/door group or portal pair id when the tile
    itself names one; untagged mechanics leave it ``None`` and get linked
    by ``MechanicsIndex.build``.
    """

    kind: TileKind
    group: str | None = None
    direction: Direction | None = None

    @property
    def is_wall(self) -> bool:
        return self.kind is TileKind.WALL

    @property
    def is_mechanic(self) -> bool:
        return self.kind in (TileKind.SWITCH, TileKind.DOOR, TileKind.PORTAL)


WALL = Tile(TileKind.WALL)
EMPTY = Tile(TileKind.EMPTY)


def variant_group(variant: int) -> str:
    if 0 <= variant < len(VARIANT_NAMES):
        return VARIANT_NAMES[variant]
    return f"variant{variant}"


def decode_tile(cell: int | dict) -> Tile:
    """Decode one level-record cell (an int code or a variant object)."""
    if isinstance(cell, dict):
        try:
            code = int(cell["type"])
            variant = cell.get("variant")
            variant = None if variant is None else int(variant)
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidLevel(f"Malformed tile object: {cell!r}") from exc
        tile = decode_tile(code)
        if variant is not None and tile.is_mechanic and tile.group is None:
            return Tile(tile.kind, group=variant_group(variant))
        return tile

    if isinstance(cell, bool) or not isinstance(cell, int):
        raise InvalidLevel(f"Tile code must be an integer, got {cell!r}")

    if cell in _PLAIN:
        return Tile(_PLAIN[TileCode(cell)])

    for base, kind in _NUMBERED:
        if base <= cell < base + NUMBERED_SLOTS:
            return Tile(kind, group=str(cell - base + 1))

    offset = cell - TileCode.ONE_WAY_UP
    if 0 <= offset < len(_ONE_WAY_ORDER):
        return Tile(TileKind.ONE_WAY, direction=_ONE_WAY_ORDER[offset])

    raise InvalidLevel(f"Unknown tile code: {cell}")


# -- ascii layout -------------------------------------------------------------

_ASCII_PLAIN = {
    ".": Tile(TileKind.EMPTY),
    "#": WALL,
    "@": Tile(TileKind.START),
    "*": Tile(TileKind.GOAL),
    "$": Tile(TileKind.COIN),
    "^": Tile(TileKind.ONE_WAY, direction=Direction.UP),
    "v": Tile(TileKind.ONE_WAY, direction=Direction.DOWN),
    "<": Tile(TileKind.ONE_WAY, direction=Direction.LEFT),
    ">": Tile(TileKind.ONE_WAY, direction=Direction.RIGHT),
    "S": Tile(TileKind.SWITCH),
    "X": Tile(TileKind.DOOR),
    "O": Tile(TileKind.PORTAL),
}


def decode_char(ch: str) -> Tile:
    """Decode one character of the compact text layout.

    ``.`` empty, ``#`` wall, ``@`` start, ``*`` goal, ``$`` coin,
    ``^ v < >`` one-way, ``a``-``g`` switch 1-7, ``A``-``G`` door 1-7,
    ``1``-``7`` portal 1-7 and ``S``/``X``/``O`` for untagged
    switch/door/portal.
    """
    if ch in _ASCII_PLAIN:
        return _ASCII_PLAIN[ch]
    if "a" <= ch <= "g":
        return Tile(TileKind.SWITCH, group=str(ord(ch) - ord("a") + 1))
    if "A" <= ch <= "G":
        return Tile(TileKind.DOOR, group=str(ord(ch) - ord("A") + 1))
    if "1" <= ch <= "7":
        return Tile(TileKind.PORTAL, group=ch)
    raise InvalidLevel(f"Unknown layout character: {ch!r}")

"""Level records: two grids plus mechanics metadata."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from quantum_maze.config import DEFAULT_PAR_MOVES
from quantum_maze.errors import InvalidLevel
from quantum_maze.models.direction import Position, Side
from quantum_maze.models.grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwitchEntry:
    id: str | None
    pos: Position
    variant: int | None = None
    side: Side | None = None


@dataclass(frozen=True)
class DoorEntry:
    id: str | None
    pos: Position
    switch_id: str | None
    side: Side | None = None


@dataclass(frozen=True)
class PortalEntry:
    pos: Position
    target: Position
    side: Side | None = None


@dataclass(frozen=True)
class MechanicsSpec:
    """Authoring metadata that tags untagged switch/door/portal tiles."""

    switches: tuple[SwitchEntry, ...] = ()
    doors: tuple[DoorEntry, ...] = ()
    portals: tuple[PortalEntry, ...] = ()

    @classmethod
    def from_dict(cls, data: dict | None) -> MechanicsSpec:
        if not data:
            return cls()
        try:
            switches = tuple(
                SwitchEntry(
                    id=_opt_str(s.get("id")),
                    pos=Position.from_dict(s["pos"]),
                    variant=_opt_int(s.get("variant")),
                    side=_side(s.get("side")),
                )
                for s in data.get("switches") or ()
            )
            doors = tuple(
                DoorEntry(
                    id=_opt_str(d.get("id")),
                    pos=Position.from_dict(d["pos"]),
                    switch_id=_opt_str(d.get("switchId")),
                    side=_side(d.get("side")),
                )
                for d in data.get("doors") or ()
            )
            portals = tuple(
                PortalEntry(
                    pos=Position.from_dict(p["pos"]),
                    target=Position.from_dict(p["target"]),
                    side=_side(p.get("side")),
                )
                for p in data.get("portals") or ()
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidLevel(f"Malformed mechanics metadata: {exc}") from exc
        return cls(switches=switches, doors=doors, portals=portals)


def _opt_str(value: object) -> str | None:
    return None if value is None else str(value)


def _opt_int(value: object) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)


def _side(value: object) -> Side | None:
    if value is None:
        return None
    try:
        return Side(str(value).lower())
    except ValueError as exc:
        raise InvalidLevel(f"Unknown grid side: {value!r}") from exc


@dataclass(frozen=True)
class Level:
    grid_left: Grid
    grid_right: Grid
    level_id: int = 0
    name: str = ""
    par_moves: int = DEFAULT_PAR_MOVES
    difficulty: str = "Easy"
    description: str = ""
    mechanics: MechanicsSpec = field(default_factory=MechanicsSpec)

    def __post_init__(self) -> None:
        if self.grid_left.shape != self.grid_right.shape:
            raise InvalidLevel(
                f"Right grid {self.grid_right.shape} must match left grid "
                f"{self.grid_left.shape} dimensions"
            )

    def grid(self, side: Side) -> Grid:
        return self.grid_left if side is Side.LEFT else self.grid_right

    def validate(self) -> None:
        """Check both grids carry exactly one Start and at least one Goal."""
        self.grid_left.validate_anchors()
        self.grid_right.validate_anchors()

    # -- (de)serialisation ----------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> Level:
        if not isinstance(data, dict):
            raise InvalidLevel("Level record must be a JSON object")
        if "gridLeft" not in data or "gridRight" not in data:
            raise InvalidLevel("Level record needs both gridLeft and gridRight")
        try:
            level_id = int(data.get("levelId") or 0)
            par_moves = int(data.get("parMoves") or DEFAULT_PAR_MOVES)
        except (TypeError, ValueError) as exc:
            raise InvalidLevel(f"Malformed level header: {exc}") from exc
        return cls(
            grid_left=Grid.from_codes(data["gridLeft"]),
            grid_right=Grid.from_codes(data["gridRight"]),
            level_id=level_id,
            name=str(data.get("name") or ""),
            par_moves=par_moves,
            difficulty=str(data.get("difficulty") or "Easy"),
            description=str(data.get("description") or ""),
            mechanics=MechanicsSpec.from_dict(data.get("mechanics")),
        )

    @classmethod
    def from_layout(
        cls,
        left: list[str] | str,
        right: list[str] | str,
        **kwargs,
    ) -> Level:
        """Build a level from two compact text layouts (see ``Grid.from_ascii``)."""
        return cls(grid_left=Grid.from_ascii(left), grid_right=Grid.from_ascii(right), **kwargs)


def load_levels(path: Path) -> list[Level]:
    """Read a JSON file holding one level record or a list of them."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidLevel(f"{path}: cannot read level file ({exc})") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidLevel(f"{path}: not valid JSON ({exc})") from exc
    records = data if isinstance(data, list) else [data]
    levels = [Level.from_dict(record) for record in records]
    logger.debug("Loaded %d level(s) from %s", len(levels), path)
    return levels

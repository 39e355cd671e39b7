"""Move legality and tile-entry effects shared by the engine and the solver.

Everything here is a pure function of the grids, the mechanics index and
the switch groups active *before* the move.
"""

from __future__ import annotations

from collections.abc import Set
from typing import NamedTuple

from quantum_maze.engine.mechanics.index import MechanicsIndex
from quantum_maze.models.direction import Direction, Position, Side
from quantum_maze.models.grid import Grid
from quantum_maze.models.tiles import TileKind


class JointStep(NamedTuple):
    left: Position
    right: Position
    activated: frozenset[str]
    blocked: tuple[Side, ...]

    @property
    def accepted(self) -> bool:
        return not self.blocked


def can_enter(
    grid: Grid,
    mechanics: MechanicsIndex,
    side: Side,
    target: Position,
    heading: Direction,
    activated: Set[str],
) -> bool:
    """Return True if a player moving *heading* may step onto *target*."""
    tile = grid.get(target)
    if tile is None:
        return False
    kind = tile.kind
    if kind is TileKind.WALL:
        return False
    if kind is TileKind.DOOR:
        return mechanics.is_door_open(side, target, activated)
    if kind is TileKind.ONE_WAY:
        return tile.direction is heading
    return True


def enter(
    mechanics: MechanicsIndex,
    side: Side,
    pos: Position,
    activated: set[str],
) -> Position:
    """Apply entry effects of the tile at *pos* and return where the player ends up.

    Switch groups are added to *activated* in place.  A portal moves the
    player to its partner; the arrival tile's own effects are not applied.
    """
    group = mechanics.switch_group(side, pos)
    if group is not None:
        activated.add(group)
    target = mechanics.portal_target(side, pos)
    return target if target is not None else pos


def joint_step(
    left_grid: Grid,
    right_grid: Grid,
    mechanics: MechanicsIndex,
    left: Position,
    right: Position,
    direction: Direction,
    activated: frozenset[str],
) -> JointStep:
    """Resolve one input for both players.

    The right player moves in the mirrored direction.  Both targets are
    validated against the pre-move *activated* set; if either is blocked
    neither player moves.  Entry effects apply left first, then right.
    """
    mirrored = direction.mirrored()
    left_target = left.step(direction)
    right_target = right.step(mirrored)

    blocked: list[Side] = []
    if not can_enter(left_grid, mechanics, Side.LEFT, left_target, direction, activated):
        blocked.append(Side.LEFT)
    if not can_enter(right_grid, mechanics, Side.RIGHT, right_target, mirrored, activated):
        blocked.append(Side.RIGHT)
    if blocked:
        return JointStep(left, right, activated, tuple(blocked))

    grown = set(activated)
    left_end = enter(mechanics, Side.LEFT, left_target, grown)
    right_end = enter(mechanics, Side.RIGHT, right_target, grown)
    return JointStep(left_end, right_end, frozenset(grown), ())

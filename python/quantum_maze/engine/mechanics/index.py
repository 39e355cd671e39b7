"""Switch/door and portal linking, built once per level load.

Linking is two-phase level-authoring behavior:

1. explicit ids: numbered tile codes, editor color variants, then the
   level's mechanics metadata for tiles the grid leaves untagged;
2. scan order: the k-th still-untagged switch pairs with the k-th
   still-untagged door (left grid first, then right, row-major).

Switch groups span both grids.  Portals pair within a single grid.

Groups only match by name.  A plain ``4``/``5`` tile is untagged, not
variant 0, so it never joins a ``{"type": 5, "variant": 0}`` tile's
``yellow`` group; and a metadata switch ``id`` such as ``"switch_v1"``
never matches a variant door, whose group is a color name.  Such tiles
fall through to scan-order pairing.  Tag both ends the same way.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from quantum_maze.errors import InvalidLevel
from quantum_maze.models.direction import Located, Position, Side
from quantum_maze.models.grid import Grid
from quantum_maze.models.level import MechanicsSpec
from quantum_maze.models.tiles import TileKind, variant_group

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class MechanicsIndex:
    switches: Mapping[Located, str]
    doors: Mapping[Located, str]
    switch_to_doors: Mapping[str, frozenset[Located]]
    portal_to_target: Mapping[Located, Position]

    # -- queries --------------------------------------------------------------

    def switch_group(self, side: Side, pos: Position) -> str | None:
        return self.switches.get(Located(side, pos))

    def door_group(self, side: Side, pos: Position) -> str | None:
        return self.doors.get(Located(side, pos))

    def portal_target(self, side: Side, pos: Position) -> Position | None:
        return self.portal_to_target.get(Located(side, pos))

    def doors_for(self, group: str) -> frozenset[Located]:
        return self.switch_to_doors.get(group, frozenset())

    def is_door_open(self, side: Side, pos: Position, activated: Iterable[str]) -> bool:
        group = self.door_group(side, pos)
        return group is not None and group in activated

    @property
    def groups(self) -> frozenset[str]:
        return frozenset(self.switches.values())

    # -- construction ---------------------------------------------------------

    @classmethod
    def build(
        cls,
        left: Grid,
        right: Grid,
        spec: MechanicsSpec | None = None,
    ) -> MechanicsIndex:
        spec = spec or MechanicsSpec()
        grids = ((Side.LEFT, left), (Side.RIGHT, right))

        switches: dict[Located, str] = {}
        doors: dict[Located, str] = {}
        loose_switches: list[Located] = []
        loose_doors: list[Located] = []

        # Phase 1a: ids carried by the tiles themselves.
        for side, grid in grids:
            for pos, tile in grid.cells():
                where = Located(side, pos)
                if tile.kind is TileKind.SWITCH:
                    if tile.group is not None:
                        switches[where] = tile.group
                    else:
                        loose_switches.append(where)
                elif tile.kind is TileKind.DOOR:
                    if tile.group is not None:
                        doors[where] = tile.group
                    else:
                        loose_doors.append(where)

        # Phase 1b: metadata tags for untagged tiles.
        for entry in spec.switches:
            group = entry.id or (variant_group(entry.variant) if entry.variant is not None else None)
            if group is None:
                continue
            for where in _claim(loose_switches, entry.pos, entry.side):
                switches[where] = group
        for entry in spec.doors:
            if entry.switch_id is None:
                continue
            for where in _claim(loose_doors, entry.pos, entry.side):
                doors[where] = entry.switch_id

        # Phase 2: scan-order pairing of whatever is left.
        for k, (sw, door) in enumerate(zip(loose_switches, loose_doors)):
            group = f"seq{k}"
            switches[sw] = group
            doors[door] = group
        for where in loose_switches[len(loose_doors):]:
            logger.warning("Switch at %s %s has no door to pair with", where.side, tuple(where.pos))
        for where in loose_doors[len(loose_switches):]:
            logger.warning("Door at %s %s has no switch to pair with", where.side, tuple(where.pos))

        switch_to_doors: dict[str, set[Located]] = defaultdict(set)
        for where, group in doors.items():
            switch_to_doors[group].add(where)
        live_groups = set(switches.values())
        for group, members in switch_to_doors.items():
            if group not in live_groups:
                logger.warning(
                    "Door group %r has no switch; %d door(s) stay locked",
                    group, len(members),
                )

        portal_to_target: dict[Located, Position] = {}
        for side, grid in grids:
            portal_to_target.update(_link_portals(side, grid, spec))

        index = cls(
            switches=switches,
            doors=doors,
            switch_to_doors={g: frozenset(m) for g, m in switch_to_doors.items()},
            portal_to_target=portal_to_target,
        )
        logger.debug(
            "Mechanics index: %d switch(es), %d door(s), %d portal end(s)",
            len(switches), len(doors), len(portal_to_target),
        )
        return index


def _claim(loose: list[Located], pos: Position, side: Side | None) -> list[Located]:
    """Remove and return the untagged tiles at *pos* matching *side*."""
    claimed = [w for w in loose if w.pos == pos and (side is None or w.side is side)]
    if not claimed:
        logger.debug("Mechanics entry at %s matches no untagged tile", tuple(pos))
    for where in claimed:
        loose.remove(where)
    return claimed


def _link_portals(side: Side, grid: Grid, spec: MechanicsSpec) -> dict[Located, Position]:
    numbered: dict[str, list[Position]] = defaultdict(list)
    loose: list[Position] = []
    for pos, tile in grid.cells():
        if tile.kind is not TileKind.PORTAL:
            continue
        if tile.group is not None:
            numbered[tile.group].append(pos)
        else:
            loose.append(pos)

    links: dict[Located, Position] = {}

    def pair(a: Position, b: Position) -> None:
        links[Located(side, a)] = b
        links[Located(side, b)] = a

    for pair_id, ends in numbered.items():
        if len(ends) > 2:
            raise InvalidLevel(
                f"Portal {pair_id} appears {len(ends)} times in the {side} grid"
            )
        if len(ends) == 1:
            logger.warning("Portal %s in the %s grid has no partner", pair_id, side)
            continue
        pair(ends[0], ends[1])

    for entry in spec.portals:
        if entry.side not in (None, side):
            continue
        if entry.pos in loose and entry.target in loose:
            loose.remove(entry.pos)
            loose.remove(entry.target)
            pair(entry.pos, entry.target)

    for a, b in zip(loose[::2], loose[1::2]):
        pair(a, b)
    if len(loose) % 2:
        logger.warning("Portal at %s in the %s grid has no partner", tuple(loose[-1]), side)

    return links

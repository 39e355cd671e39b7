"""Single-grid shortest-path hints."""

from __future__ import annotations

from collections import deque
from collections.abc import Set

from quantum_maze.engine.mechanics.index import MechanicsIndex
from quantum_maze.engine.mechanics.movement import can_enter
from quantum_maze.errors import NoPathFound
from quantum_maze.models.direction import Direction, Position, Side
from quantum_maze.models.grid import Grid


class HintOracle:
    """BFS over one grid with the switch groups frozen at their current value.

    The other grid and the atomicity rule are ignored, so a hint is
    advisory: the joint move it suggests may still be blocked.
    """

    @staticmethod
    def shortest_path(
        grid: Grid,
        mechanics: MechanicsIndex,
        side: Side,
        start: Position,
        goal: Position,
        activated: Set[str],
    ) -> list[Direction]:
        """Headings (in *side*'s own frame) from *start* to *goal*."""
        if start == goal:
            return []
        parents: dict[Position, tuple[Position, Direction] | None] = {start: None}
        frontier: deque[Position] = deque([start])
        while frontier:
            pos = frontier.popleft()
            for direction, nxt in grid.neighbors(pos):
                if not can_enter(grid, mechanics, side, nxt, direction, activated):
                    continue
                landing = mechanics.portal_target(side, nxt) or nxt
                if landing in parents:
                    continue
                parents[landing] = (pos, direction)
                if landing == goal:
                    return _unwind(parents, landing)
                frontier.append(landing)
        raise NoPathFound("No path found")

    @staticmethod
    def next_direction(
        grid: Grid,
        mechanics: MechanicsIndex,
        side: Side,
        start: Position,
        goal: Position,
        activated: Set[str],
    ) -> Direction:
        path = HintOracle.shortest_path(grid, mechanics, side, start, goal, activated)
        if not path:
            raise NoPathFound("Player is already on its goal")
        return path[0]


def _unwind(
    parents: dict[Position, tuple[Position, Direction] | None],
    pos: Position,
) -> list[Direction]:
    path: list[Direction] = []
    link = parents[pos]
    while link is not None:
        pos, direction = link
        path.append(direction)
        link = parents[pos]
    path.reverse()
    return path

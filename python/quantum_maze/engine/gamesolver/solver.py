"""Joint-state breadth-first PAR solver.

Searches the ``(left_pos, right_pos, sorted switch groups)`` graph with the
same mirroring and atomicity rules as the live engine, but straight off
the two grids: no ``GamePlay`` instance is built, so level tooling can
run it before anyone plays the level.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass

from quantum_maze.config import SolverOptions
from quantum_maze.engine.gamestate.state import JointState
from quantum_maze.engine.mechanics.index import MechanicsIndex
from quantum_maze.engine.mechanics.movement import joint_step
from quantum_maze.errors import NoSolution, SearchBudgetExceeded, SearchCancelled
from quantum_maze.models.direction import Direction, Position
from quantum_maze.models.grid import Grid
from quantum_maze.models.level import Level

logger = logging.getLogger(__name__)

_StateKey = tuple[Position, Position, tuple[str, ...]]


@dataclass(frozen=True)
class SolveResult:
    optimal_moves: int
    path: tuple[Direction, ...]
    iterations: int
    visited: int


class Solver:
    """Stateless solver; all methods are static."""

    @staticmethod
    def solve(
        left_grid: Grid,
        right_grid: Grid,
        mechanics: MechanicsIndex | None = None,
        options: SolverOptions | None = None,
        cancel: threading.Event | None = None,
    ) -> SolveResult:
        """Return the optimal move count and one optimal input sequence.

        Raises ``MissingAnchor`` if either grid lacks a Start or Goal,
        ``NoSolution`` if the joint goal is unreachable and
        ``SearchBudgetExceeded`` if the iteration ceiling is hit first.
        """
        start = JointState(left_grid.start, right_grid.start)
        return Solver.solve_from(left_grid, right_grid, start, mechanics, options, cancel)

    @staticmethod
    def solve_level(
        level: Level,
        options: SolverOptions | None = None,
        cancel: threading.Event | None = None,
    ) -> SolveResult:
        mechanics = MechanicsIndex.build(level.grid_left, level.grid_right, level.mechanics)
        return Solver.solve(level.grid_left, level.grid_right, mechanics, options, cancel)

    @staticmethod
    def solve_from(
        left_grid: Grid,
        right_grid: Grid,
        start: JointState,
        mechanics: MechanicsIndex | None = None,
        options: SolverOptions | None = None,
        cancel: threading.Event | None = None,
    ) -> SolveResult:
        """Search from an arbitrary joint state (moves counted from *start*)."""
        options = options or SolverOptions()
        if mechanics is None:
            mechanics = MechanicsIndex.build(left_grid, right_grid)
        left_goal = left_grid.goal
        right_goal = right_grid.goal

        start_key: _StateKey = start.key
        parents: dict[_StateKey, tuple[_StateKey, Direction] | None] = {start_key: None}
        frontier: deque[_StateKey] = deque([start_key])
        iterations = 0

        while frontier:
            iterations += 1
            if iterations > options.max_iterations:
                raise SearchBudgetExceeded(options.max_iterations, len(frontier), len(parents))
            if (
                cancel is not None
                and (iterations - 1) % options.cancel_check_interval == 0
                and cancel.is_set()
            ):
                raise SearchCancelled(f"Search cancelled after {iterations - 1} iterations")

            key = frontier.popleft()
            left, right, switches = key

            if left == left_goal and right == right_goal:
                path = _walk_back(parents, key)
                logger.info(
                    "Optimal solution found in %d moves (%d iterations, %d states)",
                    len(path), iterations, len(parents),
                )
                return SolveResult(
                    optimal_moves=len(path),
                    path=path,
                    iterations=iterations,
                    visited=len(parents),
                )

            activated = frozenset(switches)
            for direction in Direction:
                step = joint_step(
                    left_grid, right_grid, mechanics, left, right, direction, activated
                )
                if not step.accepted:
                    continue
                nxt: _StateKey = (step.left, step.right, tuple(sorted(step.activated)))
                if nxt not in parents:
                    parents[nxt] = (key, direction)
                    frontier.append(nxt)

        raise NoSolution(
            f"No valid path found from start to goal ({len(parents)} states explored)"
        )


def _walk_back(
    parents: dict[_StateKey, tuple[_StateKey, Direction] | None],
    key: _StateKey,
) -> tuple[Direction, ...]:
    path: list[Direction] = []
    link = parents[key]
    while link is not None:
        key, direction = link
        path.append(direction)
        link = parents[key]
    path.reverse()
    return tuple(path)

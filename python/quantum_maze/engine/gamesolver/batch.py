"""PAR calculation for many levels, optionally across worker processes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

from quantum_maze.config import SolverOptions
from quantum_maze.engine.gamesolver.solver import Solver
from quantum_maze.errors import QuantumMazeError
from quantum_maze.models.direction import Direction
from quantum_maze.models.level import Level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParReport:
    """Outcome of one PAR calculation; failures are carried as data."""

    level_id: int
    name: str
    declared_par: int
    optimal_moves: int | None = None
    path: tuple[Direction, ...] = ()
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def matches_declared(self) -> bool:
        return self.optimal_moves == self.declared_par


def par_report(level: Level, options: SolverOptions | None = None) -> ParReport:
    try:
        result = Solver.solve_level(level, options)
    except QuantumMazeError as exc:
        logger.warning("PAR calculation failed for level %s: %s", level.level_id, exc)
        return ParReport(
            level_id=level.level_id,
            name=level.name,
            declared_par=level.par_moves,
            error=str(exc),
            error_kind=type(exc).__name__,
        )
    return ParReport(
        level_id=level.level_id,
        name=level.name,
        declared_par=level.par_moves,
        optimal_moves=result.optimal_moves,
        path=result.path,
    )


def solve_levels(
    levels: Sequence[Level],
    options: SolverOptions | None = None,
    max_workers: int | None = 1,
) -> list[ParReport]:
    """Compute a ``ParReport`` per level, in input order.

    ``max_workers=1`` runs in-process; anything else fans out to a
    ``ProcessPoolExecutor`` (``None`` lets it pick the worker count).
    """
    options = options or SolverOptions()
    if max_workers == 1 or len(levels) <= 1:
        return [par_report(level, options) for level in levels]
    with ProcessPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(par_report, levels, [options] * len(levels)))

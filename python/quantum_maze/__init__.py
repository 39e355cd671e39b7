"""Synchronized dual-maze puzzle engine and joint-state PAR solver."""

from quantum_maze.engine import (
    GamePlay,
    GameStatus,
    JointState,
    MechanicsIndex,
    MoveOutcome,
    MoveStatus,
    SolveResult,
    Solver,
    solve_levels,
)
from quantum_maze.models import Direction, Grid, Level, Position, Side, load_levels

__all__ = [
    "Direction",
    "GamePlay",
    "GameStatus",
    "Grid",
    "JointState",
    "Level",
    "MechanicsIndex",
    "MoveOutcome",
    "MoveStatus",
    "Position",
    "Side",
    "SolveResult",
    "Solver",
    "load_levels",
    "solve_levels",
]

__version__ = "0.1.0"

from quantum_maze.engine.gameplay import GamePlay, GameStats, MoveOutcome, MoveStatus
from quantum_maze.engine.gamesolver import HintOracle, ParReport, SolveResult, Solver, solve_levels
from quantum_maze.engine.gamestate import GameStatus, JointState, MoveRecord
from quantum_maze.engine.mechanics import MechanicsIndex

__all__ = [
    "GamePlay",
    "GameStats",
    "GameStatus",
    "HintOracle",
    "JointState",
    "MechanicsIndex",
    "MoveOutcome",
    "MoveRecord",
    "MoveStatus",
    "ParReport",
    "SolveResult",
    "Solver",
    "solve_levels",
]

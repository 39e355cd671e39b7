from quantum_maze.engine.gamesolver.batch import ParReport, par_report, solve_levels
from quantum_maze.engine.gamesolver.hint import HintOracle
from quantum_maze.engine.gamesolver.solver import SolveResult, Solver

__all__ = ["HintOracle", "ParReport", "SolveResult", "Solver", "par_report", "solve_levels"]

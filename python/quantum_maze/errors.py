"""Exception hierarchy for the maze engine and PAR solver.

A blocked move is *not* an error; see ``MoveOutcome``.
"""

from __future__ import annotations


class QuantumMazeError(Exception):
    """Base class for every recoverable engine or solver failure."""


class InvalidDirection(QuantumMazeError, ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid direction: {value!r}")
        self.value = value


class InvalidLevel(QuantumMazeError, ValueError):
    """The level record is malformed (shape, tile codes, pairing)."""


class MissingAnchor(InvalidLevel):
    """A grid has no Start or no Goal tile."""


class NothingToUndo(QuantumMazeError):
    pass


class NothingToRedo(QuantumMazeError):
    pass


class NoPathFound(QuantumMazeError):
    pass


class SolverError(QuantumMazeError):
    pass


class NoSolution(SolverError):
    """The reachable joint state space holds no winning state."""


class SearchBudgetExceeded(SolverError):
    """The iteration ceiling was hit; solvability is unknown."""

    def __init__(self, iterations: int, frontier: int, visited: int) -> None:
        super().__init__(
            f"Max iterations ({iterations}) reached. "
            f"Queue size: {frontier}, Visited: {visited}"
        )
        self.iterations = iterations
        self.frontier = frontier
        self.visited = visited


class SearchCancelled(SolverError):
    pass

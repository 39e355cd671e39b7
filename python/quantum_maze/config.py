"""Tunable constants and solver options."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PAR_MOVES = 50
DEFAULT_MAX_ITERATIONS = 10_000

# Cancellation is polled once every this many dequeues.
CANCEL_CHECK_INTERVAL = 256

# Star rating: moves <= par * factor earns the stars at that index.
STAR_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (1.0, 3),
    (1.5, 2),
    (2.0, 1),
)

# Level-editor color variants for switches and doors.
VARIANT_NAMES: tuple[str, ...] = ("yellow", "cyan", "pink")


@dataclass(frozen=True)
class SolverOptions:
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    cancel_check_interval: int = CANCEL_CHECK_INTERVAL

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be positive")
        if self.cancel_check_interval < 1:
            raise ValueError("cancel_check_interval must be positive")

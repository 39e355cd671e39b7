"""Star rating against a level's PAR."""

from __future__ import annotations

from quantum_maze.config import STAR_THRESHOLDS


def calculate_stars(moves: int, par: int) -> int:
    """Return 0-3 stars for finishing in *moves* on a level with *par*."""
    for factor, stars in STAR_THRESHOLDS:
        if moves <= par * factor:
            return stars
    return 0

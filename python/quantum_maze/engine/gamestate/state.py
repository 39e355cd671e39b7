"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from enum import StrEnum

from quantum_maze.models.direction import Position


class GameStatus(StrEnum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    WON = "won"


@dataclass(frozen=True)
class JointState:
    """Both player positions, the active switch groups and the move count."""

    left_pos: Position
    right_pos: Position
    activated_switches: frozenset[str] = field(default_factory=frozenset)
    move_count: int = 0

    @property
    def key(self) -> tuple[Position, Position, tuple[str, ...]]:
        """Search key: activation order does not matter, only membership."""
        return self.left_pos, self.right_pos, tuple(sorted(self.activated_switches))

    def advanced(
        self,
        left_pos: Position,
        right_pos: Position,
        activated_switches: frozenset[str],
    ) -> JointState:
        return replace(
            self,
            left_pos=left_pos,
            right_pos=right_pos,
            activated_switches=activated_switches,
            move_count=self.move_count + 1,
        )

    def to_dict(self) -> dict:
        return {
            "leftPos": self.left_pos.to_dict(),
            "rightPos": self.right_pos.to_dict(),
            "activatedSwitches": sorted(self.activated_switches),
            "moveCount": self.move_count,
        }


class GameState:
    """Holds the live joint state, the session status and elapsed time."""

    def __init__(self, joint: JointState) -> None:
        self.joint = joint
        self.status = GameStatus.PLAYING
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- status ---------------------------------------------------------------

    @property
    def moves(self) -> int:
        return self.joint.move_count

    @property
    def is_playing(self) -> bool:
        return self.status is GameStatus.PLAYING

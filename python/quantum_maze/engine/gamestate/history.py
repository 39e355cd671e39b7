"""Undo/redo stacks and the append-only move log."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from quantum_maze.engine.gamestate.state import JointState
from quantum_maze.errors import NothingToRedo, NothingToUndo
from quantum_maze.models.direction import Direction, Position


class StateHistory:
    """Linear undo/redo history of ``JointState`` snapshots."""

    def __init__(self) -> None:
        self._undo: list[JointState] = []
        self._redo: list[JointState] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def record(self, previous: JointState) -> None:
        """Push the pre-move state; a new move invalidates redo history."""
        self._undo.append(previous)
        self._redo.clear()

    def undo(self, current: JointState) -> JointState:
        if not self._undo:
            raise NothingToUndo("No moves to undo")
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: JointState) -> JointState:
        if not self._redo:
            raise NothingToRedo("No moves to redo")
        self._undo.append(current)
        return self._redo.pop()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()


@dataclass(frozen=True)
class MoveRecord:
    move_number: int
    input_direction: Direction
    mirrored_direction: Direction
    left_from: Position
    left_to: Position
    right_from: Position
    right_to: Position
    timestamp: float

    def to_dict(self) -> dict:
        return {
            "moveNumber": self.move_number,
            "direction": self.input_direction.value,
            "mirroredDirection": self.mirrored_direction.value,
            "leftFrom": self.left_from.to_dict(),
            "leftTo": self.left_to.to_dict(),
            "rightFrom": self.right_from.to_dict(),
            "rightTo": self.right_to.to_dict(),
            "timestamp": self.timestamp,
        }


class MoveLog:
    """Every accepted move in order, including ones later undone."""

    def __init__(self) -> None:
        self._records: list[MoveRecord] = []

    def append(self, record: MoveRecord) -> None:
        self._records.append(record)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MoveRecord]:
        return iter(self._records)

    @property
    def records(self) -> tuple[MoveRecord, ...]:
        return tuple(self._records)

    def last(self, n: int) -> tuple[MoveRecord, ...]:
        return tuple(self._records[-n:]) if n > 0 else ()

    def export(self) -> list[dict]:
        return [record.to_dict() for record in self._records]

    def ghost_trail(self) -> list[tuple[Position, Position]]:
        """Position trail for ghost playback, starting with the first move's origin."""
        if not self._records:
            return []
        first = self._records[0]
        trail = [(first.left_from, first.right_from)]
        trail.extend((r.left_to, r.right_to) for r in self._records)
        return trail

"""Core gameplay logic: processes joint moves and checks the win condition."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from quantum_maze.config import SolverOptions
from quantum_maze.engine.gamesolver.hint import HintOracle
from quantum_maze.engine.gamesolver.solver import Solver
from quantum_maze.engine.gamestate import (
    GameState,
    GameStatus,
    JointState,
    MoveLog,
    MoveRecord,
    StateHistory,
)
from quantum_maze.engine.mechanics import MechanicsIndex, joint_step
from quantum_maze.errors import NoPathFound, NoSolution
from quantum_maze.models.direction import Direction, Position, Side
from quantum_maze.models.level import Level
from quantum_maze.models.scoring import calculate_stars

logger = logging.getLogger(__name__)


class MoveStatus(StrEnum):
    ACCEPTED = "accepted"
    BLOCKED = "blocked"
    NOT_PLAYING = "not_playing"


@dataclass(frozen=True)
class MoveOutcome:
    status: MoveStatus
    reason: str
    state: JointState | None
    won: bool = False
    blocked: tuple[Side, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.status is MoveStatus.ACCEPTED


@dataclass(frozen=True)
class GameStats:
    move_count: int
    par_moves: int
    stars: int
    elapsed_time: int
    status: GameStatus
    can_undo: bool
    can_redo: bool
    active_switches: tuple[str, ...]


class GamePlay:
    """Orchestrates a single dual-maze session.

    One input drives both players; the right player's horizontal input is
    mirrored.  A move applies only if both players can make it.
    """

    def __init__(self) -> None:
        self.level: Level | None = None
        self.mechanics: MechanicsIndex | None = None
        self.state: GameState | None = None
        self.history = StateHistory()
        self.log = MoveLog()
        self._start: tuple[Position, Position] | None = None
        self._goal: tuple[Position, Position] | None = None

    @classmethod
    def from_level(cls, level: Level) -> GamePlay:
        game = cls()
        game.load_level(level)
        return game

    @classmethod
    def replay(cls, level: Level, inputs: Iterable[Direction | str]) -> GamePlay:
        """Load *level* and feed *inputs* through it, ignoring blocked moves."""
        game = cls.from_level(level)
        for direction in inputs:
            game.apply_input(direction)
        return game

    # -- lifecycle ------------------------------------------------------------

    def load_level(self, level: Level) -> None:
        level.validate()
        self.level = level
        self.mechanics = MechanicsIndex.build(level.grid_left, level.grid_right, level.mechanics)
        self._start = (level.grid_left.start, level.grid_right.start)
        self._goal = (level.grid_left.goal, level.grid_right.goal)
        self.reset()
        logger.info("Level loaded: %s", level.name or f"#{level.level_id}")

    def reset(self) -> None:
        """Put both players back on their starts and forget all history."""
        if self._start is None:
            return
        self.state = GameState(JointState(*self._start))
        self.history.clear()
        self.log.clear()

    def pause(self) -> None:
        if self.state is not None and self.state.status is GameStatus.PLAYING:
            self.state.status = GameStatus.PAUSED
            self.state.pause()

    def resume(self) -> None:
        """Return to play; a restore made while paused may have reached the goals."""
        if self.state is not None and self.state.status is GameStatus.PAUSED:
            self.state.status = GameStatus.PLAYING
            self.state.resume()
            self._update_status()

    # -- movement -------------------------------------------------------------

    def apply_input(self, direction: Direction | str) -> MoveOutcome:
        """Move both players; the right one in the mirrored direction.

        Raises ``InvalidDirection`` for anything that is not a direction.
        A blocked move or an engine that is not playing is reported in the
        returned outcome, never raised.
        """
        direction = Direction.parse(direction)

        if self.state is None or not self.state.is_playing:
            return MoveOutcome(
                status=MoveStatus.NOT_PLAYING,
                reason="Game not in playing state",
                state=self.state.joint if self.state is not None else None,
                won=self.is_won,
            )

        current = self.state.joint
        step = joint_step(
            self.level.grid_left,
            self.level.grid_right,
            self.mechanics,
            current.left_pos,
            current.right_pos,
            direction,
            current.activated_switches,
        )

        if not step.accepted:
            sides = " and ".join(side.value for side in step.blocked)
            return MoveOutcome(
                status=MoveStatus.BLOCKED,
                reason=f"{sides.capitalize()} player blocked",
                state=current,
                blocked=step.blocked,
            )

        self.history.record(current)
        after = current.advanced(step.left, step.right, step.activated)
        self.state.joint = after

        self.log.append(
            MoveRecord(
                move_number=after.move_count,
                input_direction=direction,
                mirrored_direction=direction.mirrored(),
                left_from=current.left_pos,
                left_to=after.left_pos,
                right_from=current.right_pos,
                right_to=after.right_pos,
                timestamp=time.time(),
            )
        )

        won = self._update_status()
        if won:
            logger.info("Level solved in %d moves", after.move_count)
        return MoveOutcome(
            status=MoveStatus.ACCEPTED,
            reason="Move executed",
            state=after,
            won=won,
        )

    def move(self, direction: Direction | str) -> bool:
        """Apply *direction* and return True if the move was accepted."""
        return self.apply_input(direction).accepted

    # -- history --------------------------------------------------------------

    def undo(self) -> JointState:
        """Restore the state before the last accepted move.

        Raises ``NothingToUndo`` if there is none.  The move log is kept.
        """
        current = self.state.joint if self.state is not None else None
        restored = self.history.undo(current)
        self._restore(restored)
        return restored

    def redo(self) -> JointState:
        current = self.state.joint if self.state is not None else None
        restored = self.history.redo(current)
        self._restore(restored)
        return restored

    def _restore(self, joint: JointState) -> None:
        self.state.joint = joint
        if self.state.status is not GameStatus.PAUSED:
            self._update_status()

    def _update_status(self) -> bool:
        won = self._at_goal(self.state.joint)
        if won and self.state.status is not GameStatus.WON:
            self.state.status = GameStatus.WON
            self.state.pause()
        elif not won and self.state.status is GameStatus.WON:
            self.state.status = GameStatus.PLAYING
            self.state.resume()
        return won

    # -- queries --------------------------------------------------------------

    @property
    def status(self) -> GameStatus:
        return self.state.status if self.state is not None else GameStatus.IDLE

    @property
    def joint(self) -> JointState | None:
        return self.state.joint if self.state is not None else None

    @property
    def is_won(self) -> bool:
        return self.status is GameStatus.WON

    def _at_goal(self, joint: JointState) -> bool:
        return (joint.left_pos, joint.right_pos) == self._goal

    def hint(self, joint: bool = False, options: SolverOptions | None = None) -> Direction:
        """Suggest the next input.

        By default this is the first step of the left player's shortest
        path with doors frozen as they are now, ignoring the right grid;
        the suggested move may still be blocked.  ``joint=True`` runs the
        full joint solver from the live state instead.
        """
        if self.state is None:
            raise NoPathFound("No level loaded")
        current = self.state.joint
        if joint:
            try:
                result = Solver.solve_from(
                    self.level.grid_left,
                    self.level.grid_right,
                    current,
                    self.mechanics,
                    options,
                )
            except NoSolution as exc:
                raise NoPathFound(str(exc)) from exc
            if not result.path:
                raise NoPathFound("Both players are already on their goals")
            return result.path[0]
        return HintOracle.next_direction(
            self.level.grid_left,
            self.mechanics,
            Side.LEFT,
            current.left_pos,
            self._goal[0],
            current.activated_switches,
        )

    def stats(self) -> GameStats:
        if self.state is None:
            return GameStats(0, 0, 0, 0, GameStatus.IDLE, False, False, ())
        moves = self.state.moves
        par = self.level.par_moves
        return GameStats(
            move_count=moves,
            par_moves=par,
            stars=calculate_stars(moves, par),
            elapsed_time=int(self.state.elapsed_time),
            status=self.state.status,
            can_undo=self.history.can_undo,
            can_redo=self.history.can_redo,
            active_switches=tuple(sorted(self.state.joint.activated_switches)),
        )

    def export_replay(self) -> list[dict]:
        return self.log.export()

    def ghost_trail(self) -> list[tuple[Position, Position]]:
        return self.log.ghost_trail()

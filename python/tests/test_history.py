"""Undo/redo and the move log."""

from __future__ import annotations

import pytest

from quantum_maze.engine.gameplay import GamePlay, MoveStatus
from quantum_maze.engine.gamestate import GameStatus, JointState, MoveLog, StateHistory
from quantum_maze.errors import NothingToRedo, NothingToUndo
from quantum_maze.models import Direction, Position


def _state(moves: int) -> JointState:
    return JointState(Position(0, moves), Position(0, 0), move_count=moves)


def test_history_stacks() -> None:
    history = StateHistory()
    with pytest.raises(NothingToUndo):
        history.undo(_state(0))

    history.record(_state(0))
    history.record(_state(1))
    assert history.undo(_state(2)) == _state(1)
    assert history.can_redo
    assert history.redo(_state(1)) == _state(2)
    assert not history.can_redo

    history.undo(_state(2))
    history.record(_state(1))
    assert not history.can_redo
    with pytest.raises(NothingToRedo):
        history.redo(_state(2))


def test_undo_restores_previous_snapshot(switch_door_level) -> None:
    game = GamePlay.from_level(switch_door_level)
    start = game.joint
    game.move(Direction.RIGHT)
    after_first = game.joint
    game.move(Direction.DOWN)

    assert game.undo() == after_first
    assert game.joint.activated_switches == {"1"}
    assert game.undo() == start
    assert game.joint.move_count == 0
    with pytest.raises(NothingToUndo):
        game.undo()


def test_redo_reapplies_without_logging(switch_door_level) -> None:
    game = GamePlay.from_level(switch_door_level)
    game.move(Direction.RIGHT)
    after = game.joint
    game.undo()

    assert game.redo() == after
    assert len(game.log) == 1
    with pytest.raises(NothingToRedo):
        game.redo()


def test_new_move_discards_redo(switch_door_level) -> None:
    game = GamePlay.from_level(switch_door_level)
    game.move(Direction.RIGHT)
    game.undo()
    assert game.history.can_redo

    game.move(Direction.RIGHT)
    assert not game.history.can_redo
    with pytest.raises(NothingToRedo):
        game.redo()


def test_blocked_move_leaves_history_alone(make_game) -> None:
    game = make_game(["@#", "*."], ["*@", ".."])
    game.move(Direction.RIGHT)
    assert not game.history.can_undo
    with pytest.raises(NothingToUndo):
        game.undo()


def test_undo_out_of_a_win_resumes_play(make_game) -> None:
    game = make_game(["@.*"], ["*.@"])
    game.move(Direction.RIGHT)
    game.move(Direction.RIGHT)
    assert game.status is GameStatus.WON

    game.undo()
    assert game.status is GameStatus.PLAYING
    assert game.move(Direction.RIGHT)
    assert game.status is GameStatus.WON

    game.undo()
    game.redo()
    assert game.status is GameStatus.WON


def test_undo_while_paused_stays_paused(make_game) -> None:
    game = make_game(["@..*"], ["*..@"])
    game.move(Direction.RIGHT)
    game.pause()
    game.undo()
    assert game.status is GameStatus.PAUSED
    assert game.joint.move_count == 0


def test_redo_into_win_while_paused_is_won_on_resume(make_game) -> None:
    game = make_game(["@.*"], ["*.@"])
    game.move(Direction.RIGHT)
    game.move(Direction.RIGHT)
    game.undo()
    game.pause()
    game.redo()
    assert game.status is GameStatus.PAUSED

    game.resume()
    assert game.status is GameStatus.WON
    won = game.joint
    assert game.apply_input(Direction.LEFT).status is MoveStatus.NOT_PLAYING
    assert game.joint == won


def test_resume_without_win_keeps_playing(make_game) -> None:
    game = make_game(["@..*"], ["*..@"])
    game.pause()
    game.resume()
    assert game.status is GameStatus.PLAYING


def test_log_keeps_undone_moves(make_game) -> None:
    game = make_game(["@..*"], ["*..@"])
    game.move(Direction.RIGHT)
    game.move(Direction.RIGHT)
    game.undo()

    assert [r.move_number for r in game.log] == [1, 2]
    assert game.log.last(1)[0].left_to == (0, 2)
    assert game.log.last(0) == ()
    assert len(game.ghost_trail()) == 3


def test_empty_log() -> None:
    log = MoveLog()
    assert len(log) == 0
    assert log.export() == []
    assert log.ghost_trail() == []

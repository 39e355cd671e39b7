"""Hint oracle and the engine's hint entry point."""

from __future__ import annotations

import pytest

from quantum_maze.engine.gameplay import GamePlay
from quantum_maze.engine.gamesolver import HintOracle
from quantum_maze.engine.mechanics import MechanicsIndex
from quantum_maze.errors import NoPathFound
from quantum_maze.models import Direction, Grid, Position, Side


def _oracle_path(rows: list[str], activated=frozenset()) -> list[Direction]:
    grid = Grid.from_ascii(rows)
    mechanics = MechanicsIndex.build(grid, Grid.from_ascii(["." * grid.cols] * grid.rows))
    return HintOracle.shortest_path(grid, mechanics, Side.LEFT, grid.start, grid.goal, activated)


def test_locked_door_forces_a_detour() -> None:
    rows = ["@A*", ".#.", "a.."]
    assert _oracle_path(rows)[0] is Direction.DOWN
    assert len(_oracle_path(rows)) == 6
    assert _oracle_path(rows, {"1"}) == [Direction.RIGHT, Direction.RIGHT]


def test_portal_shortcut() -> None:
    assert _oracle_path(["@1.", "###", "1.*"]) == [Direction.RIGHT] * 3


def test_unreachable_goal() -> None:
    with pytest.raises(NoPathFound):
        _oracle_path(["@#*"])


def test_already_on_goal() -> None:
    grid = Grid.from_ascii(["@*"])
    mechanics = MechanicsIndex.build(grid, grid)
    here = Position(0, 0)
    assert HintOracle.shortest_path(grid, mechanics, Side.LEFT, here, here, set()) == []
    with pytest.raises(NoPathFound):
        HintOracle.next_direction(grid, mechanics, Side.LEFT, here, here, set())


def test_default_hint_follows_left_player(switch_door_level) -> None:
    game = GamePlay.from_level(switch_door_level)
    assert game.hint() is Direction.RIGHT
    game.move(Direction.RIGHT)
    assert game.hint() is Direction.DOWN


def test_default_hint_can_suggest_a_blocked_move(make_game) -> None:
    game = make_game(["@.*"], ["*#@"])
    suggestion = game.hint()
    assert suggestion is Direction.RIGHT
    assert not game.apply_input(suggestion).accepted

    with pytest.raises(NoPathFound):
        game.hint(joint=True)


def test_joint_hint_uses_the_solver(switch_door_level) -> None:
    game = GamePlay.from_level(switch_door_level)
    assert game.hint(joint=True) is Direction.RIGHT
    game.move(Direction.RIGHT)
    assert game.hint(joint=True) is Direction.DOWN


def test_joint_hint_after_win(make_game) -> None:
    game = make_game(["@*"], ["*@"])
    game.move(Direction.RIGHT)
    with pytest.raises(NoPathFound):
        game.hint(joint=True)


def test_hint_without_level() -> None:
    with pytest.raises(NoPathFound):
        GamePlay().hint()

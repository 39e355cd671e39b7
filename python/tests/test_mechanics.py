"""Switch/door linking and portal pairing."""

from __future__ import annotations

import logging

import pytest

from quantum_maze.engine.mechanics import MechanicsIndex
from quantum_maze.errors import InvalidLevel
from quantum_maze.models import Grid, Level, Position, Side
from quantum_maze.models.direction import Located
from quantum_maze.models.level import MechanicsSpec


def _index(left: list[str], right: list[str], spec: MechanicsSpec | None = None) -> MechanicsIndex:
    return MechanicsIndex.build(Grid.from_ascii(left), Grid.from_ascii(right), spec)


def test_numbered_switch_links_door_on_other_grid(switch_door_level) -> None:
    index = MechanicsIndex.build(switch_door_level.grid_left, switch_door_level.grid_right)
    assert index.switch_group(Side.LEFT, Position(0, 1)) == "1"
    assert index.door_group(Side.RIGHT, Position(1, 3)) == "1"
    assert index.doors_for("1") == frozenset({Located(Side.RIGHT, Position(1, 3))})
    assert not index.is_door_open(Side.RIGHT, Position(1, 3), set())
    assert index.is_door_open(Side.RIGHT, Position(1, 3), {"1"})


def test_color_variants_group_by_color(level_record) -> None:
    level = Level.from_dict(level_record("color-variant-5x5"))
    index = MechanicsIndex.build(level.grid_left, level.grid_right, level.mechanics)
    assert index.switch_group(Side.LEFT, Position(0, 1)) == "cyan"
    assert index.door_group(Side.RIGHT, Position(1, 3)) == "cyan"


def test_metadata_tags_untagged_tiles(level_record) -> None:
    level = Level.from_dict(level_record("metadata-linked-5x5"))
    index = MechanicsIndex.build(level.grid_left, level.grid_right, level.mechanics)
    assert index.switch_group(Side.LEFT, Position(0, 1)) == "switch_v2"
    assert index.door_group(Side.RIGHT, Position(1, 3)) == "switch_v2"


def test_scan_order_pairs_remaining_switches_and_doors() -> None:
    index = _index(["@S.S*"], ["X.X.@"])
    assert index.switch_group(Side.LEFT, Position(0, 1)) == "seq0"
    assert index.switch_group(Side.LEFT, Position(0, 3)) == "seq1"
    assert index.door_group(Side.RIGHT, Position(0, 0)) == "seq0"
    assert index.door_group(Side.RIGHT, Position(0, 2)) == "seq1"


def test_explicit_ids_take_priority_over_scan_order() -> None:
    index = _index(["@aS*"], ["XA.@"])
    assert index.switch_group(Side.LEFT, Position(0, 1)) == "1"
    assert index.door_group(Side.RIGHT, Position(0, 1)) == "1"
    # Only the untagged pair takes part in scan-order pairing.
    assert index.switch_group(Side.LEFT, Position(0, 2)) == "seq0"
    assert index.door_group(Side.RIGHT, Position(0, 0)) == "seq0"


def test_metadata_side_restricts_the_match() -> None:
    spec = MechanicsSpec.from_dict(
        {"switches": [{"id": "blue", "pos": {"row": 0, "col": 1}, "side": "right"}]}
    )
    index = _index(["@S*"], ["*S@"], spec)
    assert index.switch_group(Side.RIGHT, Position(0, 1)) == "blue"
    assert index.switch_group(Side.LEFT, Position(0, 1)) != "blue"


def test_metadata_variant_without_id() -> None:
    spec = MechanicsSpec.from_dict(
        {
            "switches": [{"pos": {"row": 0, "col": 1}, "variant": 1}],
            "doors": [{"pos": {"row": 0, "col": 1}, "switchId": "cyan", "side": "right"}],
        }
    )
    index = _index(["@S*"], ["*X@"], spec)
    assert index.switch_group(Side.LEFT, Position(0, 1)) == "cyan"
    assert index.door_group(Side.RIGHT, Position(0, 1)) == "cyan"


def test_door_without_switch_stays_locked(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        index = _index(["@A*"], ["*.@"])
    assert "stay locked" in caplog.text
    assert index.groups == frozenset()
    assert not index.is_door_open(Side.LEFT, Position(0, 1), set())


def test_numbered_portals_are_symmetric() -> None:
    index = _index(["1.@1*"], ["....."])
    assert index.portal_target(Side.LEFT, Position(0, 0)) == (0, 3)
    assert index.portal_target(Side.LEFT, Position(0, 3)) == (0, 0)
    assert index.portal_target(Side.RIGHT, Position(0, 0)) is None


def test_portals_pair_within_a_single_grid(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        index = _index(["1..", "..."], ["...", "..1"])
    assert index.portal_to_target == {}
    assert "no partner" in caplog.text


def test_untagged_portals_pair_in_scan_order() -> None:
    index = _index(["O.O.O.O"], ["......."])
    assert index.portal_target(Side.LEFT, Position(0, 0)) == (0, 2)
    assert index.portal_target(Side.LEFT, Position(0, 4)) == (0, 6)


def test_metadata_portals_override_scan_order() -> None:
    spec = MechanicsSpec.from_dict(
        {
            "portals": [
                {"pos": {"row": 0, "col": 0}, "target": {"row": 0, "col": 4}},
                {"pos": {"row": 0, "col": 4}, "target": {"row": 0, "col": 0}},
            ]
        }
    )
    index = _index(["O.O.O"], ["....."], spec)
    assert index.portal_target(Side.LEFT, Position(0, 0)) == (0, 4)
    assert index.portal_target(Side.LEFT, Position(0, 4)) == (0, 0)
    assert index.portal_target(Side.LEFT, Position(0, 2)) is None


def test_three_portals_with_one_number_is_invalid() -> None:
    with pytest.raises(InvalidLevel):
        _index(["1.1.1"], ["....."])


def test_plain_switch_does_not_join_variant_door_group(caplog) -> None:
    left = Grid.from_codes([[3, 4, 2]])
    right = Grid.from_codes([[2, {"type": 5, "variant": 0}, 3]])
    with caplog.at_level(logging.WARNING):
        index = MechanicsIndex.build(left, right)
    assert index.switch_group(Side.LEFT, Position(0, 1)) is None
    assert index.door_group(Side.RIGHT, Position(0, 1)) == "yellow"
    assert index.groups == frozenset()
    assert "stay locked" in caplog.text

from __future__ import annotations

import json
from pathlib import Path

import pytest

from quantum_maze.engine.gameplay import GamePlay
from quantum_maze.models.level import Level

FIXTURES_DIR = Path(__file__).resolve().parent.parent.parent / "fixtures"
LEVELS_FILE = FIXTURES_DIR / "levels.json"


def _records() -> list[dict]:
    with open(LEVELS_FILE) as f:
        return json.load(f)


@pytest.fixture
def levels_file() -> Path:
    return LEVELS_FILE


@pytest.fixture
def level_record():
    """Look up a fixture level record by its ``id``."""
    records = {r["id"]: r for r in _records()}

    def _get(record_id: str) -> dict:
        return json.loads(json.dumps(records[record_id]))

    return _get


@pytest.fixture
def switch_door_level(level_record) -> Level:
    return Level.from_dict(level_record("switch-door-5x5"))


@pytest.fixture
def make_game():
    """Build a ``GamePlay`` from two text layouts."""

    def _make(left: list[str], right: list[str], **kwargs) -> GamePlay:
        return GamePlay.from_level(Level.from_layout(left, right, **kwargs))

    return _make

"""
出拳类型测试
Move Tests
"""
import random

import pytest

from rps_camera.game.game_logic import Move, MoveSelector, FixedMoveSelector


@pytest.mark.parametrize("label, expected", [
    ("Rock", Move.ROCK),
    ("PAPER", Move.PAPER),
    (" scissors ", Move.SCISSORS),
    ("rock\n", Move.ROCK),
    ("Lizard", Move.UNDEFINED),
    ("", Move.UNDEFINED),
    (None, Move.UNDEFINED),
])
def test_from_label(label, expected):
    assert Move.from_label(label) == expected


def test_from_label_with_aliases():
    aliases = {"Closed_Fist": "Rock", "open_palm": "paper"}
    assert Move.from_label("closed_fist", aliases) == Move.ROCK
    assert Move.from_label("Open_Palm", aliases) == Move.PAPER
    assert Move.from_label("Victory", aliases) == Move.UNDEFINED
    # 别名不影响标准名称
    assert Move.from_label("Scissors", aliases) == Move.SCISSORS


def test_asset_names():
    assert Move.ROCK.asset_name == "rock"
    assert Move.PAPER.asset_name == "paper"
    assert Move.SCISSORS.asset_name == "scissor"
    assert Move.UNDEFINED.asset_name is None


def test_playable_excludes_undefined():
    assert Move.playable() == (Move.ROCK, Move.PAPER, Move.SCISSORS)
    assert all(move.is_defined for move in Move.playable())
    assert not Move.UNDEFINED.is_defined


def test_move_selector_only_chooses_playable_moves():
    selector = MoveSelector(seed=42)
    chosen = {selector.choose() for _ in range(200)}
    assert chosen == set(Move.playable())


def test_move_selector_is_reproducible_with_seed():
    selector = MoveSelector(seed=7)
    rng = random.Random(7)
    expected = [rng.choice(Move.playable()) for _ in range(10)]
    assert [selector.choose() for _ in range(10)] == expected


def test_fixed_move_selector():
    assert FixedMoveSelector(Move.PAPER).choose() == Move.PAPER
    with pytest.raises(ValueError):
        FixedMoveSelector(Move.UNDEFINED)

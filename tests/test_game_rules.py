"""
游戏规则测试
Game Rules Tests
"""
import pytest

from rps_camera.game.game_logic import Move, Outcome, GameRules, judge


@pytest.mark.parametrize("player, machine, expected", [
    (Move.ROCK, Move.SCISSORS, Outcome.WIN),
    (Move.PAPER, Move.ROCK, Outcome.WIN),
    (Move.SCISSORS, Move.PAPER, Outcome.WIN),
    (Move.ROCK, Move.PAPER, Outcome.LOSE),
    (Move.PAPER, Move.SCISSORS, Outcome.LOSE),
    (Move.SCISSORS, Move.ROCK, Outcome.LOSE),
    (Move.ROCK, Move.ROCK, Outcome.DRAW),
    (Move.PAPER, Move.PAPER, Outcome.DRAW),
    (Move.SCISSORS, Move.SCISSORS, Outcome.DRAW),
])
def test_judge_table(player, machine, expected):
    assert GameRules.judge(player, machine) == expected


@pytest.mark.parametrize("move", list(Move))
def test_undefined_is_always_invalid(move):
    """任一方未识别时无效，包括双方都未识别"""
    assert judge(Move.UNDEFINED, move) == Outcome.INVALID
    assert judge(move, Move.UNDEFINED) == Outcome.INVALID


def test_judge_is_antisymmetric():
    for player in Move.playable():
        for machine in Move.playable():
            forward = judge(player, machine)
            backward = judge(machine, player)
            if forward == Outcome.WIN:
                assert backward == Outcome.LOSE
            elif forward == Outcome.DRAW:
                assert backward == Outcome.DRAW


def test_outcome_status_text():
    assert Outcome.WIN.status_text == "Win"
    assert str(Outcome.INVALID) == "Invalid"

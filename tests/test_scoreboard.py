"""
比分板测试
Scoreboard Tests
"""
import pytest

from rps_camera.game.game_logic import Scoreboard, RoundRecord, Move, Outcome


def _record(round_id, outcome, player=Move.ROCK, machine=Move.SCISSORS):
    return RoundRecord(round_id=round_id, player_move=player, machine_move=machine, outcome=outcome)


def test_statistics_count_each_outcome():
    scoreboard = Scoreboard()
    for round_id, outcome in enumerate([Outcome.WIN, Outcome.WIN, Outcome.LOSE,
                                        Outcome.DRAW, Outcome.INVALID], start=1):
        scoreboard.record(_record(round_id, outcome))

    stats = scoreboard.get_statistics()
    assert stats.total_rounds == 5
    assert (stats.wins, stats.losses, stats.draws, stats.invalid_rounds) == (2, 1, 1, 1)
    # 无效回合不计入胜率
    assert stats.get_win_rate() == pytest.approx(0.5)


def test_statistics_are_a_copy():
    scoreboard = Scoreboard()
    stats = scoreboard.get_statistics()
    stats.wins = 10
    assert scoreboard.get_statistics().wins == 0


def test_win_rate_without_valid_rounds():
    scoreboard = Scoreboard()
    scoreboard.record(_record(1, Outcome.INVALID, player=Move.UNDEFINED))
    assert scoreboard.get_statistics().get_win_rate() == 0.0


def test_history_limit():
    scoreboard = Scoreboard(history_limit=2)
    for round_id in (1, 2, 3):
        scoreboard.record(_record(round_id, Outcome.WIN))

    assert [r.round_id for r in scoreboard.get_history()] == [2, 3]
    assert scoreboard.get_last_record().round_id == 3
    assert scoreboard.get_statistics().total_rounds == 3


def test_reset():
    scoreboard = Scoreboard()
    scoreboard.record(_record(1, Outcome.LOSE))
    scoreboard.reset()

    assert scoreboard.get_statistics().total_rounds == 0
    assert scoreboard.get_history() == []
    assert scoreboard.get_last_record() is None


def test_record_to_dict():
    data = _record(4, Outcome.WIN).to_dict()
    assert data['round_id'] == 4
    assert data['player_move'] == "rock"
    assert data['machine_move'] == "scissors"
    assert data['outcome'] == "Win"
    assert 'timestamp' in data

"""
游戏逻辑模块
Game Logic Module
"""
from .move import Move
from .game_rules import GameRules, Outcome, judge
from .move_selector import MoveSelector, FixedMoveSelector
from .scoreboard import Scoreboard, RoundRecord, ScoreStatistics

__all__ = [
    'Move',
    'GameRules',
    'Outcome',
    'judge',
    'MoveSelector',
    'FixedMoveSelector',
    'Scoreboard',
    'RoundRecord',
    'ScoreStatistics'
]

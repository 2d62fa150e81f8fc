"""
游戏逻辑模块
Game Logic Module
"""
from .round_controller import RoundController, Round
from .countdown import CountdownTimer, ThreadedCountdownTimer
from .presentation import (
    RoundPresenter, QueuePresenter, UiUpdate, UiUpdateKind, outcome_text, OUTCOME_TEXTS
)
from .game_logic import (
    Move, GameRules, Outcome, judge, MoveSelector, FixedMoveSelector,
    Scoreboard, RoundRecord, ScoreStatistics
)
from .state_machine import RoundState, RoundStateMachine
from .gesture_recognition import (
    ClassificationResult, ClassifierError, FrameClassifier, ClassifierListener,
    FrameAnalyzer, ClassifierFactory
)

__all__ = [
    'RoundController',
    'Round',
    'CountdownTimer',
    'ThreadedCountdownTimer',
    'RoundPresenter',
    'QueuePresenter',
    'UiUpdate',
    'UiUpdateKind',
    'outcome_text',
    'OUTCOME_TEXTS',
    'Move',
    'GameRules',
    'Outcome',
    'judge',
    'MoveSelector',
    'FixedMoveSelector',
    'Scoreboard',
    'RoundRecord',
    'ScoreStatistics',
    'RoundState',
    'RoundStateMachine',
    'ClassificationResult',
    'ClassifierError',
    'FrameClassifier',
    'ClassifierListener',
    'FrameAnalyzer',
    'ClassifierFactory'
]

"""
比分记录
Scoreboard - 本次会话内的回合统计（仅内存，不持久化）
"""
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional
from .move import Move
from .game_rules import Outcome
from ...utils.logger import setup_logger

logger = setup_logger("RPS.Scoreboard")


@dataclass(frozen=True)
class RoundRecord:
    """已判定回合的记录"""
    round_id: int
    player_move: Move
    machine_move: Move
    outcome: Outcome
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'round_id': self.round_id,
            'player_move': self.player_move.value,
            'machine_move': self.machine_move.value,
            'outcome': self.outcome.value,
            'timestamp': self.timestamp.isoformat()
        }


@dataclass
class ScoreStatistics:
    """比分统计信息"""
    total_rounds: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    invalid_rounds: int = 0

    def get_win_rate(self) -> float:
        """
        获取玩家胜率（不计无效回合）

        Returns:
            float: 胜率（0.0-1.0）
        """
        valid_rounds = self.total_rounds - self.invalid_rounds
        if valid_rounds == 0:
            return 0.0
        return self.wins / valid_rounds

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'total_rounds': self.total_rounds,
            'wins': self.wins,
            'losses': self.losses,
            'draws': self.draws,
            'invalid_rounds': self.invalid_rounds,
            'win_rate': self.get_win_rate()
        }


class Scoreboard:
    """比分板，由回合控制器在判定后写入，界面线程读取"""

    def __init__(self, history_limit: Optional[int] = 100):
        """
        Args:
            history_limit: 保留的历史回合数，None 表示不限制
        """
        self.history_limit = history_limit
        self._statistics = ScoreStatistics()
        self._history: List[RoundRecord] = []
        self._lock = threading.Lock()

    def record(self, record: RoundRecord):
        """
        记录一个已判定的回合

        Args:
            record: 回合记录
        """
        with self._lock:
            stats = self._statistics
            stats.total_rounds += 1
            if record.outcome == Outcome.WIN:
                stats.wins += 1
            elif record.outcome == Outcome.LOSE:
                stats.losses += 1
            elif record.outcome == Outcome.DRAW:
                stats.draws += 1
            else:
                stats.invalid_rounds += 1

            self._history.append(record)
            if self.history_limit is not None and len(self._history) > self.history_limit:
                self._history.pop(0)

        logger.info(f"回合 {record.round_id}: 玩家={record.player_move}, "
                    f"机器={record.machine_move}, 结果={record.outcome}")

    def get_statistics(self) -> ScoreStatistics:
        """获取统计信息的副本"""
        with self._lock:
            return replace(self._statistics)

    def get_history(self) -> List[RoundRecord]:
        """获取回合历史"""
        with self._lock:
            return list(self._history)

    def get_last_record(self) -> Optional[RoundRecord]:
        """获取上一回合记录"""
        with self._lock:
            return self._history[-1] if self._history else None

    def reset(self):
        """清空比分"""
        with self._lock:
            self._statistics = ScoreStatistics()
            self._history.clear()
        logger.info("比分已重置")

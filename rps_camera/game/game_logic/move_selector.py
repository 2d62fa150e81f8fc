"""
机器出拳选择
Machine Move Selection
"""
import random
from typing import Optional
from .move import Move


class MoveSelector:
    """机器出拳选择器：在三种手势中均匀随机选择"""

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        """
        Args:
            rng: 随机数生成器（可选，便于测试注入）
            seed: 随机种子，仅在未提供 rng 时使用
        """
        self._rng = rng if rng is not None else random.Random(seed)

    def choose(self) -> Move:
        """随机选择一种出拳"""
        return self._rng.choice(Move.playable())


class FixedMoveSelector(MoveSelector):
    """总是返回固定出拳的选择器（演示与测试用）"""

    def __init__(self, move: Move):
        super().__init__()
        if not move.is_defined:
            raise ValueError("固定出拳必须是 ROCK、PAPER 或 SCISSORS")
        self.move = move

    def choose(self) -> Move:
        return self.move

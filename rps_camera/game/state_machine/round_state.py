"""
回合状态枚举
Round State Enumeration
"""
from enum import Enum, auto


class RoundState(Enum):
    """回合状态枚举"""
    IDLE = auto()              # 空闲，等待玩家开始
    COUNTING_DOWN = auto()     # 倒计时
    AWAITING_GESTURE = auto()  # 等待玩家手势
    JUDGED = auto()            # 已判定

    def __str__(self):
        return self.name

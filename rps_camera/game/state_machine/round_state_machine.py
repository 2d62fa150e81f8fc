"""
回合状态机
Round State Machine

只应由回合控制器的事件分发线程调用，本身不加锁。
"""
from typing import Dict, List
from .round_state import RoundState
from ...utils.logger import setup_logger

logger = setup_logger("RPS.RoundStateMachine")


class RoundStateMachine:
    """回合状态机类：按转换表检查并记录回合状态"""

    # 状态转换规则
    VALID_TRANSITIONS: Dict[RoundState, List[RoundState]] = {
        RoundState.IDLE: [RoundState.COUNTING_DOWN],
        RoundState.COUNTING_DOWN: [RoundState.AWAITING_GESTURE, RoundState.IDLE],
        RoundState.AWAITING_GESTURE: [RoundState.JUDGED, RoundState.IDLE],
        RoundState.JUDGED: [RoundState.COUNTING_DOWN, RoundState.IDLE],
    }

    def __init__(self, initial_state: RoundState = RoundState.IDLE):
        """
        初始化状态机

        Args:
            initial_state: 初始状态
        """
        self.current_state = initial_state
        logger.debug(f"回合状态机初始化，初始状态: {self.current_state}")

    def can_transition_to(self, state: RoundState) -> bool:
        """
        检查是否可以转换到指定状态

        Args:
            state: 目标状态

        Returns:
            bool: 是否可以转换
        """
        return state in self.VALID_TRANSITIONS.get(self.current_state, [])

    def transition_to(self, new_state: RoundState) -> bool:
        """
        转换到新状态

        Args:
            new_state: 新状态

        Returns:
            bool: 转换是否成功，无效转换返回 False 且状态不变
        """
        if not self.can_transition_to(new_state):
            logger.debug(f"拒绝状态转换: {self.current_state} -> {new_state}")
            return False

        logger.debug(f"状态转换: {self.current_state} -> {new_state}")
        self.current_state = new_state
        return True

    def is_in_state(self, *states: RoundState) -> bool:
        """
        检查是否处于给定状态之一

        Args:
            states: 目标状态

        Returns:
            bool: 是否处于其中之一
        """
        return self.current_state in states

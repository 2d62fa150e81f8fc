"""
游戏规则实现
Game Rules Implementation
"""
from enum import Enum
from .move import Move
from ...utils.logger import setup_logger

logger = setup_logger("RPS.GameRules")


class Outcome(Enum):
    """回合结果枚举（以玩家视角）"""
    WIN = "Win"          # 玩家获胜
    LOSE = "Lose"        # 玩家失败
    DRAW = "Draw"        # 平局
    INVALID = "Invalid"  # 无效（任一方未识别）

    def __str__(self):
        return self.value

    @property
    def status_text(self) -> str:
        """界面显示的短状态文本（英文，本地化见 presentation.outcome_text）"""
        return self.value


class GameRules:
    """游戏规则类"""

    # 胜负规则：key胜value
    WIN_RULES = {
        Move.ROCK: Move.SCISSORS,      # 石头胜剪刀
        Move.PAPER: Move.ROCK,         # 布胜石头
        Move.SCISSORS: Move.PAPER      # 剪刀胜布
    }

    @staticmethod
    def judge(player_move: Move, machine_move: Move) -> Outcome:
        """
        判断回合结果

        任一方为 UNDEFINED 时结果为 INVALID，其余情况先判平局再查胜负表。

        Args:
            player_move: 玩家出拳
            machine_move: 机器出拳

        Returns:
            Outcome: 回合结果
        """
        if not player_move.is_defined or not machine_move.is_defined:
            logger.debug(f"无效出拳: 玩家={player_move}, 机器={machine_move}")
            return Outcome.INVALID

        if player_move == machine_move:
            logger.debug(f"平局: {player_move}")
            return Outcome.DRAW

        if GameRules.WIN_RULES[player_move] == machine_move:
            logger.debug(f"玩家获胜: {player_move} 胜 {machine_move}")
            return Outcome.WIN

        logger.debug(f"机器获胜: {machine_move} 胜 {player_move}")
        return Outcome.LOSE


def judge(player_move: Move, machine_move: Move) -> Outcome:
    """GameRules.judge 的模块级快捷方式"""
    return GameRules.judge(player_move, machine_move)

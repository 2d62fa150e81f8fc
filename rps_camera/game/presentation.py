"""
界面展示接口
Presentation Layer Interface

回合控制器在事件分发线程上调用 RoundPresenter；QueuePresenter 把这些
调用转成消息放进线程安全队列，由界面线程取出渲染。
"""
import queue
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional
from .game_logic import Move, Outcome
from .state_machine import RoundState

# 回合结果的本地化文本
OUTCOME_TEXTS = {
    'en': {
        Outcome.WIN: "Win",
        Outcome.LOSE: "Lose",
        Outcome.DRAW: "Draw",
        Outcome.INVALID: "Invalid",
    },
    'es': {
        Outcome.WIN: "Ganaste",
        Outcome.LOSE: "Perdiste",
        Outcome.DRAW: "Empate",
        Outcome.INVALID: "Juego no válido",
    },
    'zh': {
        Outcome.WIN: "你赢了",
        Outcome.LOSE: "你输了",
        Outcome.DRAW: "平局",
        Outcome.INVALID: "无效",
    },
}
DEFAULT_LANGUAGE = 'en'


def outcome_text(outcome: Outcome, language: str = DEFAULT_LANGUAGE) -> str:
    """
    获取回合结果的显示文本

    Args:
        outcome: 回合结果
        language: 语言代码，未知语言使用英文

    Returns:
        str: 显示文本
    """
    texts = OUTCOME_TEXTS.get((language or DEFAULT_LANGUAGE).lower(), OUTCOME_TEXTS[DEFAULT_LANGUAGE])
    return texts[outcome]


class RoundPresenter:
    """界面层回调接口，默认实现什么都不做"""

    def on_state_changed(self, state: RoundState):
        """回合状态改变"""

    def on_countdown(self, remaining: int):
        """倒计时剩余秒数"""

    def on_machine_move(self, move: Move):
        """机器出拳已确定，界面定格显示对应图片"""

    def on_outcome(self, outcome: Outcome, status_text: str, player_move: Move):
        """回合判定完成"""

    def on_error(self, message: str, code: int):
        """分类器错误，原样提示给玩家"""


class UiUpdateKind(Enum):
    """界面更新消息类型"""
    STATE = "state"
    COUNTDOWN = "countdown"
    MACHINE_MOVE = "machine_move"
    OUTCOME = "outcome"
    ERROR = "error"


@dataclass(frozen=True)
class UiUpdate:
    """界面更新消息"""
    kind: UiUpdateKind
    payload: Any


class QueuePresenter(RoundPresenter):
    """把回调转成 UiUpdate 消息，跨线程交给界面线程"""

    def __init__(self, maxsize: int = 0):
        self._queue: "queue.Queue[UiUpdate]" = queue.Queue(maxsize=maxsize)

    def on_state_changed(self, state: RoundState):
        self._put(UiUpdateKind.STATE, state)

    def on_countdown(self, remaining: int):
        self._put(UiUpdateKind.COUNTDOWN, remaining)

    def on_machine_move(self, move: Move):
        self._put(UiUpdateKind.MACHINE_MOVE, move)

    def on_outcome(self, outcome: Outcome, status_text: str, player_move: Move):
        self._put(UiUpdateKind.OUTCOME, (outcome, status_text, player_move))

    def on_error(self, message: str, code: int):
        self._put(UiUpdateKind.ERROR, (message, code))

    def _put(self, kind: UiUpdateKind, payload: Any):
        self._queue.put(UiUpdate(kind, payload))

    def drain(self, limit: Optional[int] = None) -> List[UiUpdate]:
        """
        取出所有待处理的消息（界面线程调用，不阻塞）

        Args:
            limit: 最多取出的条数

        Returns:
            List[UiUpdate]: 按产生顺序排列的消息
        """
        updates = []
        while limit is None or len(updates) < limit:
            try:
                updates.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return updates

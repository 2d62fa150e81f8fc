"""
倒计时器
Countdown Timer
"""
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional
from ..utils.logger import setup_logger

logger = setup_logger("RPS.Countdown")

TickCallback = Callable[[int], None]
FinishCallback = Callable[[], None]


class CountdownTimer(ABC):
    """倒计时器抽象基类"""

    @abstractmethod
    def start(self, ticks: int, interval: float,
              on_tick: TickCallback, on_finish: FinishCallback):
        """
        开始倒计时

        依次以剩余数 ticks, ticks-1, ..., 1 调用 on_tick，每次之后等待
        interval 秒，全部结束后调用一次 on_finish。

        Args:
            ticks: 总拍数
            interval: 每拍间隔（秒）
            on_tick: 每拍回调，参数为剩余拍数
            on_finish: 结束回调
        """

    @abstractmethod
    def cancel(self):
        """取消倒计时，被取消的计时器不再调用 on_finish"""


class ThreadedCountdownTimer(CountdownTimer):
    """在守护线程中运行的倒计时器，可随时取消"""

    def __init__(self, name: str = "rps-countdown"):
        self._name = name
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self, ticks: int, interval: float,
              on_tick: TickCallback, on_finish: FinishCallback):
        if ticks < 1:
            raise ValueError("ticks 必须至少为 1")
        if interval < 0:
            raise ValueError("interval 不能为负数")

        self.cancel()
        cancelled = threading.Event()
        self._cancelled = cancelled
        self._thread = threading.Thread(
            target=self._run,
            args=(cancelled, ticks, interval, on_tick, on_finish),
            name=self._name,
            daemon=True
        )
        self._thread.start()

    def cancel(self):
        self._cancelled.set()

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @staticmethod
    def _run(cancelled: threading.Event, ticks: int, interval: float,
             on_tick: TickCallback, on_finish: FinishCallback):
        for remaining in range(ticks, 0, -1):
            if cancelled.is_set():
                return
            try:
                on_tick(remaining)
            except Exception as e:
                logger.error(f"倒计时回调异常: {e}", exc_info=True)
            if cancelled.wait(interval):
                return

        if not cancelled.is_set():
            try:
                on_finish()
            except Exception as e:
                logger.error(f"倒计时结束回调异常: {e}", exc_info=True)

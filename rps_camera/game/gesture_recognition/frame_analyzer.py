"""
帧分析器
Frame Analyzer - 在后台线程中把最新的摄像头帧交给分类器

分类器跟不上帧率时只保留最新的一帧，旧帧直接丢弃。
"""
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional
import numpy as np
from .frame_classifier import FrameClassifier
from ...utils.logger import setup_logger

logger = setup_logger("RPS.FrameAnalyzer")


@dataclass
class AnalyzerStatistics:
    """帧分析统计"""
    submitted: int = 0
    analyzed: int = 0
    dropped: int = 0

    def to_dict(self) -> dict:
        return {
            'submitted': self.submitted,
            'analyzed': self.analyzed,
            'dropped': self.dropped
        }


class FrameAnalyzer:
    """单线程帧分析器，带一个只保留最新帧的缓冲槽"""

    def __init__(self, classifier: FrameClassifier,
                 clock: Callable[[], float] = time.monotonic,
                 name: str = "rps-frame-analyzer"):
        """
        Args:
            classifier: 帧分类器
            clock: 时钟函数（秒），用于生成帧时间戳
            name: 工作线程名称
        """
        self.classifier = classifier
        self._clock = clock
        self._name = name
        self._condition = threading.Condition()
        self._pending: Optional[np.ndarray] = None
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._last_timestamp_ms = -1
        self._stats = AnalyzerStatistics()

    def start(self):
        """启动工作线程"""
        with self._condition:
            if self._running:
                logger.warning("帧分析器已在运行")
                return
            self._running = True

        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        logger.info("帧分析器已启动")

    def stop(self, timeout: Optional[float] = 5.0):
        """
        停止工作线程并等待其结束，未处理的帧被丢弃

        Args:
            timeout: 等待线程结束的秒数
        """
        with self._condition:
            if not self._running:
                return
            self._running = False
            if self._pending is not None:
                self._pending = None
                self._stats.dropped += 1
            self._condition.notify_all()

        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("帧分析线程未在超时时间内结束")
            self._thread = None
        logger.info(f"帧分析器已停止: {self._stats.to_dict()}")

    def is_running(self) -> bool:
        return self._running

    def submit_frame(self, frame: np.ndarray) -> bool:
        """
        提交一帧，不阻塞

        Args:
            frame: BGR 图像

        Returns:
            bool: 是否被接受（分析器未运行时返回 False）
        """
        with self._condition:
            if not self._running:
                return False
            if self._pending is not None:
                self._stats.dropped += 1
            self._pending = frame
            self._stats.submitted += 1
            self._condition.notify()
        return True

    def get_statistics(self) -> AnalyzerStatistics:
        """获取统计信息副本"""
        with self._condition:
            return AnalyzerStatistics(**self._stats.to_dict())

    def _next_timestamp(self) -> int:
        timestamp_ms = int(self._clock() * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms
        return timestamp_ms

    def _take_frame(self) -> Optional[np.ndarray]:
        """等待下一帧，停止时返回 None"""
        with self._condition:
            while self._running and self._pending is None:
                self._condition.wait()
            if not self._running:
                return None
            frame, self._pending = self._pending, None
            return frame

    def _run(self):
        while True:
            frame = self._take_frame()
            if frame is None:
                break
            try:
                self.classifier.submit(frame, self._next_timestamp())
            except Exception as e:
                logger.error(f"帧分析异常: {e}", exc_info=True)
                self.classifier.report_error(e)
            with self._condition:
                self._stats.analyzed += 1

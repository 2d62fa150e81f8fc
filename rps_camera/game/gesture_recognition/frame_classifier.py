"""
帧分类器抽象基类
Frame Classifier Base Class
"""
import time
from abc import ABC, abstractmethod
from typing import Optional
import numpy as np
from .classification_result import ClassificationResult, ClassifierError
from ...utils.exceptions import ClassifierException
from ...utils.logger import setup_logger

logger = setup_logger("RPS.FrameClassifier")


class ClassifierListener:
    """分类结果监听器，回调在分类器的工作线程上执行"""

    def on_results(self, result: ClassificationResult):
        """收到一帧的分类结果"""

    def on_error(self, error: ClassifierError):
        """分类器报告错误"""


class FrameClassifier(ABC):
    """
    帧分类器抽象基类，定义所有手势分类后端必须实现的接口

    同步后端只需实现 classify()；基类的 submit() 负责计时并把结果
    或错误交给监听器。异步后端（如 MediaPipe 的 LIVE_STREAM 模式）
    重写 submit()，在自己的回调中通知监听器。
    """

    def __init__(self, listener: Optional[ClassifierListener] = None):
        self._listener = listener

    def set_listener(self, listener: Optional[ClassifierListener]):
        """
        设置结果监听器

        Args:
            listener: 监听器，None 表示丢弃结果
        """
        self._listener = listener

    @abstractmethod
    def setup(self):
        """
        加载模型、准备推理

        Raises:
            ClassifierException: 模型不可用
        """

    @abstractmethod
    def close(self):
        """释放模型资源"""

    @abstractmethod
    def is_closed(self) -> bool:
        """模型是否已释放（或尚未加载）"""

    def classify(self, frame: np.ndarray) -> ClassificationResult:
        """
        同步分类一帧

        Args:
            frame: BGR 图像

        Returns:
            ClassificationResult: 按置信度排列的结果

        Raises:
            ClassifierException: 推理失败
        """
        raise NotImplementedError(f"{type(self).__name__} 不支持同步分类")

    def submit(self, frame: np.ndarray, timestamp_ms: int):
        """
        提交一帧进行分类，结果通过监听器返回

        Args:
            frame: BGR 图像
            timestamp_ms: 帧时间戳（毫秒，单调递增）
        """
        if self.is_closed():
            logger.debug("分类器已关闭，丢弃帧")
            return

        start = time.perf_counter()
        try:
            result = self.classify(frame)
        except ClassifierException as e:
            logger.warning(f"分类失败: {e.message}")
            self._notify_error(e.to_error())
            return
        except Exception as e:
            logger.warning(f"分类异常: {e}")
            self.report_error(e)
            return

        result = ClassificationResult(
            categories=result.categories,
            timestamp_ms=timestamp_ms,
            inference_time_ms=(time.perf_counter() - start) * 1000.0
        )
        self._notify_results(result)

    def report_error(self, exc: Exception):
        """
        把分类过程中的任意异常作为 ClassifierError 交给监听器

        Args:
            exc: 异常对象，ClassifierException 保留其错误码
        """
        if isinstance(exc, ClassifierException):
            self._notify_error(exc.to_error())
        else:
            self._notify_error(ClassifierError(message=str(exc) or type(exc).__name__))

    def _notify_results(self, result: ClassificationResult):
        if self._listener is None:
            return
        try:
            self._listener.on_results(result)
        except Exception as e:
            logger.error(f"分类结果回调异常: {e}", exc_info=True)

    def _notify_error(self, error: ClassifierError):
        if self._listener is None:
            return
        try:
            self._listener.on_error(error)
        except Exception as e:
            logger.error(f"分类错误回调异常: {e}", exc_info=True)

    def get_info(self) -> dict:
        """
        获取分类器信息（可选实现）

        Returns:
            dict: 信息字典
        """
        return {
            'type': self.__class__.__name__,
            'closed': self.is_closed()
        }

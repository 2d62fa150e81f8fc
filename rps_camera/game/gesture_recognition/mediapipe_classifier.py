"""
MediaPipe 手势分类器
Gesture Classifier using the MediaPipe Tasks GestureRecognizer (LIVE_STREAM)
"""
import threading
from pathlib import Path
from typing import Optional
import cv2
import numpy as np
from .classification_result import ClassificationResult, ranked
from .frame_classifier import FrameClassifier, ClassifierListener
from ...utils.exceptions import ClassifierException
from ...utils.logger import setup_logger

logger = setup_logger("RPS.MediaPipeClassifier")

try:
    import mediapipe as mp
    from mediapipe.tasks import python as mp_python
    from mediapipe.tasks.python import vision
    MEDIAPIPE_AVAILABLE = True
except ImportError as e:
    logger.debug(f"mediapipe 未安装: {e}")
    MEDIAPIPE_AVAILABLE = False
    mp = None
    mp_python = None
    vision = None

DEFAULT_MODEL_NAME = "gesture_recognizer.task"

DELEGATE_CPU = "cpu"
DELEGATE_GPU = "gpu"

# MediaPipe 内置手势模型的类别名 -> 标准标签
CANNED_LABELS = {
    'Closed_Fist': 'Rock',
    'Open_Palm': 'Paper',
    'Victory': 'Scissors',
}


class MediaPipeGestureClassifier(FrameClassifier):
    """基于 MediaPipe GestureRecognizer 的异步手势分类器"""

    def __init__(self,
                 model_path: Optional[str] = None,
                 min_hand_detection_confidence: float = 0.5,
                 min_hand_tracking_confidence: float = 0.5,
                 min_hand_presence_confidence: float = 0.5,
                 delegate: str = DELEGATE_CPU,
                 models_dir: Optional[str] = None,
                 listener: Optional[ClassifierListener] = None):
        """
        Args:
            model_path: .task 模型文件路径，None 时使用 models/gesture_recognizer.task
            min_hand_detection_confidence: 手部检测最小置信度
            min_hand_tracking_confidence: 手部跟踪最小置信度
            min_hand_presence_confidence: 手部存在最小置信度
            delegate: 推理设备（cpu/gpu）
            models_dir: 默认模型目录
            listener: 结果监听器
        """
        super().__init__(listener)
        models_dir = Path(models_dir) if models_dir else Path.cwd() / "models"
        self.model_path = Path(model_path) if model_path else models_dir / DEFAULT_MODEL_NAME
        self.min_hand_detection_confidence = min_hand_detection_confidence
        self.min_hand_tracking_confidence = min_hand_tracking_confidence
        self.min_hand_presence_confidence = min_hand_presence_confidence
        self.delegate = delegate.lower()
        self._recognizer = None
        self._lock = threading.Lock()

    def setup(self):
        """创建 LIVE_STREAM 模式的 GestureRecognizer"""
        if not MEDIAPIPE_AVAILABLE:
            raise ClassifierException("mediapipe 未安装，请运行: pip install mediapipe")

        with self._lock:
            if self._recognizer is not None:
                return

            if not self.model_path.exists():
                raise ClassifierException(f"手势模型文件不存在: {self.model_path}")

            delegate = (mp_python.BaseOptions.Delegate.GPU if self.delegate == DELEGATE_GPU
                        else mp_python.BaseOptions.Delegate.CPU)
            options = vision.GestureRecognizerOptions(
                base_options=mp_python.BaseOptions(
                    model_asset_path=str(self.model_path),
                    delegate=delegate
                ),
                running_mode=vision.RunningMode.LIVE_STREAM,
                min_hand_detection_confidence=self.min_hand_detection_confidence,
                min_tracking_confidence=self.min_hand_tracking_confidence,
                min_hand_presence_confidence=self.min_hand_presence_confidence,
                result_callback=self._on_result
            )

            try:
                self._recognizer = vision.GestureRecognizer.create_from_options(options)
            except Exception as e:
                code = (ClassifierException.GPU_ERROR if self.delegate == DELEGATE_GPU
                        else ClassifierException.OTHER_ERROR)
                raise ClassifierException(
                    f"手势识别器初始化失败: {e}", error_code=code) from e

        logger.info(f"MediaPipe 手势识别器初始化成功: {self.model_path} ({self.delegate})")

    def close(self):
        """关闭识别器并释放资源"""
        with self._lock:
            recognizer, self._recognizer = self._recognizer, None
        if recognizer is not None:
            recognizer.close()
            logger.info("MediaPipe 手势识别器已关闭")

    def is_closed(self) -> bool:
        return self._recognizer is None

    def submit(self, frame: np.ndarray, timestamp_ms: int):
        """
        异步提交一帧，结果在 MediaPipe 的回调线程中交给监听器

        Args:
            frame: BGR 图像
            timestamp_ms: 帧时间戳（毫秒，必须单调递增）
        """
        recognizer = self._recognizer
        if recognizer is None:
            logger.debug("识别器已关闭，丢弃帧")
            return

        try:
            rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)
            recognizer.recognize_async(mp_image, timestamp_ms)
        except Exception as e:
            logger.warning(f"提交识别失败: {e}")
            self.report_error(e)

    def _on_result(self, result, output_image, timestamp_ms: int):
        """MediaPipe 结果回调：取第一只手的类别作为分类结果"""
        self._notify_results(self.to_classification(result, timestamp_ms))

    @staticmethod
    def to_classification(result, timestamp_ms: Optional[int] = None) -> ClassificationResult:
        """
        把 GestureRecognizerResult 转换为 ClassificationResult

        Args:
            result: MediaPipe 识别结果（含 gestures 属性）
            timestamp_ms: 帧时间戳

        Returns:
            ClassificationResult: 第一只手的类别，按置信度排列；没有手时为空
        """
        gestures = getattr(result, 'gestures', None)
        if not gestures or not gestures[0]:
            return ClassificationResult.empty(timestamp_ms=timestamp_ms)

        pairs = [
            (CANNED_LABELS.get(category.category_name, category.category_name),
             min(1.0, max(0.0, float(category.score))))
            for category in gestures[0]
        ]
        return ClassificationResult(categories=ranked(pairs), timestamp_ms=timestamp_ms)

    def get_info(self) -> dict:
        info = super().get_info()
        info.update({
            'model_path': str(self.model_path),
            'delegate': self.delegate,
            'min_hand_detection_confidence': self.min_hand_detection_confidence,
            'min_hand_tracking_confidence': self.min_hand_tracking_confidence,
            'min_hand_presence_confidence': self.min_hand_presence_confidence,
        })
        return info

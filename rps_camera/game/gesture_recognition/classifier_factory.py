"""
手势分类器工厂
Gesture Classifier Factory

支持创建不同类型的分类器（YOLO、MediaPipe）
"""
from typing import Any, Dict, Optional
from .frame_classifier import FrameClassifier
from .yolo_classifier import YoloGestureClassifier, DEFAULT_HF_MODEL_ID
from .mediapipe_classifier import MediaPipeGestureClassifier, DELEGATE_CPU
from ...utils.logger import setup_logger

logger = setup_logger("RPS.ClassifierFactory")

SUPPORTED_TYPES = ('yolo', 'mediapipe')


class ClassifierFactory:
    """手势分类器工厂类"""

    @staticmethod
    def create_classifier(classifier_type: str = "yolo",
                          model_path: Optional[str] = None,
                          models_dir: Optional[str] = None,
                          **kwargs) -> FrameClassifier:
        """
        创建手势分类器（不加载模型，调用方负责 setup）

        Args:
            classifier_type: 分类器类型 ("yolo" 或 "mediapipe")
            model_path: 模型文件路径
            models_dir: 默认模型目录
            **kwargs: 传给具体分类器的参数

        Returns:
            FrameClassifier: 分类器实例

        Raises:
            ValueError: 不支持的分类器类型
        """
        classifier_type = (classifier_type or "").lower()

        if classifier_type == "yolo":
            logger.info("创建 YOLO 手势分类器")
            return YoloGestureClassifier(
                model_path=model_path,
                models_dir=models_dir,
                confidence_threshold=kwargs.get('confidence_threshold', 0.5),
                min_detection_confidence=kwargs.get('min_detection_confidence', 0.25),
                use_huggingface_model=kwargs.get('use_huggingface_model', True),
                hf_model_id=kwargs.get('hf_model_id') or DEFAULT_HF_MODEL_ID,
                device=kwargs.get('device')
            )

        if classifier_type == "mediapipe":
            logger.info("创建 MediaPipe 手势分类器")
            return MediaPipeGestureClassifier(
                model_path=model_path,
                models_dir=models_dir,
                min_hand_detection_confidence=kwargs.get('min_hand_detection_confidence', 0.5),
                min_hand_tracking_confidence=kwargs.get('min_hand_tracking_confidence', 0.5),
                min_hand_presence_confidence=kwargs.get('min_hand_presence_confidence', 0.5),
                delegate=kwargs.get('delegate') or DELEGATE_CPU
            )

        raise ValueError(
            f"不支持的分类器类型: {classifier_type}\n"
            f"支持的类型: {', '.join(SUPPORTED_TYPES)}"
        )

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> FrameClassifier:
        """
        从配置字典创建分类器

        Args:
            config: classifier 配置段

        Returns:
            FrameClassifier: 分类器实例
        """
        params = {k: v for k, v in config.items()
                  if k not in ('type', 'model_path', 'models_dir', 'label_aliases')}
        return ClassifierFactory.create_classifier(
            classifier_type=config.get('type', 'yolo'),
            model_path=config.get('model_path'),
            models_dir=config.get('models_dir'),
            **params
        )

"""
手势识别模块
Gesture Recognition Module
"""
from .classification_result import ClassificationResult, ClassifierError, ranked
from .frame_classifier import FrameClassifier, ClassifierListener
from .frame_analyzer import FrameAnalyzer, AnalyzerStatistics
from .yolo_classifier import YoloGestureClassifier, YOLO_AVAILABLE
from .mediapipe_classifier import MediaPipeGestureClassifier, MEDIAPIPE_AVAILABLE
from .classifier_factory import ClassifierFactory

__all__ = [
    'ClassificationResult',
    'ClassifierError',
    'ranked',
    'FrameClassifier',
    'ClassifierListener',
    'FrameAnalyzer',
    'AnalyzerStatistics',
    'YoloGestureClassifier',
    'YOLO_AVAILABLE',
    'MediaPipeGestureClassifier',
    'MEDIAPIPE_AVAILABLE',
    'ClassifierFactory'
]

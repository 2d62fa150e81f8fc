"""
YOLO 手势分类器
Gesture Classifier using an ultralytics YOLO detection model
"""
from pathlib import Path
from typing import Optional, Dict, List, Tuple
import numpy as np
from .classification_result import ClassificationResult, ranked
from .frame_classifier import FrameClassifier, ClassifierListener
from ...utils.exceptions import ClassifierException
from ...utils.logger import setup_logger

logger = setup_logger("RPS.YoloClassifier")

# PyTorch 2.6+ 默认 weights_only=True，需要在加载前登记 ultralytics 的模型类
try:
    import torch
    if hasattr(torch.serialization, 'add_safe_globals'):
        try:
            from ultralytics.nn.tasks import DetectionModel
            torch.serialization.add_safe_globals([DetectionModel])
        except ImportError:
            pass
except ImportError:
    torch = None

try:
    from ultralytics import YOLO
    YOLO_AVAILABLE = True
except ImportError as e:
    logger.debug(f"ultralytics 未安装: {e}")
    YOLO_AVAILABLE = False
    YOLO = None

try:
    from huggingface_hub import hf_hub_download
    HF_HUB_AVAILABLE = True
except ImportError:
    HF_HUB_AVAILABLE = False
    hf_hub_download = None

DEFAULT_HF_MODEL_ID = "lewiswatson/yolov8x-tuned-hand-gestures"
DEFAULT_HF_FILENAMES = ("weights/best.pt", "best.pt", "model.pt")

# 模型类别名中的关键字 -> 标准标签
LABEL_KEYWORDS = {
    'Rock': ('rock', 'fist', 'closed'),
    'Paper': ('paper', 'open', 'palm', 'five'),
    'Scissors': ('scissor', 'peace', 'victory', 'two'),
}


def normalize_label(class_name: str) -> str:
    """
    将模型输出的类别名称映射到标准标签（Rock/Paper/Scissors）

    Args:
        class_name: 模型类别名称

    Returns:
        str: 标准标签；无法映射时原样返回，由上层当作未识别处理
    """
    lowered = class_name.lower()
    for label, keywords in LABEL_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return label
    return class_name


class YoloGestureClassifier(FrameClassifier):
    """基于 YOLO 检测模型的同步手势分类器"""

    def __init__(self,
                 model_path: Optional[str] = None,
                 confidence_threshold: float = 0.5,
                 min_detection_confidence: float = 0.25,
                 use_huggingface_model: bool = True,
                 hf_model_id: str = DEFAULT_HF_MODEL_ID,
                 device: Optional[str] = None,
                 models_dir: Optional[str] = None,
                 listener: Optional[ClassifierListener] = None):
        """
        初始化分类器（不加载模型，见 setup）

        Args:
            model_path: 本地 .pt 模型路径
            confidence_threshold: 低于该置信度的检测框不计入结果
            min_detection_confidence: 传给 YOLO predict 的 conf 参数
            use_huggingface_model: 本地找不到模型时是否从 HuggingFace 下载
            hf_model_id: HuggingFace 模型仓库
            device: 计算设备（cuda/mps/cpu），None 时自动检测
            models_dir: 默认模型目录
            listener: 结果监听器
        """
        super().__init__(listener)
        self.model_path = model_path
        self.confidence_threshold = confidence_threshold
        self.min_detection_confidence = min_detection_confidence
        self.use_huggingface_model = use_huggingface_model
        self.hf_model_id = hf_model_id
        self.device = device
        self.models_dir = Path(models_dir) if models_dir else Path.cwd() / "models"
        self.model = None
        self._model_file: Optional[str] = None

    def setup(self):
        """加载 YOLO 模型"""
        if not YOLO_AVAILABLE:
            raise ClassifierException("ultralytics 未安装，请运行: pip install ultralytics")

        if self.model is not None:
            return

        if self.device is None:
            self.device = self._detect_device()
        logger.info(f"使用设备: {self.device}")

        model_file = self._resolve_model_file()
        try:
            self.model = YOLO(model_file)
        except Exception as e:
            raise ClassifierException(f"加载模型失败: {model_file}: {e}") from e

        self._model_file = model_file
        logger.info(f"成功加载模型: {model_file}")

    def close(self):
        """释放模型"""
        if self.model is not None:
            logger.info("YOLO 分类器已关闭")
        self.model = None

    def is_closed(self) -> bool:
        return self.model is None

    def _detect_device(self) -> str:
        """
        自动检测可用的计算设备（GPU/CPU）

        Returns:
            str: 设备名称 ('cuda', 'mps', 'cpu')
        """
        if torch is None:
            logger.warning("PyTorch 未安装，使用 CPU")
            return 'cpu'
        if torch.cuda.is_available():
            logger.info(f"检测到 GPU: {torch.cuda.get_device_name(0)}")
            return 'cuda'
        if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
            logger.info("检测到 Apple Silicon GPU (MPS)")
            return 'mps'
        logger.info("未检测到 GPU，使用 CPU")
        return 'cpu'

    def _resolve_model_file(self) -> str:
        """
        确定模型文件：显式路径 > models 目录中的默认文件 > HuggingFace 下载

        Raises:
            ClassifierException: 找不到可用模型
        """
        if self.model_path:
            path = Path(self.model_path)
            if path.exists():
                return str(path)
            logger.warning(f"模型文件不存在: {self.model_path}，尝试从默认位置查找")

        for candidate in (
            self.models_dir / "yolov8x-tuned-hand-gestures.pt",
            self.models_dir / "best.pt",
            self.models_dir / "weights" / "best.pt",
        ):
            if candidate.exists():
                logger.info(f"找到本地模型文件: {candidate}")
                return str(candidate)

        if self.use_huggingface_model:
            downloaded = self._download_huggingface_model(self.hf_model_id)
            if downloaded:
                return downloaded

        raise ClassifierException(
            "找不到手势模型。请将模型放到 models/ 目录，"
            f"或安装 huggingface_hub 以自动下载 {self.hf_model_id}"
        )

    def _download_huggingface_model(self, model_id: str) -> Optional[str]:
        """
        从 HuggingFace 下载模型文件

        Args:
            model_id: HuggingFace 模型ID

        Returns:
            Optional[str]: 下载的模型文件路径，失败返回 None
        """
        if not HF_HUB_AVAILABLE:
            logger.error("huggingface_hub 未安装，无法下载模型")
            return None

        logger.info(f"正在从 HuggingFace 下载模型: {model_id}")
        for filename in DEFAULT_HF_FILENAMES:
            try:
                model_path = hf_hub_download(repo_id=model_id, filename=filename)
                logger.info(f"成功下载模型文件: {model_path}")
                return model_path
            except Exception as e:
                logger.debug(f"尝试下载 {filename} 失败: {e}")

        logger.error(f"无法从 HuggingFace 下载模型: {model_id}")
        return None

    def classify(self, frame: np.ndarray) -> ClassificationResult:
        """
        对一帧运行检测，返回按置信度排列的标签

        同一标签的多个检测框只保留最高置信度。

        Args:
            frame: BGR 图像

        Returns:
            ClassificationResult: 分类结果
        """
        if self.model is None:
            raise ClassifierException("分类器未初始化")

        try:
            results = self.model.predict(
                frame,
                conf=self.min_detection_confidence,
                verbose=False,
                device=self.device
            )
        except Exception as e:
            raise ClassifierException(f"手势识别异常: {e}") from e

        return ClassificationResult(categories=self._categories_from_results(results))

    def _categories_from_results(self, results) -> Tuple[Tuple[str, float], ...]:
        """从 YOLO 检测结果中提取 (标签, 置信度)"""
        if len(results) == 0:
            return ()

        boxes = getattr(results[0], 'boxes', None)
        if boxes is None or len(boxes) == 0:
            return ()

        confidences = boxes.conf.cpu().numpy()
        class_ids = boxes.cls.cpu().numpy().astype(int)
        class_names: Dict[int, str] = getattr(results[0], 'names', None) or {}

        best: Dict[str, float] = {}
        for class_id, confidence in zip(class_ids, confidences):
            confidence = float(confidence)
            if confidence < self.confidence_threshold:
                continue
            label = normalize_label(class_names.get(int(class_id), f"class_{class_id}"))
            best[label] = max(best.get(label, 0.0), confidence)

        pairs: List[Tuple[str, float]] = list(best.items())
        return ranked(pairs)

    def get_info(self) -> dict:
        info = super().get_info()
        info.update({
            'model_file': self._model_file,
            'confidence_threshold': self.confidence_threshold,
            'min_detection_confidence': self.min_detection_confidence,
            'device': self.device,
        })
        return info

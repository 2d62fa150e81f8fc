"""
USB摄像头实现
USB Camera Implementation
"""
import cv2
import numpy as np
from typing import Optional, Tuple
from ...base.camera_base import CameraBase
from ....utils.logger import setup_logger

logger = setup_logger("RPS.USBCamera")


class USBCamera(CameraBase):
    """基于 OpenCV VideoCapture 的 USB 摄像头"""

    def __init__(self, device_id: int = 0, width: int = 640, height: int = 480,
                 fps: int = 30, mirror: bool = True, backend: Optional[int] = None):
        """
        初始化USB摄像头

        Args:
            device_id: 摄像头设备ID（默认0）
            width: 图像宽度（默认640）
            height: 图像高度（默认480）
            fps: 帧率（默认30）
            mirror: 是否水平翻转（前置摄像头预览习惯）
            backend: OpenCV后端（可选，如cv2.CAP_V4L2）
        """
        self.device_id = device_id
        self.width = width
        self.height = height
        self.fps = fps
        self.mirror = mirror
        self.backend = backend
        self._cap: Optional[cv2.VideoCapture] = None
        self._connected = False
        self._current_resolution = (width, height)

        logger.info(f"初始化USB摄像头: device_id={device_id}, resolution={width}x{height}, fps={fps}")

    def connect(self) -> bool:
        """
        连接摄像头并读取一帧验证

        Returns:
            bool: 连接是否成功
        """
        if self._connected:
            logger.warning("摄像头已经连接")
            return True

        if self.backend is not None:
            self._cap = cv2.VideoCapture(self.device_id, self.backend)
        else:
            self._cap = cv2.VideoCapture(self.device_id)

        if not self._cap.isOpened():
            logger.error(f"无法打开摄像头设备: {self.device_id}")
            self._release()
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self._cap.set(cv2.CAP_PROP_FPS, self.fps)

        ret, _ = self._cap.read()
        if not ret:
            logger.error("摄像头连接测试失败：无法读取图像")
            self._release()
            return False

        self._current_resolution = (
            int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        )
        self._connected = True
        logger.info(f"摄像头连接成功: device_id={self.device_id}, "
                    f"实际分辨率={self._current_resolution[0]}x{self._current_resolution[1]}")
        return True

    def disconnect(self) -> bool:
        """断开摄像头连接"""
        if not self._connected:
            return True

        self._release()
        self._connected = False
        logger.info(f"摄像头已断开: device_id={self.device_id}")
        return True

    def _release(self):
        if self._cap is not None:
            self._cap.release()
            self._cap = None

    def is_connected(self) -> bool:
        """检查摄像头是否已连接且仍可用"""
        if not self._connected or self._cap is None:
            return False

        if not self._cap.isOpened():
            self._connected = False
            return False

        return True

    def capture_frame(self) -> Optional[np.ndarray]:
        """
        捕获一帧图像

        Returns:
            Optional[np.ndarray]: 图像数据（BGR格式），失败返回None
        """
        if not self.is_connected():
            logger.warning("摄像头未连接，无法捕获图像")
            return None

        ret, frame = self._cap.read()
        if not ret or frame is None:
            logger.warning("捕获图像失败")
            return None

        if self.mirror:
            frame = cv2.flip(frame, 1)
        return frame

    def get_resolution(self) -> Tuple[int, int]:
        """获取实际分辨率 (width, height)"""
        return self._current_resolution

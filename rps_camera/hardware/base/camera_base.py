"""
摄像头抽象基类
Camera Base Class
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple
import numpy as np


class CameraBase(ABC):
    """摄像头抽象基类，定义所有摄像头必须实现的接口"""

    @abstractmethod
    def connect(self) -> bool:
        """
        连接摄像头

        Returns:
            bool: 连接是否成功
        """

    @abstractmethod
    def disconnect(self) -> bool:
        """
        断开摄像头连接

        Returns:
            bool: 断开是否成功
        """

    @abstractmethod
    def is_connected(self) -> bool:
        """检查摄像头是否已连接"""

    @abstractmethod
    def capture_frame(self) -> Optional[np.ndarray]:
        """
        捕获一帧图像

        Returns:
            Optional[np.ndarray]: BGR 图像数据，失败返回None
        """

    @abstractmethod
    def get_resolution(self) -> Tuple[int, int]:
        """
        获取摄像头分辨率

        Returns:
            Tuple[int, int]: (width, height)
        """

    def get_status(self) -> dict:
        """
        获取摄像头状态信息

        Returns:
            dict: 状态信息字典
        """
        resolution = self.get_resolution() if self.is_connected() else (0, 0)
        return {
            "connected": self.is_connected(),
            "resolution": resolution,
            "type": self.__class__.__name__
        }

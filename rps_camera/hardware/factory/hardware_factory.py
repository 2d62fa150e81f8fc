"""
硬件工厂类
Hardware Factory Class
"""
from typing import Dict, Any
from ..base.camera_base import CameraBase


class HardwareFactory:
    """硬件工厂类，按名称创建已注册的摄像头实例"""

    _camera_classes: Dict[str, type] = {}

    @classmethod
    def register_camera(cls, name: str, camera_class: type):
        """
        注册摄像头类

        Args:
            name: 摄像头名称（如 'usb_camera'）
            camera_class: 摄像头类（必须继承自CameraBase）
        """
        if not issubclass(camera_class, CameraBase):
            raise TypeError(f"{camera_class} must be a subclass of CameraBase")
        cls._camera_classes[name.lower()] = camera_class

    @classmethod
    def create_camera(cls, name: str, config: Dict[str, Any]) -> CameraBase:
        """
        创建摄像头实例

        Args:
            name: 摄像头名称
            config: 构造参数

        Returns:
            CameraBase: 摄像头实例

        Raises:
            ValueError: 未注册的摄像头名称
        """
        name_lower = name.lower()
        if name_lower not in cls._camera_classes:
            raise ValueError(f"Unknown camera: {name}")
        return cls._camera_classes[name_lower](**config)

    @classmethod
    def create_camera_from_config(cls, config: Dict[str, Any]) -> CameraBase:
        """
        根据 camera 配置段创建摄像头（type 字段指定类型）

        Args:
            config: camera 配置段

        Returns:
            CameraBase: 摄像头实例
        """
        camera_type = config.get('type', 'usb_camera')
        params = {k: v for k, v in config.items() if k != 'type'}
        return cls.create_camera(camera_type, params)

    @classmethod
    def get_available_cameras(cls) -> list:
        """获取已注册的摄像头名称"""
        return sorted(cls._camera_classes)

"""
硬件抽象层模块
Hardware Abstraction Layer
"""
from .base import CameraBase
from .factory import HardwareFactory
from .implementations.camera import USBCamera

__all__ = [
    'CameraBase',
    'HardwareFactory',
    'USBCamera'
]

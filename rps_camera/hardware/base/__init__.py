"""
硬件抽象基类
Hardware Base Classes
"""
from .camera_base import CameraBase

__all__ = ['CameraBase']

"""
硬件工厂模块
Hardware Factory Module
"""
from .hardware_factory import HardwareFactory

__all__ = ['HardwareFactory']

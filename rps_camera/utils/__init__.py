"""
工具类模块
Utility Classes
"""
from .logger import setup_logger, setup_logger_from_config, get_log_level, set_global_level
from .config_loader import ConfigLoader, DEFAULT_CONFIG, merge_config
from .error_handler import ErrorHandler, global_error_handler
from .exceptions import (
    HardwareException,
    CameraException,
    ClassifierException,
    GameException,
    ConfigurationException
)

__all__ = [
    'setup_logger',
    'setup_logger_from_config',
    'get_log_level',
    'set_global_level',
    'ConfigLoader',
    'DEFAULT_CONFIG',
    'merge_config',
    'ErrorHandler',
    'global_error_handler',
    'HardwareException',
    'CameraException',
    'ClassifierException',
    'GameException',
    'ConfigurationException'
]

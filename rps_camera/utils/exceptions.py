"""
自定义异常类
Custom Exception Classes
"""
from typing import Optional


class HardwareException(Exception):
    """硬件相关异常基类"""
    def __init__(self, message: str, hardware_type: Optional[str] = None):
        super().__init__(message)
        self.hardware_type = hardware_type
        self.message = message


class CameraException(HardwareException):
    """摄像头异常"""
    def __init__(self, message: str, error_code: Optional[int] = None):
        super().__init__(message, hardware_type="camera")
        self.error_code = error_code


class ClassifierException(Exception):
    """手势分类器异常（模型不可用、推理失败等）"""

    # 与底层识别框架一致的通用错误码
    OTHER_ERROR = 0
    GPU_ERROR = 1

    def __init__(self, message: str, error_code: int = OTHER_ERROR):
        super().__init__(message)
        self.error_code = error_code
        self.message = message

    def to_error(self):
        """转换为交给界面层的 ClassifierError"""
        from ..game.gesture_recognition.classification_result import ClassifierError
        return ClassifierError(message=self.message, code=self.error_code)


class GameException(Exception):
    """游戏逻辑异常"""
    def __init__(self, message: str, game_state: Optional[str] = None):
        super().__init__(message)
        self.game_state = game_state
        self.message = message


class ConfigurationException(Exception):
    """配置异常"""
    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
        self.message = message
